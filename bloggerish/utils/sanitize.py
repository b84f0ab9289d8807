"""Allow-list sanitizer for user-supplied rich text.

Every piece of user text that ends up as HTML goes through ``sanitize`` with a
named policy. Disallowed tags are escaped so they render as literal text,
disallowed attributes are dropped, and link attributes with a scheme outside
the policy's protocols are removed. Output is stable under repeated passes, so
content sanitized on write can be sanitized again on render.
"""

from dataclasses import dataclass, field
from typing import Mapping, Optional, Union
import logging
import re

from markupsafe import Markup, escape
import bleach

logger = logging.getLogger(__name__)

# Never allowed, whatever a policy says
FORBIDDEN_TAGS = frozenset(["script", "style", "iframe", "object", "embed", "template"])
FORBIDDEN_PROTOCOLS = frozenset(["javascript", "data", "vbscript"])

DEFAULT_PROTOCOLS = frozenset(["http", "https"])


_URI_NOISE = re.compile(r"[`\000-\040\177-\240\s]+")


def _is_event_handler(name: str) -> bool:
    return name.lower().startswith("on")


def _has_forbidden_scheme(value: Optional[str]) -> bool:
    """True when an attribute value reads as a script-bearing URL, on any attribute."""
    if not value:
        return False
    normalized = _URI_NOISE.sub("", value).lower()
    scheme, sep, _ = normalized.partition(":")
    return bool(sep) and scheme in FORBIDDEN_PROTOCOLS


@dataclass(frozen=True)
class SanitizationPolicy:
    """A named allow-list of tags, per-tag attributes and URL schemes.

    ``attributes`` maps a tag name to the attribute names it may keep; the
    ``"*"`` key applies to every allowed tag.
    """

    name: str
    tags: frozenset = frozenset()
    attributes: Mapping[str, frozenset] = field(default_factory=dict)
    protocols: frozenset = DEFAULT_PROTOCOLS

    def __post_init__(self):
        tags = frozenset(t.lower() for t in self.tags)
        attributes = {
            tag.lower(): frozenset(a.lower() for a in names)
            for tag, names in self.attributes.items()
        }
        protocols = frozenset(p.lower() for p in self.protocols)

        unsafe_tags = tags & FORBIDDEN_TAGS
        if unsafe_tags:
            raise ValueError(f"Policy {self.name!r} allows unsafe tags: {sorted(unsafe_tags)}")
        for tag, names in attributes.items():
            handlers = sorted(n for n in names if _is_event_handler(n))
            if handlers:
                raise ValueError(f"Policy {self.name!r} allows event handlers on {tag!r}: {handlers}")
        unsafe_protocols = protocols & FORBIDDEN_PROTOCOLS
        if unsafe_protocols:
            raise ValueError(f"Policy {self.name!r} allows unsafe protocols: {sorted(unsafe_protocols)}")

        object.__setattr__(self, "tags", tags)
        object.__setattr__(self, "attributes", attributes)
        object.__setattr__(self, "protocols", protocols)

    def allows_attribute(self, tag: str, name: str, value: Optional[str] = None) -> bool:
        if _is_event_handler(name) or _has_forbidden_scheme(value):
            return False
        return name in self.attributes.get(tag, ()) or name in self.attributes.get("*", ())


INLINE_TAGS = ["b", "i", "em", "strong", "code", "a", "br"]

PLAIN = SanitizationPolicy(name="plain")

COMMENT = SanitizationPolicy(
    name="comment",
    tags=frozenset(INLINE_TAGS),
    attributes={"a": frozenset(["href", "title"])},
)

BIO = SanitizationPolicy(
    name="bio",
    tags=frozenset(["b", "i", "em", "strong", "a", "br", "ul", "ol", "li", "p"]),
    attributes={"a": frozenset(["href", "title", "target", "rel"])},
)

POST = SanitizationPolicy(
    name="post",
    tags=BIO.tags | frozenset(["blockquote", "pre", "code", "h2", "h3"]),
    attributes={"a": frozenset(["href", "title", "target", "rel"])},
)

POLICIES = {policy.name: policy for policy in (PLAIN, COMMENT, BIO, POST)}

PolicyRef = Union[SanitizationPolicy, str]


def register_policy(policy: SanitizationPolicy) -> SanitizationPolicy:
    """Make a policy selectable by name at call sites."""
    POLICIES[policy.name] = policy
    return policy


def get_policy(policy: PolicyRef) -> SanitizationPolicy:
    if isinstance(policy, SanitizationPolicy):
        return policy
    try:
        return POLICIES[policy]
    except KeyError:
        raise KeyError(f"Unknown sanitization policy: {policy!r}") from None


def sanitize(text: Optional[str], policy: PolicyRef) -> str:
    """Return ``text`` reduced to the markup ``policy`` allows.

    Never raises for any input. ``None`` becomes an empty string and anything
    the parser chokes on comes back fully escaped. An unknown policy name is a
    caller error and raises ``KeyError`` from ``get_policy``.
    """
    active = get_policy(policy)
    if text is None:
        return ""
    if not isinstance(text, str):
        text = str(text)
    if not text:
        return ""

    try:
        return bleach.clean(
            text,
            tags=active.tags,
            attributes=active.allows_attribute,
            protocols=active.protocols,
            strip=False,
            strip_comments=True,
        )
    except Exception:
        logger.exception(f"Sanitizer failed with policy {active.name!r}, escaping input")
        return str(escape(text))


def safe_html(text: Optional[str], policy: PolicyRef = "post") -> Markup:
    """Return sanitized HTML marked safe for Jinja rendering."""
    return Markup(sanitize(text, policy))


def plain_preview(text: Optional[str], limit: int = 200, policy: PolicyRef = "post") -> str:
    """Markup-free excerpt of rich text, for listings.

    The result is plain text; templates escape it again on output.
    """
    plain = Markup(sanitize(text, policy)).striptags()
    if len(plain) > limit:
        return plain[:limit] + "..."
    return plain
