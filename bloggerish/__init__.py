"""Bloggerish: a minimal blog with allow-list sanitized rich text."""

__version__ = "0.1.0"
