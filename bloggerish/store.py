"""Process-memory storage for users and posts.

Nothing here survives a restart. Rich text is sanitized before it is stored,
so everything a repository hands back is already safe to render.
"""

from typing import Callable, Dict, Generic, Hashable, List, Optional, Protocol, TypeVar
import logging

from bloggerish.models import Comment, Post, User
from bloggerish.utils.sanitize import sanitize

logger = logging.getLogger(__name__)

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


class Repository(Protocol[K, V]):
    def get(self, key: K) -> Optional[V]: ...

    def list(self) -> List[V]: ...

    def upsert(self, value: V) -> V: ...


class InMemoryRepository(Generic[K, V]):
    """Dict-backed repository keyed by ``key``, iterating in insertion order."""

    def __init__(self, key: Callable[[V], K]):
        self._key = key
        self._items: Dict[K, V] = {}

    def get(self, key: K) -> Optional[V]:
        return self._items.get(key)

    def list(self) -> List[V]:
        return list(self._items.values())

    def upsert(self, value: V) -> V:
        self._items[self._key(value)] = value
        return value

    def clear(self) -> None:
        self._items.clear()


def _sanitize_on_write(text: str, policy: str, what: str) -> str:
    cleaned = sanitize(text, policy)
    if cleaned != text:
        logger.info(f"Sanitized {what} with policy {policy!r} ({len(text)} -> {len(cleaned)} chars)")
    return cleaned


class BlogStore:
    def __init__(self):
        self.users: InMemoryRepository[str, User] = InMemoryRepository(key=lambda u: u.username)
        self.posts: InMemoryRepository[int, Post] = InMemoryRepository(key=lambda p: p.id)
        self._next_post_id = 1
        self._next_comment_id = 1
        self.reset()

    def reset(self) -> None:
        """Drop everything and load the welcome content."""
        self.users.clear()
        self.posts.clear()
        self._next_post_id = 1
        self._next_comment_id = 1

        self.ensure_user("Admin")
        self.update_bio("Admin", "<b>Welcome to Bloggerish!</b> This is the admin account.")
        welcome = self.create_post(
            title="Welcome to Bloggerish!",
            author="Admin",
            content="This is your first blog post. Feel free to add more posts and comments!",
        )
        self.add_comment(welcome.id, "Guest", "Great start! Looking forward to more posts.")

    # Users

    def get_user(self, username: str) -> Optional[User]:
        return self.users.get(username)

    def list_users(self) -> List[User]:
        return self.users.list()

    def ensure_user(self, username: str) -> User:
        user = self.users.get(username)
        if user is None:
            user = self.users.upsert(User(username=username, bio=""))
            logger.info(f"Created user {username!r}")
        return user

    def update_bio(self, username: str, bio: str) -> Optional[User]:
        user = self.users.get(username)
        if user is None:
            return None
        cleaned = _sanitize_on_write(bio or "", "bio", f"bio of {username!r}")
        return self.users.upsert(user.model_copy(update={"bio": cleaned}))

    # Posts

    def list_posts(self) -> List[Post]:
        """All posts, newest first."""
        return sorted(self.posts.list(), key=lambda p: p.id, reverse=True)

    def get_post(self, post_id: int) -> Optional[Post]:
        return self.posts.get(post_id)

    def create_post(self, title: str, author: str, content: str) -> Post:
        self.ensure_user(author)
        post = Post(
            id=self._next_post_id,
            title=title,
            author=author,
            content=_sanitize_on_write(content, "post", f"new post by {author!r}"),
        )
        self._next_post_id += 1
        return self.posts.upsert(post)

    def add_comment(self, post_id: int, author: str, content: str) -> Optional[Comment]:
        post = self.posts.get(post_id)
        if post is None:
            return None
        self.ensure_user(author)
        comment = Comment(
            id=self._next_comment_id,
            author=author,
            content=_sanitize_on_write(content, "comment", f"comment by {author!r} on post {post_id}"),
        )
        self._next_comment_id += 1
        post.comments.append(comment)
        return comment

    def search_posts(self, query: str) -> List[Post]:
        """Case-insensitive substring match on title and content."""
        if not query:
            return []
        needle = query.lower()
        return [
            post for post in self.list_posts()
            if needle in post.title.lower() or needle in post.content.lower()
        ]


store = BlogStore()


def get_store() -> BlogStore:
    return store
