from pydantic import BaseModel, Field
from datetime import datetime
from typing import List

from bloggerish.config import MAX_INPUT_LENGTH


def utcnow() -> datetime:
    return datetime.utcnow()


# Records held by the store. Rich text fields (bio, content) are stored sanitized.
class User(BaseModel):
    username: str
    bio: str = ""


class Comment(BaseModel):
    id: int
    author: str
    content: str
    timestamp: datetime = Field(default_factory=utcnow)


class Post(BaseModel):
    id: int
    title: str
    content: str
    author: str
    timestamp: datetime = Field(default_factory=utcnow)
    comments: List[Comment] = Field(default_factory=list)


# API payloads
class PostCreate(BaseModel):
    title: str = Field(min_length=1, max_length=MAX_INPUT_LENGTH)
    author: str = Field(min_length=1, max_length=MAX_INPUT_LENGTH)
    content: str = Field(min_length=1, max_length=MAX_INPUT_LENGTH)


class CommentCreate(BaseModel):
    author: str = Field(min_length=1, max_length=MAX_INPUT_LENGTH)
    content: str = Field(min_length=1, max_length=MAX_INPUT_LENGTH)


class BioUpdate(BaseModel):
    bio: str = Field("", max_length=MAX_INPUT_LENGTH)


class PostSummary(BaseModel):
    id: int
    title: str
    author: str
    timestamp: datetime
    comment_count: int

    @classmethod
    def from_post(cls, post: Post) -> "PostSummary":
        return cls(
            id=post.id,
            title=post.title,
            author=post.author,
            timestamp=post.timestamp,
            comment_count=len(post.comments),
        )
