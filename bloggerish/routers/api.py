from fastapi import APIRouter, Depends, HTTPException, status
from typing import List

from bloggerish.models import BioUpdate, Comment, CommentCreate, Post, PostCreate, PostSummary, User
from bloggerish.store import BlogStore, get_store

router = APIRouter(prefix="/api", tags=["api"])


@router.get("/posts", response_model=List[PostSummary])
async def list_posts(store: BlogStore = Depends(get_store)):
    """List posts, newest first"""
    return [PostSummary.from_post(p) for p in store.list_posts()]


@router.get("/posts/{post_id}", response_model=Post)
async def get_post(post_id: int, store: BlogStore = Depends(get_store)):
    post = store.get_post(post_id)
    if not post:
        raise HTTPException(status_code=404, detail="Post not found")
    return post


@router.post("/posts", response_model=Post, status_code=status.HTTP_201_CREATED)
async def create_post(data: PostCreate, store: BlogStore = Depends(get_store)):
    """Create a post; content is sanitized before it is stored"""
    return store.create_post(title=data.title, author=data.author, content=data.content)


@router.post("/posts/{post_id}/comments", response_model=Comment, status_code=status.HTTP_201_CREATED)
async def add_comment(post_id: int, data: CommentCreate, store: BlogStore = Depends(get_store)):
    comment = store.add_comment(post_id, data.author, data.content)
    if comment is None:
        raise HTTPException(status_code=404, detail="Post not found")
    return comment


@router.get("/users/{username}", response_model=User)
async def get_user(username: str, store: BlogStore = Depends(get_store)):
    user = store.get_user(username)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return user


@router.put("/users/{username}/bio", response_model=User)
async def update_bio(username: str, data: BioUpdate, store: BlogStore = Depends(get_store)):
    user = store.update_bio(username, data.bio)
    if user is None:
        raise HTTPException(status_code=404, detail="User not found")
    return user
