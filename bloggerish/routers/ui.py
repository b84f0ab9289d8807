# bloggerish/routers/ui.py
from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates
from datetime import datetime
from pathlib import Path
from urllib.parse import quote
import logging

from bloggerish.config import BASE_PATH, MAX_INPUT_LENGTH, PREVIEW_LENGTH
from bloggerish.services.search_service import SearchService
from bloggerish.store import BlogStore, get_store
from bloggerish.utils.sanitize import plain_preview, safe_html

logger = logging.getLogger(__name__)

router = APIRouter(tags=["ui"])
search_service = SearchService()

templates_dir = Path(__file__).parent.parent / "templates"
templates = Jinja2Templates(directory=str(templates_dir))


def date_filter(value: datetime) -> str:
    """Format a timestamp as 'Jan 05, 2026'"""
    if value is None:
        return ""
    return value.strftime("%b %d, %Y")


def preview_filter(text: str, limit: int = PREVIEW_LENGTH) -> str:
    return plain_preview(text, limit=limit)


templates.env.filters["richtext"] = safe_html
templates.env.filters["preview"] = preview_filter
templates.env.filters["date"] = date_filter
templates.env.globals["base_path"] = BASE_PATH
templates.env.globals["max_input_length"] = MAX_INPUT_LENGTH


def render(request: Request, name: str, context: dict = None, status_code: int = 200):
    return templates.TemplateResponse(request, name, context or {}, status_code=status_code)


def error_page(request: Request, status_code: int, message: str):
    logger.info(f"{request.method} {request.url.path} -> {status_code}: {message}")
    return render(request, "error.html", {"message": message}, status_code=status_code)


def too_long(**fields: str):
    """Name of the first field over the input cap, if any."""
    for name, value in fields.items():
        if value is not None and len(value) > MAX_INPUT_LENGTH:
            return name
    return None


@router.get("/", response_class=HTMLResponse)
async def home(request: Request, store: BlogStore = Depends(get_store)):
    """All posts, newest first"""
    return render(request, "index.html", {"posts": store.list_posts()})


@router.get("/post/{post_id}", response_class=HTMLResponse)
async def view_post(request: Request, post_id: int, store: BlogStore = Depends(get_store)):
    post = store.get_post(post_id)
    if not post:
        return error_page(request, 404, "Post not found")

    author = store.get_user(post.author)
    return render(request, "post.html", {
        "post": post,
        "author_bio": author.bio if author else "",
    })


@router.post("/post/{post_id}/comment")
async def add_comment(
    request: Request,
    post_id: int,
    author: str = Form(...),
    content: str = Form(...),
    store: BlogStore = Depends(get_store)
):
    if not store.get_post(post_id):
        return error_page(request, 404, "Post not found")

    field = too_long(author=author, content=content)
    if field:
        return error_page(request, 413, f"The {field} field is longer than {MAX_INPUT_LENGTH} characters")

    store.add_comment(post_id, author, content)
    return RedirectResponse(url=f"{BASE_PATH}/post/{post_id}", status_code=303)


@router.get("/new-post", response_class=HTMLResponse)
async def new_post_form(request: Request):
    return render(request, "new_post.html")


@router.post("/new-post")
async def create_post(
    request: Request,
    title: str = Form(...),
    author: str = Form(...),
    content: str = Form(...),
    store: BlogStore = Depends(get_store)
):
    field = too_long(title=title, author=author, content=content)
    if field:
        return error_page(request, 413, f"The {field} field is longer than {MAX_INPUT_LENGTH} characters")

    store.create_post(title=title, author=author, content=content)
    return RedirectResponse(url=f"{BASE_PATH}/", status_code=303)


@router.get("/profile/{username}", response_class=HTMLResponse)
async def view_profile(request: Request, username: str, store: BlogStore = Depends(get_store)):
    user = store.get_user(username)
    if not user:
        return error_page(request, 404, "User not found")
    return render(request, "profile.html", {"user": user})


@router.get("/edit-profile/{username}", response_class=HTMLResponse)
async def edit_profile_form(request: Request, username: str, store: BlogStore = Depends(get_store)):
    user = store.get_user(username)
    if not user:
        return error_page(request, 404, "User not found")
    return render(request, "edit_profile.html", {"user": user})


@router.post("/edit-profile/{username}")
async def update_profile(
    request: Request,
    username: str,
    bio: str = Form(""),
    store: BlogStore = Depends(get_store)
):
    if not store.get_user(username):
        return error_page(request, 404, "User not found")

    if too_long(bio=bio):
        return error_page(request, 413, f"The bio field is longer than {MAX_INPUT_LENGTH} characters")

    user = store.update_bio(username, bio)
    return RedirectResponse(url=f"{BASE_PATH}/profile/{quote(user.username)}", status_code=303)


@router.get("/search", response_class=HTMLResponse)
async def search(request: Request, q: str = "", store: BlogStore = Depends(get_store)):
    if too_long(q=q):
        return error_page(request, 413, f"Search queries are limited to {MAX_INPUT_LENGTH} characters")

    results = search_service.keyword_search(q, store)
    return render(request, "search.html", {"query": q, "results": results})
