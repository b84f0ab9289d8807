from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles
from contextlib import asynccontextmanager
from pathlib import Path
import logging

from bloggerish.config import BASE_PATH, LOG_LEVEL
from bloggerish.routers import api, ui
from bloggerish.store import get_store

logging.basicConfig(
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    level=LOG_LEVEL
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Load the welcome content on startup."""
    store = get_store()
    store.reset()
    logger.info(f"Bloggerish started with {len(store.list_posts())} post(s)")
    yield


app = FastAPI(
    title="Bloggerish",
    description="Minimal blogging with sanitized rich text",
    version="0.1.0",
    root_path=BASE_PATH,
    lifespan=lifespan,
)

static_dir = Path(__file__).parent / "static"
app.mount("/static", StaticFiles(directory=str(static_dir)), name="static")


@app.get("/health")
async def health_check():
    return {"status": "healthy"}


app.include_router(ui.router)
app.include_router(api.router)
