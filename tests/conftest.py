import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from bloggerish.main import app
from bloggerish.store import get_store


@pytest.fixture(autouse=True)
def reset_store():
    """Start every test from the welcome content."""
    get_store().reset()
    yield


@pytest_asyncio.fixture
async def client():
    """Async HTTP client for page and API tests."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
