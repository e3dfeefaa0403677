"""
pytest configuration and fixtures for the users API test suite
Each test gets a fresh app wired to an in-memory store.
"""

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from app import create_app
from tests.users_api.fakes import InMemoryUserStore, UnreachableUserStore

SAMPLE_USER = {
    "firstName": "Alvin",
    "lastName": "Dewdney",
    "email": "alv@gmail.com",
}


@pytest.fixture
def user_store() -> InMemoryUserStore:
    return InMemoryUserStore()


@pytest.fixture
def sample_user() -> dict:
    return dict(SAMPLE_USER)


@pytest_asyncio.fixture
async def client(user_store):
    """HTTP client talking to an app backed by the in-memory store"""
    application = create_app(user_store=user_store)
    async with AsyncClient(transport=ASGITransport(app=application), base_url="http://test") as http_client:
        yield http_client


@pytest_asyncio.fixture
async def unreachable_client():
    """HTTP client talking to an app whose database cannot be reached"""
    application = create_app(user_store=UnreachableUserStore())
    async with AsyncClient(transport=ASGITransport(app=application), base_url="http://test") as http_client:
        yield http_client


@pytest_asyncio.fixture
async def created_user(client, sample_user) -> dict:
    """A user created through the API"""
    response = await client.post("/createUser", json=sample_user)
    assert response.status_code == 200, response.text
    return response.json()
