import httpx
import pytest
import pytest_asyncio

from webapi.main import create_app
from webapi.users.models import UserEntity
from webapi.users.repository import InMemoryUserRepository


# -----------------------------
# Fixtures
# -----------------------------
@pytest.fixture
def repository():
    return InMemoryUserRepository()


@pytest.fixture
def app(repository):
    return create_app(repository=repository)


@pytest_asyncio.fixture
async def client(app):
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as c:
        yield c


@pytest.fixture
def seed_users(repository):
    """Insert ``count`` users and return their ids in insertion order."""
    def _seed(count: int):
        return [
            repository.insert(UserEntity(login=f"user{i}", first_name=f"First{i}", last_name=f"Last{i}")).id
            for i in range(count)
        ]
    return _seed
