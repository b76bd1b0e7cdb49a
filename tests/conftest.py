"""
Pytest configuration and shared fixtures.

Every test gets its own SQLite database file (via aiosqlite) so tests
never share state and no PostgreSQL server is needed.
"""

import sys
from pathlib import Path

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient

# Add the project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from ibge_api.config.settings import Settings
from ibge_api.database.connection import Database
from ibge_api.main import create_app
from ibge_api.services.password_hasher import PasswordHasher

TEST_SECRET = "test-secret-key-0123456789abcdef"


@pytest.fixture
def settings(tmp_path) -> Settings:
    """Settings pointing to a throwaway SQLite database."""
    return Settings(
        DATABASE_URL=f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        JWT_SECRET_KEY=TEST_SECRET,
        JWT_EXPIRE_MINUTES=60,
        BCRYPT_ROUNDS=4,
    )


@pytest.fixture
def hasher() -> PasswordHasher:
    """Fast bcrypt hasher for tests."""
    return PasswordHasher(rounds=4)


@pytest_asyncio.fixture
async def session(settings):
    """Async session bound to a freshly created schema."""
    database = Database(settings)
    await database.init_db()
    async with database.session_maker() as session:
        yield session
    await database.close()


@pytest.fixture
def app(settings):
    """Application instance wired to the test settings."""
    return create_app(settings)


@pytest.fixture
def client(app):
    """Test client; entering the context runs the lifespan (table creation)."""
    with TestClient(app) as client:
        yield client


@pytest.fixture
def sample_user():
    """Registration payload."""
    return {"email": "a@b.com", "password": "secret", "name": "Ana"}


@pytest.fixture
def sample_location():
    """São Paulo, the scenario location."""
    return {"id": "3550308", "city": "São Paulo", "state": "SP"}


@pytest.fixture
def auth_headers(client, sample_user):
    """Register a user, log in and return the bearer header."""
    client.post("/register", json=sample_user)
    response = client.post(
        "/login",
        json={"email": sample_user["email"], "password": sample_user["password"]},
    )
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()}"}
