"""
Shared fixtures: an in-memory SQLite database per test and an ASGI client
wired to it through a ``get_db_session`` override.
"""

import os

os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("JWT_SECRET", "test-secret-key")

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from auth.jwt import TokenService, get_token_service
from database.models import Base
from database.session import get_db_session
from main import create_app


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def token_service() -> TokenService:
    return get_token_service()


@pytest.fixture
def app(session_factory):
    app = create_app()

    async def _test_session():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db_session] = _test_session
    return app


@pytest_asyncio.fixture
async def client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


async def _register_and_login(client: AsyncClient, username: str, password: str = "secret-pw"):
    resp = await client.post(
        "/api/auth/register",
        json={"username": username, "email": f"{username}@example.com", "password": password},
    )
    assert resp.status_code == 200, resp.text
    user_id = resp.json()["data"]["id"]

    resp = await client.post("/api/auth/login", json={"username": username, "password": password})
    assert resp.status_code == 200, resp.text
    token = resp.json()["data"]["token"]
    return user_id, {"Authorization": f"Bearer {token}"}


@pytest.fixture
def login_as(client):
    """``await login_as("alice")`` registers + logs in, returning ``(user_id, headers)``."""

    async def _login_as(username: str, password: str = "secret-pw"):
        return await _register_and_login(client, username, password)

    return _login_as
