"""
Shared fixtures for the TeamTrain test suite.

Strategy:
- The app comes from create_app(); httpx over ASGITransport does not run the
  lifespan, so no database connection or bootstrap happens on import.
- Unit and integration tests replace the repositories with AsyncMock objects.
  Authenticated clients override get_optional_user, so the real guards in
  rbac still decide between 200, 401 and 403.
- e2e tests run the full stack against an in-memory SQLite database.
"""

import os

os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("ENVIRONMENT", "test")

import pytest
from unittest.mock import AsyncMock, MagicMock
from httpx import AsyncClient, ASGITransport
from datetime import datetime
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession
from sqlalchemy.pool import StaticPool

import teamtrain.models  # noqa: F401
from teamtrain.core.base import Base
from teamtrain.core.config import settings
from teamtrain.core.db import get_db
from teamtrain.core.dependencies import (
    get_invite_repository,
    get_optional_user,
    get_session_repository,
    get_user_repository,
)
from teamtrain.main import create_app
from teamtrain.models.user import User, RoleEnum
from teamtrain.repositories.invite_repository import InviteRepository
from teamtrain.repositories.session_repository import SessionRepository
from teamtrain.repositories.user_repository import UserRepository
from teamtrain.services.auth_service import auth_service


# ---------------------------------------------------------------------------
# Users
# ---------------------------------------------------------------------------

@pytest.fixture
def user_fixture() -> User:
    """Regular member."""
    return User(
        id="user1",
        name="Tester",
        email="test@example.com",
        password=auth_service.hash_password("password123"),
        role=RoleEnum.user,
        created_at=datetime(2024, 1, 1),
    )


@pytest.fixture
def admin_fixture() -> User:
    """Administrator."""
    return User(
        id="admin1",
        name="Admin",
        email="admin@example.com",
        password=auth_service.hash_password("admin123"),
        role=RoleEnum.admin,
        created_at=datetime(2024, 1, 1),
    )


# ---------------------------------------------------------------------------
# Mocked dependencies
# ---------------------------------------------------------------------------

@pytest.fixture
def mock_users() -> AsyncMock:
    return AsyncMock(spec=UserRepository)


@pytest.fixture
def mock_invites() -> AsyncMock:
    return AsyncMock(spec=InviteRepository)


@pytest.fixture
def mock_sessions() -> AsyncMock:
    return AsyncMock(spec=SessionRepository)


@pytest.fixture
def mock_db() -> AsyncMock:
    """
    Mocked AsyncSession for handlers that query the session directly.
    get() finds nothing and execute() returns an empty result by default.
    """
    session = AsyncMock()
    session.add = MagicMock()
    session.get.return_value = None
    default_result = MagicMock()
    default_result.scalar_one_or_none.return_value = None
    default_result.scalars.return_value.all.return_value = []
    session.execute.return_value = default_result
    return session


def build_app(mock_users, mock_invites, mock_sessions, mock_db, current_user=None):
    app = create_app()
    app.dependency_overrides[get_user_repository] = lambda: mock_users
    app.dependency_overrides[get_invite_repository] = lambda: mock_invites
    app.dependency_overrides[get_session_repository] = lambda: mock_sessions
    app.dependency_overrides[get_db] = lambda: mock_db
    if current_user is not None:
        app.dependency_overrides[get_optional_user] = lambda: current_user
    return app


async def _client_for(app) -> AsyncGenerator[AsyncClient, None]:
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac


# ---------------------------------------------------------------------------
# HTTP clients
# ---------------------------------------------------------------------------

@pytest.fixture
async def client(mock_users, mock_invites, mock_sessions, mock_db, upload_dir) -> AsyncGenerator[AsyncClient, None]:
    """Anonymous client; the session cookie is resolved through the mocked repositories."""
    async for ac in _client_for(build_app(mock_users, mock_invites, mock_sessions, mock_db)):
        yield ac


@pytest.fixture
async def user_client(user_fixture, mock_users, mock_invites, mock_sessions, mock_db, upload_dir) -> AsyncGenerator[AsyncClient, None]:
    """Client logged in as a regular member."""
    app = build_app(mock_users, mock_invites, mock_sessions, mock_db, current_user=user_fixture)
    async for ac in _client_for(app):
        yield ac


@pytest.fixture
async def admin_client(admin_fixture, mock_users, mock_invites, mock_sessions, mock_db, upload_dir) -> AsyncGenerator[AsyncClient, None]:
    """Client logged in as an administrator."""
    app = build_app(mock_users, mock_invites, mock_sessions, mock_db, current_user=admin_fixture)
    async for ac in _client_for(app):
        yield ac


# ---------------------------------------------------------------------------
# Real database (SQLite in memory)
# ---------------------------------------------------------------------------

@pytest.fixture
async def session_factory() -> AsyncGenerator[async_sessionmaker, None]:
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)
    await engine.dispose()


@pytest.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session


@pytest.fixture
def upload_dir(tmp_path, monkeypatch):
    monkeypatch.setattr(settings, "UPLOAD_DIR", str(tmp_path / "uploads"))
    return tmp_path / "uploads"


@pytest.fixture
async def live_client(session_factory, upload_dir) -> AsyncGenerator[AsyncClient, None]:
    """Full stack over the SQLite database; cookies persist between requests."""
    app = create_app()

    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    async for ac in _client_for(app):
        yield ac
