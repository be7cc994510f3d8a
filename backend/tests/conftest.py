"""Pytest configuration for tests directory."""
import os
import sys
from pathlib import Path

# Test environment must be in place before kosaquest.settings is imported
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("ADMIN_API_KEY", "test-admin-key")
os.environ.setdefault("BADGE_MINTER_BACKEND", "simulated")
os.environ.setdefault("CONFIG_FILE", str(Path(__file__).parent / "does-not-exist.yaml"))

backend_dir = Path(__file__).parent.parent
if str(backend_dir) not in sys.path:
    sys.path.insert(0, str(backend_dir))

from typing import Optional

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import update
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool

from kosaquest.domain.accounts.models import User
from kosaquest.domain.catalog.models import Story
from kosaquest.infra.db.base import Base, build_session_factory
from kosaquest.infra.db import models  # noqa: F401
from kosaquest.infra.db.models.user import UserModel
from kosaquest.infra.db.repositories.user_repo import UserRepositoryImpl
from kosaquest.infra.db.repositories.story_repo import StoryRepositoryImpl

from helpers import FakeMinter, RecordingEmailService, make_story

pytest_plugins = ("pytest_asyncio",)


def pytest_configure(config):
    """Register markers."""
    config.addinivalue_line(
        "markers", "integration: marks tests that need external services (deselect with '-m \"not integration\"')"
    )


@pytest.fixture
async def engine():
    """In-memory SQLite engine with the full schema."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return build_session_factory(engine)


@pytest.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def create_user(session_factory):
    """Factory: persist a user, optionally with a starting XP balance."""

    async def _create(email: str = "ada@example.com", xp: int = 0) -> User:
        async with session_factory() as session:
            user = await UserRepositoryImpl(session).create(
                User.create(email=email, name="Ada", password_hash="x")
            )
            if xp:
                await session.execute(update(UserModel).where(UserModel.id == user.id).values(xp=xp))
                await session.commit()
            return user.model_copy(update={"xp": xp})

    return _create


@pytest.fixture
def add_story(session_factory):
    """Factory: persist a story."""

    async def _add(story: Optional[Story] = None) -> Story:
        async with session_factory() as session:
            return await StoryRepositoryImpl(session).create(story or make_story())

    return _add


@pytest.fixture
def fake_minter():
    return FakeMinter()


@pytest.fixture
def email_outbox():
    return RecordingEmailService()


@pytest.fixture
async def client(session_factory, fake_minter, email_outbox):
    """HTTP client with get_db, the badge minter and the email sender overridden."""
    from kosaquest.main import app
    from kosaquest.api.deps import get_db, get_badge_minter, get_email_service

    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_badge_minter] = lambda: fake_minter
    app.dependency_overrides[get_email_service] = lambda: email_outbox
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.pop(get_db, None)
    app.dependency_overrides.pop(get_badge_minter, None)
    app.dependency_overrides.pop(get_email_service, None)
