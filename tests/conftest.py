"""Pytest configuration and fixtures."""

import os

os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key")
os.environ.setdefault("ENVIRONMENT", "development")

from collections.abc import AsyncGenerator, Callable
from typing import Any

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from fieldplan.api.deps import create_access_token
from fieldplan.db.base import Base
from fieldplan.db.models import User
from fieldplan.db.session import get_db
from fieldplan.main import app
from fieldplan.services import DatabaseIdentityDirectory, ScheduleStore, generate_month


@pytest.fixture
async def engine(tmp_path):
    """Throwaway SQLite database with the full schema."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'fieldplan.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


@pytest.fixture
async def db(session_factory) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session


@pytest.fixture
async def users(session_factory) -> dict[str, User]:
    """An owner, a second staff member and an administrator."""
    async with session_factory() as session:
        owner = User(name="Nguyen Van An", phone="0901234567")
        other = User(name="Tran Thi Binh", phone="0912345678")
        admin = User(name="Operations Lead", phone="0987654321", is_administrator=True)
        session.add_all([owner, other, admin])
        await session.commit()
    return {"owner": owner, "other": other, "admin": admin}


@pytest.fixture
def store(db) -> ScheduleStore:
    return ScheduleStore(db, DatabaseIdentityDirectory(db))


@pytest.fixture
def make_entries() -> Callable[..., list[dict[str, Any]]]:
    """Build 7 entry payloads from a generated business week."""

    def _make(year: int, month: int, week_number: int, text: str = "Visit branch") -> list[dict[str, Any]]:
        week = generate_month(year, month)[week_number - 1]
        return [
            {
                "day_number": index + 1,
                "day_name": day.day_name.value,
                "date": day.date.isoformat(),
                "in_target_month": day.in_target_month,
                "is_day_off": index == 6,
                "morning_text": f"{text} (morning)",
                "afternoon_text": f"{text} (afternoon)",
            }
            for index, day in enumerate(week.days)
        ]

    return _make


@pytest.fixture
async def client(session_factory) -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client for testing FastAPI endpoints against the test database."""

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers() -> Callable[[User], dict[str, str]]:
    def _headers(user: User) -> dict[str, str]:
        return {"Authorization": f"Bearer {create_access_token(user.id)}"}

    return _headers
