"""
conftest.py — shared fixtures for all tests.

Strategy:
- Every test that touches storage gets its own SQLite database file under
  tmp_path, created from the ORM metadata (no Alembic run needed).
- The HTTP client talks to the FastAPI app in-process via ASGITransport, with
  get_db overridden to use the per-test database.
- Engine-only tests build Event objects in memory with make_event; they never
  touch a session.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from punch.db.models import CHAIN_START, Base, Event, Project
from punch.db.session import create_engine, get_db
from punch.main import app
from punch.services import punch as punch_service


@pytest.fixture(autouse=True)
def _fresh_project_locks():
    """asyncio locks bind to the loop they first wait on; each test gets a new loop."""
    punch_service._project_locks.clear()
    yield
    punch_service._project_locks.clear()


# ---------------------------------------------------------------------------
# In-memory events for pure engine tests
# ---------------------------------------------------------------------------


@pytest.fixture
def make_event() -> Callable[..., Event]:
    """Factory for transient Event objects with auto-incrementing ids."""
    counter = {"id": 0}

    def _make(event_type: str, clock: datetime, project_id: int = 1) -> Event:
        counter["id"] += 1
        return Event(
            id=counter["id"],
            project_id=project_id,
            event_type=event_type,
            clock=clock,
        )

    return _make


# ---------------------------------------------------------------------------
# Per-test database
# ---------------------------------------------------------------------------


@pytest_asyncio.fixture
async def session_factory(tmp_path) -> async_sessionmaker[AsyncSession]:
    engine = create_engine(f"sqlite+aiosqlite:///{tmp_path / 'punch_test.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    await engine.dispose()


@pytest_asyncio.fixture
async def db(session_factory) -> AsyncSession:
    """Provides a raw DB session for direct DB queries in tests."""
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def project(session_factory) -> Project:
    """A project with the default 15 minute overhead."""
    async with session_factory() as session:
        project = Project(name="Test Project", overhead=15)
        session.add(project)
        await session.commit()
        await session.refresh(project)
    return project


@pytest_asyncio.fixture
async def add_events(session_factory) -> Callable:
    """
    Insert (event_type, clock) pairs for a project, chained the same way
    submitted punches are.  Returns the stored events.
    """

    async def _add(project_id: int, events: list[tuple[str, datetime]]) -> list[Event]:
        stored: list[Event] = []
        previous_id = CHAIN_START
        async with session_factory() as session:
            for event_type, clock in events:
                event = Event(
                    project_id=project_id,
                    event_type=event_type,
                    clock=clock,
                    follows_event_id=None if event_type == "note" else previous_id,
                )
                session.add(event)
                await session.flush()
                if event_type != "note":
                    previous_id = event.id
                stored.append(event)
            await session.commit()
        return stored

    return _add


# ---------------------------------------------------------------------------
# HTTP client fixture
# ---------------------------------------------------------------------------


@pytest_asyncio.fixture
async def client(session_factory) -> AsyncClient:
    """HTTPX async client bound to the app, using the per-test database."""

    async def _override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = _override_get_db
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
