"""
Punch submission.

Checking the next expected direction and appending the new event must behave
as one atomic step per project.  Within a process, a per-project asyncio.Lock
serialises submissions; a lock lives only while some submission holds or
awaits it.  Across processes, every in/out event stores the id
of the event it follows and (project_id, follows_event_id) is unique, so a
writer that raced on a stale "last event" fails on commit.
"""

import asyncio
import logging
import weakref
from datetime import datetime

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from punch.core.clock import ensure_utc, utc_now
from punch.core.errors import StateMismatch
from punch.db import store
from punch.db.models import CHAIN_START, Event
from punch.services.punch_state import direction_after, validate_punch

logger = logging.getLogger(__name__)

_project_locks: weakref.WeakValueDictionary[int, asyncio.Lock] = weakref.WeakValueDictionary()


def project_lock(project_id: int) -> asyncio.Lock:
    lock = _project_locks.get(project_id)
    if lock is None:
        lock = asyncio.Lock()
        _project_locks[project_id] = lock
    return lock


async def submit_punch(
    db: AsyncSession,
    project_id: int,
    direction: str,
    now: datetime | None = None,
) -> Event:
    """
    Append an in/out event if it is the next legal direction.

    Raises ProjectNotFound or StateMismatch; nothing is written on failure.
    """
    await store.get_project(db, project_id)
    async with project_lock(project_id):
        last_event = await store.last_punch_event(db, project_id)
        try:
            validate_punch(direction, last_event)
        except StateMismatch:
            logger.warning(
                "Rejected punch '%s' for project %d: expected '%s'",
                direction, project_id, direction_after(last_event),
            )
            raise

        event = Event(
            project_id=project_id,
            event_type=direction,
            clock=ensure_utc(now or utc_now()),
            follows_event_id=last_event.id if last_event is not None else CHAIN_START,
        )
        db.add(event)
        try:
            await db.commit()
        except IntegrityError as exc:
            await db.rollback()
            logger.warning(
                "Concurrent punch detected for project %d; '%s' rejected", project_id, direction
            )
            # The winning writer appended the same direction first
            expected = "out" if direction == "in" else "in"
            raise StateMismatch(direction, expected) from exc

        await db.refresh(event)
        logger.info(
            "Punch '%s' recorded for project %d (event id=%d)", direction, project_id, event.id
        )
        return event


async def record_note(
    db: AsyncSession,
    project_id: int,
    now: datetime | None = None,
) -> Event:
    """Append a timestamped note event; notes never affect punch direction."""
    await store.get_project(db, project_id)
    event = Event(
        project_id=project_id,
        event_type="note",
        clock=ensure_utc(now or utc_now()),
        follows_event_id=None,
    )
    db.add(event)
    await db.commit()
    await db.refresh(event)
    logger.info("Note recorded for project %d (event id=%d)", project_id, event.id)
    return event
