"""
Event store queries.

Events are append-only and ordered by (clock, id): the id breaks ties between
events sharing the same instant in insertion order.
"""

from datetime import datetime

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from punch.core.errors import ProjectNotFound
from punch.db.models import PUNCH_TYPES, Event, Project


async def get_project(db: AsyncSession, project_id: int) -> Project:
    result = await db.execute(select(Project).where(Project.id == project_id))
    project = result.scalar_one_or_none()
    if project is None:
        raise ProjectNotFound(project_id)
    return project


async def count_projects(db: AsyncSession) -> int:
    result = await db.execute(select(func.count()).select_from(Project))
    return int(result.scalar_one())


async def events_since(
    db: AsyncSession, project_id: int, lower_bound: datetime
) -> list[Event]:
    """All in/out events of a project with clock >= lower_bound, oldest first."""
    stmt = (
        select(Event)
        .where(
            Event.project_id == project_id,
            Event.event_type.in_(PUNCH_TYPES),
            Event.clock >= lower_bound,
        )
        .order_by(Event.clock, Event.id)
    )
    result = await db.execute(stmt)
    return list(result.scalars().all())


async def last_punch_event(db: AsyncSession, project_id: int) -> Event | None:
    stmt = (
        select(Event)
        .where(
            Event.project_id == project_id,
            Event.event_type.in_(PUNCH_TYPES),
        )
        .order_by(Event.clock.desc(), Event.id.desc())
        .limit(1)
    )
    result = await db.execute(stmt)
    return result.scalar_one_or_none()


async def default_project(db: AsyncSession) -> Project | None:
    """The project created by setup: the one with the lowest id."""
    result = await db.execute(select(Project).order_by(Project.id).limit(1))
    return result.scalar_one_or_none()
