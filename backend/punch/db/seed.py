"""
Seed script: creates the default project only.

Usage:
    python -m punch.db.seed
"""

import asyncio
import logging

from sqlalchemy.ext.asyncio import AsyncSession

from punch.core.config import settings
from punch.core.errors import AlreadyInitialized
from punch.db import store
from punch.db.models import Project
from punch.db.session import AsyncSessionLocal

logger = logging.getLogger(__name__)


async def create_default_project(
    session: AsyncSession,
    name: str | None = None,
    overhead: int | None = None,
) -> Project:
    if await store.count_projects(session) > 0:
        raise AlreadyInitialized("Database is already set up (a project exists)")

    overhead = settings.DEFAULT_OVERHEAD_MINUTES if overhead is None else overhead
    if overhead < 0:
        raise ValueError("Overhead minutes must not be negative")

    project = Project(name=name or settings.DEFAULT_PROJECT_NAME, overhead=overhead)
    session.add(project)
    await session.flush()
    logger.info("Created project '%s' (id=%d, overhead=%d min)", project.name, project.id, overhead)
    return project


async def main() -> None:
    async with AsyncSessionLocal() as session:
        async with session.begin():
            project = await create_default_project(session)
    print(f"Seed complete. Project id={project.id}")


if __name__ == "__main__":
    asyncio.run(main())
