"""
Seed script: default project plus about five weeks of random demo history,
then prints the resulting summary report.

Usage:
    python -m punch.db.seed_demo
"""

import asyncio

from sqlalchemy.ext.asyncio import AsyncSession

from punch.core.clock import local_zone, to_local, utc_now
from punch.db.models import CHAIN_START, Event, Project
from punch.db.seed import create_default_project
from punch.db.session import AsyncSessionLocal
from punch.services.demo_data import DemoSession, generate_demo_sessions
from punch.services.report import format_summary_report, summary_report


async def insert_demo_history(
    session: AsyncSession, project: Project, sessions: list[DemoSession]
) -> int:
    """Insert an in/out pair per session, chained like submitted punches."""
    previous_id = CHAIN_START
    inserted = 0
    for demo in sessions:
        for event_type, clock in (("in", demo.start), ("out", demo.end)):
            event = Event(
                project_id=project.id,
                event_type=event_type,
                clock=clock,
                follows_event_id=previous_id,
            )
            session.add(event)
            await session.flush()
            previous_id = event.id
            inserted += 1
    return inserted


async def main() -> None:
    zone = local_zone()
    today = to_local(utc_now(), zone).date()

    async with AsyncSessionLocal() as session:
        async with session.begin():
            project = await create_default_project(session)
            sessions = generate_demo_sessions(today, tz=zone)
            inserted = await insert_demo_history(session, project, sessions)
        print(f"Inserted {inserted} demo events for project id={project.id}")

        report = await summary_report(session, project.id, tz=zone)
        print(format_summary_report(report, zone), end="")


if __name__ == "__main__":
    asyncio.run(main())
