"""
Print the summary report of the default project.

Usage:
    python -m punch.db.report
"""

import asyncio
import sys
from datetime import datetime
from zoneinfo import ZoneInfo

from sqlalchemy.ext.asyncio import AsyncSession

from punch.core.clock import local_zone
from punch.db import store
from punch.db.session import AsyncSessionLocal
from punch.services.report import format_summary_report, summary_report


async def default_report(
    session: AsyncSession,
    now: datetime | None = None,
    tz: ZoneInfo | None = None,
) -> str | None:
    """Text report for the default project, or None before setup has run."""
    zone = tz or local_zone()
    project = await store.default_project(session)
    if project is None:
        return None
    report = await summary_report(session, project.id, now=now, tz=zone)
    return format_summary_report(report, zone)


async def main() -> None:
    async with AsyncSessionLocal() as session:
        text = await default_report(session)
    if text is None:
        print("No project found. Run `python -m punch.db.seed` first.", file=sys.stderr)
        sys.exit(1)
    print(text, end="")


if __name__ == "__main__":
    asyncio.run(main())
