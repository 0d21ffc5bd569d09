"""
Summary report: work activity over recent days and weeks for one project.

The report is a read-side projection recomputed on every request; it never
writes to the database.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta
from zoneinfo import ZoneInfo

from sqlalchemy.ext.asyncio import AsyncSession

from punch.core.clock import format_elapsed, format_week, local_zone, to_local, to_utc, utc_now
from punch.core.config import settings
from punch.db import store
from punch.db.models import Event
from punch.services.calendar import IsoWeek, aggregate, report_start_day
from punch.services.intervals import AnomalousEvent, reconstruct_intervals
from punch.services.punch_state import direction_after
from punch.services.worktime import WorkTime


@dataclass
class SummaryReport:
    next_direction: str
    days: list[tuple[date, WorkTime]]
    weeks: list[tuple[IsoWeek, WorkTime]]
    recent_events: list[Event]
    anomalies: list[AnomalousEvent] = field(default_factory=list)


def build_summary_report(
    events: Sequence[Event],
    overhead_minutes: int,
    next_direction: str,
    now: datetime,
    tz: ZoneInfo | None = None,
    weeks_in_past: int | None = None,
    max_events: int | None = None,
) -> SummaryReport:
    """Compose a report from in/out events already loaded oldest first."""
    zone = tz or local_zone()
    weeks_in_past = settings.REPORT_WEEKS_IN_PAST if weeks_in_past is None else weeks_in_past
    max_events = settings.REPORT_MAX_EVENTS if max_events is None else max_events

    today = to_local(now, zone).date()
    start_day = report_start_day(today, weeks_in_past)

    reconstruction = reconstruct_intervals(
        events, timedelta(minutes=overhead_minutes), now, zone
    )
    days, weeks = aggregate(reconstruction.intervals, start_day, today)

    recent_events = list(events[-max_events:]) if max_events > 0 else []
    recent_events.reverse()

    return SummaryReport(
        next_direction=next_direction,
        days=days,
        weeks=weeks,
        recent_events=recent_events,
        anomalies=reconstruction.anomalies,
    )


async def summary_report(
    db: AsyncSession,
    project_id: int,
    now: datetime | None = None,
    tz: ZoneInfo | None = None,
) -> SummaryReport:
    """
    Load a project's recent events and build its summary report.

    Raises ProjectNotFound for an unknown project and
    AmbiguousOrInvalidLocalTime when the window start falls into a DST gap
    or overlap.
    """
    zone = tz or local_zone()
    now = now or utc_now()

    project = await store.get_project(db, project_id)

    today = to_local(now, zone).date()
    start_day = report_start_day(today, settings.REPORT_WEEKS_IN_PAST)
    lower_bound = to_utc(datetime.combine(start_day, time.min), zone)

    events = await store.events_since(db, project_id, lower_bound)
    last_event = await store.last_punch_event(db, project_id)

    return build_summary_report(
        events,
        project.overhead,
        direction_after(last_event),
        now,
        zone,
    )


def format_summary_report(report: SummaryReport, tz: ZoneInfo | None = None) -> str:
    zone = tz or local_zone()
    lines = [
        "Summary report:",
        f"\tNext expected direction: {report.next_direction}",
        "\tDays:",
    ]
    for day, wt in report.days:
        lines.append(f"\t\t{day.isoformat()}: {format_elapsed(wt.gross)} {format_elapsed(wt.net)}")
    lines.append("\tWeeks:")
    for week, wt in report.weeks:
        lines.append(f"\t\t{format_week(week)}: {format_elapsed(wt.gross)} {format_elapsed(wt.net)}")
    lines.append("\tRecent events:")
    for event in report.recent_events:
        local = to_local(event.clock, zone)
        lines.append(f"\t\t{event.event_type} {local.isoformat(timespec='seconds')} (id={event.id})")
    return "\n".join(lines) + "\n"
