"""
Allocate work intervals to calendar days and ISO weeks.

An interval is counted entirely on the day (and week) it started, even when
it runs past midnight.
"""

from collections.abc import Iterable
from datetime import date, timedelta

from punch.services.worktime import Interval, WorkTime

IsoWeek = tuple[int, int]


def iso_week(day: date) -> IsoWeek:
    iso = day.isocalendar()
    return (iso[0], iso[1])


def report_start_day(today: date, weeks_in_past: int) -> date:
    """The Monday on or before `weeks_in_past` weeks ago."""
    start = today - timedelta(weeks=weeks_in_past)
    return start - timedelta(days=start.weekday())


def _following_week(week: IsoWeek) -> IsoWeek:
    monday = date.fromisocalendar(week[0], week[1], 1)
    return iso_week(monday + timedelta(weeks=1))


def aggregate(
    intervals: Iterable[Interval],
    start_day: date,
    today: date,
) -> tuple[list[tuple[date, WorkTime]], list[tuple[IsoWeek, WorkTime]]]:
    """
    Bucket intervals into days and weeks, most recent first.

    Every day from start_day through today and every week from start_day's
    week through today's week is present, zero-valued when idle.  Days are
    trimmed to the current week; weeks are not trimmed.
    """
    day_map: dict[date, WorkTime] = {}
    week_map: dict[IsoWeek, WorkTime] = {}

    for interval in intervals:
        day = interval.start.date()
        day_map[day] = day_map.get(day, WorkTime.zero()) + interval.work_time
        week = iso_week(day)
        week_map[week] = week_map.get(week, WorkTime.zero()) + interval.work_time

    day = start_day
    while day <= today:
        day_map.setdefault(day, WorkTime.zero())
        day += timedelta(days=1)

    week = iso_week(start_day)
    last_week = iso_week(today)
    while week <= last_week:
        week_map.setdefault(week, WorkTime.zero())
        week = _following_week(week)

    days = sorted(day_map.items())
    weeks = sorted(week_map.items())

    keep_days = today.weekday() + 1
    if len(days) > keep_days:
        days = days[-keep_days:]

    days.reverse()
    weeks.reverse()
    return days, weeks
