"""
Calendar aggregation tests.

Tests:
  - report_start_day : Monday on or before five weeks ago
  - aggregate        : gap filling, start-day allocation, trimming, ordering
"""

from __future__ import annotations

from datetime import date, datetime, timedelta
from zoneinfo import ZoneInfo

import pytest

from punch.services.calendar import aggregate, iso_week, report_start_day
from punch.services.worktime import Interval, WorkTime

TZ = ZoneInfo("UTC")


def _interval(start: datetime, hours: float, net_hours: float | None = None) -> Interval:
    gross = timedelta(hours=hours)
    net = timedelta(hours=net_hours if net_hours is not None else hours)
    return Interval(start=start, end=start + gross, work_time=WorkTime(gross, net))


class TestReportStartDay:
    def test_midweek(self) -> None:
        # Wednesday 2026-10-14 → Wednesday 2026-09-09 → Monday 2026-09-07
        assert report_start_day(date(2026, 10, 14), 5) == date(2026, 9, 7)

    def test_today_is_monday(self) -> None:
        assert report_start_day(date(2026, 10, 12), 5) == date(2026, 9, 7)

    def test_today_is_sunday(self) -> None:
        assert report_start_day(date(2026, 10, 18), 5) == date(2026, 9, 7)

    def test_always_a_monday(self) -> None:
        day = date(2026, 1, 1)
        for _ in range(30):
            assert report_start_day(day, 5).weekday() == 0
            day += timedelta(days=1)


class TestAggregate:
    @pytest.mark.parametrize(
        "today, expected_days",
        [
            (date(2026, 10, 12), 1),  # Monday
            (date(2026, 10, 14), 3),  # Wednesday
            (date(2026, 10, 18), 7),  # Sunday
        ],
    )
    def test_days_trimmed_to_current_week(self, today: date, expected_days: int) -> None:
        days, weeks = aggregate([], report_start_day(today, 5), today)

        assert len(days) == expected_days
        assert len(weeks) == 6
        assert days[0][0] == today
        assert days[-1][0].weekday() == 0

    def test_gapless_zero_buckets(self) -> None:
        """No intervals at all still yields contiguous zero-valued days and weeks."""
        today = date(2026, 10, 18)
        days, weeks = aggregate([], report_start_day(today, 5), today)

        assert [d for d, _ in days] == [today - timedelta(days=n) for n in range(7)]
        assert all(wt == WorkTime.zero() for _, wt in days)
        assert all(wt == WorkTime.zero() for _, wt in weeks)
        assert [w for w, _ in weeks] == [(2026, 42), (2026, 41), (2026, 40), (2026, 39), (2026, 38), (2026, 37)]

    def test_weeks_cross_year_boundary(self) -> None:
        """2026 has 53 ISO weeks; the window crosses into 2027-W01."""
        today = date(2027, 1, 6)
        days, weeks = aggregate([], report_start_day(today, 5), today)

        assert [w for w, _ in weeks] == [
            (2027, 1),
            (2026, 53),
            (2026, 52),
            (2026, 51),
            (2026, 50),
            (2026, 49),
        ]
        assert len(days) == 3

    def test_allocation_by_start_day(self) -> None:
        """A session crossing midnight counts entirely on the day it started."""
        today = date(2026, 10, 14)
        late_session = _interval(datetime(2026, 10, 12, 23, 0, tzinfo=TZ), 2)
        days, _ = aggregate([late_session], report_start_day(today, 5), today)

        by_day = dict(days)
        assert by_day[date(2026, 10, 12)].gross == timedelta(hours=2)
        assert by_day[date(2026, 10, 13)] == WorkTime.zero()

    def test_allocation_by_start_week(self) -> None:
        """A Sunday-night session stays in the week it started."""
        today = date(2026, 10, 14)
        sunday_session = _interval(datetime(2026, 10, 11, 22, 0, tzinfo=TZ), 4)
        _, weeks = aggregate([sunday_session], report_start_day(today, 5), today)

        by_week = dict(weeks)
        assert by_week[(2026, 41)].gross == timedelta(hours=4)
        assert by_week[(2026, 42)] == WorkTime.zero()

    def test_accumulates_within_bucket(self) -> None:
        today = date(2026, 10, 14)
        intervals = [
            _interval(datetime(2026, 10, 13, 8, 0, tzinfo=TZ), 2, 1.75),
            _interval(datetime(2026, 10, 13, 13, 0, tzinfo=TZ), 3, 2.75),
            _interval(datetime(2026, 10, 14, 9, 0, tzinfo=TZ), 1, 0.75),
        ]
        days, weeks = aggregate(intervals, report_start_day(today, 5), today)

        by_day = dict(days)
        assert by_day[date(2026, 10, 13)] == WorkTime(timedelta(hours=5), timedelta(hours=4.5))
        assert by_day[date(2026, 10, 14)] == WorkTime(timedelta(hours=1), timedelta(hours=0.75))
        assert weeks[0] == ((2026, 42), WorkTime(timedelta(hours=6), timedelta(hours=5.25)))

    def test_previous_weeks_keep_their_totals(self) -> None:
        """Days outside the current week are trimmed but still count toward their week."""
        today = date(2026, 10, 14)
        intervals = [_interval(datetime(2026, 9, 8, 8, 0, tzinfo=TZ), 3)]
        days, weeks = aggregate(intervals, report_start_day(today, 5), today)

        assert all(d >= date(2026, 10, 12) for d, _ in days)
        assert weeks[-1] == ((2026, 37), WorkTime(timedelta(hours=3), timedelta(hours=3)))

    def test_iso_week_key(self) -> None:
        assert iso_week(date(2026, 1, 1)) == (2026, 1)
        assert iso_week(date(2027, 1, 1)) == (2026, 53)
        assert iso_week(date(2025, 12, 29)) == (2026, 1)
