"""
Reproducible demo history: weekday work sessions with occasional weekends.

Local wall-clock times are converted with to_utc, so a session landing in a
DST gap or overlap aborts generation with AmbiguousOrInvalidLocalTime.
"""

import random
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from zoneinfo import ZoneInfo

from punch.core.clock import to_utc

DEMO_SEED = 0x04C11DB7

START_DAYS_IN_PAST = 38
MIN_SESSION = 60 * 60
MAX_SESSION = 60 * 60 * 6
MIN_TIME_PER_DAY = 60 * 60 * 7
MAX_FUZZ_TIME = 60 * 60
WEEKEND_WORK_PERCENT = 30

_EARLIEST_START = 7 * 60 * 60
_LAST_SECOND = 24 * 60 * 60 - 1


@dataclass(frozen=True)
class DemoSession:
    start: datetime
    end: datetime


def _sessions_for_day(day: date, rng: random.Random, tz: ZoneInfo | None) -> list[DemoSession]:
    midnight = datetime.combine(day, time.min)
    sessions: list[DemoSession] = []
    time_today = 0
    tod = _EARLIEST_START

    while time_today < MIN_TIME_PER_DAY:
        max_fuzz = min(MAX_FUZZ_TIME, _LAST_SECOND - tod)
        if max_fuzz > 0:
            tod += rng.randrange(0, max_fuzz)
        start = tod

        seconds_left = _LAST_SECOND - tod
        if seconds_left < 60:
            break
        max_session = min(MAX_SESSION, seconds_left)
        if max_session <= MIN_SESSION:
            break
        length = rng.randrange(MIN_SESSION, max_session)
        tod += length

        sessions.append(
            DemoSession(
                start=to_utc(midnight + timedelta(seconds=start), tz),
                end=to_utc(midnight + timedelta(seconds=tod), tz),
            )
        )
        time_today += length

    return sessions


def generate_demo_sessions(
    today: date,
    rng: random.Random | None = None,
    tz: ZoneInfo | None = None,
) -> list[DemoSession]:
    """Sessions from the Monday on or before 38 days ago up to yesterday."""
    rng = rng or random.Random(DEMO_SEED)
    day = today - timedelta(days=START_DAYS_IN_PAST)
    day -= timedelta(days=day.weekday())

    sessions: list[DemoSession] = []
    while day < today:
        if day.weekday() >= 5 and rng.randrange(100) >= WEEKEND_WORK_PERCENT:
            day += timedelta(days=1)
            continue
        sessions.extend(_sessions_for_day(day, rng, tz))
        day += timedelta(days=1)
    return sessions
