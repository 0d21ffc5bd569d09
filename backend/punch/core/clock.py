"""
Time-zone boundary helpers.

Events are stored in UTC; work is allocated to days and weeks in the
configured local zone (settings.TIMEZONE).  UTC → local is always defined.
Local → UTC fails loudly when a wall-clock value is skipped or repeated by a
daylight-saving transition.
"""

from datetime import datetime, timedelta, timezone
from zoneinfo import ZoneInfo

from punch.core.config import settings
from punch.core.errors import AmbiguousOrInvalidLocalTime

_MINUTES_IN_HOUR = 60


def local_zone() -> ZoneInfo:
    return ZoneInfo(settings.TIMEZONE)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def ensure_utc(dt: datetime) -> datetime:
    """Attach UTC to naive values coming back from SQLite."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def to_local(utc_dt: datetime, tz: ZoneInfo | None = None) -> datetime:
    return ensure_utc(utc_dt).astimezone(tz or local_zone())


def to_utc(local_dt: datetime, tz: ZoneInfo | None = None) -> datetime:
    """
    Convert a naive local wall-clock value into an aware UTC datetime.

    Raises AmbiguousOrInvalidLocalTime when the value falls into a DST gap
    (no mapping) or a DST overlap (two mappings).  An aware value already
    names an instant and is converted as is.
    """
    if local_dt.tzinfo is not None:
        return local_dt.astimezone(timezone.utc)

    zone = tz or local_zone()
    wall = local_dt.replace(tzinfo=None, fold=0)
    early = wall.replace(tzinfo=zone, fold=0)
    late = wall.replace(tzinfo=zone, fold=1)

    if early.utcoffset() != late.utcoffset():
        round_trip = early.astimezone(timezone.utc).astimezone(zone)
        if round_trip.replace(tzinfo=None, fold=0) != wall:
            raise AmbiguousOrInvalidLocalTime(wall, "skipped by a daylight-saving transition")
        raise AmbiguousOrInvalidLocalTime(wall, "ambiguous (repeated by a daylight-saving transition)")

    return early.astimezone(timezone.utc)


def format_elapsed(elapsed: timedelta) -> str:
    """Render a duration as '<hours>h<minutes>m', minutes floored."""
    total_minutes = int(elapsed.total_seconds() // 60)
    hours, minutes = divmod(total_minutes, _MINUTES_IN_HOUR)
    return f"{hours}h{minutes}m"


def format_week(week: tuple[int, int]) -> str:
    iso_year, iso_week = week
    return f"{iso_year}-W{iso_week:02d}"
