"""Gross and net work time accounting."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta

_ZERO = timedelta(0)


@dataclass(frozen=True)
class WorkTime:
    """An amount of work time in both gross and net forms."""

    gross: timedelta = _ZERO
    net: timedelta = _ZERO

    @classmethod
    def zero(cls) -> WorkTime:
        return cls()

    def __add__(self, other: WorkTime) -> WorkTime:
        if not isinstance(other, WorkTime):
            return NotImplemented
        return WorkTime(gross=self.gross + other.gross, net=self.net + other.net)


def net_time(gross: timedelta, overhead: timedelta) -> timedelta:
    if overhead > gross:
        return _ZERO
    return gross - overhead


def work_time(start: datetime, end: datetime, overhead: timedelta) -> WorkTime:
    """
    Work time of a session running from start to end.

    Both ends must be aware datetimes; the difference is taken between the
    underlying instants so DST shifts do not change session lengths.
    """
    gross = end - start
    if gross < _ZERO:
        raise ValueError(f"Session ends before it starts: {start.isoformat()} > {end.isoformat()}")
    return WorkTime(gross=gross, net=net_time(gross, overhead))


@dataclass(frozen=True)
class Interval:
    """A reconstructed work session; start and end are local times."""

    start: datetime
    end: datetime
    work_time: WorkTime
    is_open: bool = False
