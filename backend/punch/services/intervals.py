"""
Reconstruct work intervals from an ordered stream of punch events.

The stream usually starts at an arbitrary window boundary, so a session that
began before the window shows up first as an orphan 'out'.  Such leading
'out' events are dropped silently.  Once reconstruction has started, any event
that breaks the in/out alternation is dropped and reported as an anomaly.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from zoneinfo import ZoneInfo

from punch.core.clock import ensure_utc, to_local
from punch.db.models import PUNCH_TYPES, Event
from punch.services.worktime import Interval, work_time

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AnomalousEvent:
    """Diagnostic for an event discarded because it broke in/out alternation."""

    event: Event
    expected: str

    @property
    def message(self) -> str:
        return (
            f"Unexpected '{self.event.event_type}' event id={self.event.id} "
            f"at {ensure_utc(self.event.clock).isoformat()} (expected '{self.expected}')"
        )


@dataclass
class Reconstruction:
    intervals: list[Interval] = field(default_factory=list)
    anomalies: list[AnomalousEvent] = field(default_factory=list)


def _interval(
    start: datetime,
    end: datetime,
    overhead: timedelta,
    tz: ZoneInfo | None,
    is_open: bool = False,
) -> Interval:
    return Interval(
        start=to_local(start, tz),
        end=to_local(end, tz),
        work_time=work_time(start, end, overhead),
        is_open=is_open,
    )


def reconstruct_intervals(
    events: Iterable[Event],
    overhead: timedelta,
    now: datetime,
    tz: ZoneInfo | None = None,
) -> Reconstruction:
    """
    Walk events (ascending by clock) and pair each 'in' with the next 'out'.

    A trailing unmatched 'in' produces one open interval ending at now.
    """
    result = Reconstruction()
    expected = "in"
    pending_in: Event | None = None
    lead_in = True

    for event in events:
        if lead_in and event.event_type == "out":
            continue
        if event.event_type not in PUNCH_TYPES:
            continue
        if event.event_type != expected:
            anomaly = AnomalousEvent(event=event, expected=expected)
            logger.warning("%s", anomaly.message)
            result.anomalies.append(anomaly)
            continue

        lead_in = False
        if event.event_type == "in":
            pending_in = event
            expected = "out"
        else:
            result.intervals.append(
                _interval(ensure_utc(pending_in.clock), ensure_utc(event.clock), overhead, tz)
            )
            pending_in = None
            expected = "in"

    if pending_in is not None:
        result.intervals.append(
            _interval(ensure_utc(pending_in.clock), ensure_utc(now), overhead, tz, is_open=True)
        )

    return result
