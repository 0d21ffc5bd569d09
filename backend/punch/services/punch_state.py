"""
Punch direction state machine.

Only the most recent in/out event matters: nothing (or a trailing 'out')
means the next punch must be 'in', a trailing 'in' means it must be 'out'.
"""

from collections.abc import Iterable

from punch.core.clock import ensure_utc
from punch.core.errors import StateMismatch
from punch.db.models import PUNCH_TYPES, Event


def direction_after(last_event: Event | None) -> str:
    if last_event is None or last_event.event_type == "out":
        return "in"
    if last_event.event_type == "in":
        return "out"
    raise ValueError(f"Not a punch event: {last_event!r}")


def latest_punch(events: Iterable[Event]) -> Event | None:
    punches = [e for e in events if e.event_type in PUNCH_TYPES]
    if not punches:
        return None
    return max(punches, key=lambda e: (ensure_utc(e.clock), e.id or 0))


def next_expected_direction(events: Iterable[Event]) -> str:
    return direction_after(latest_punch(events))


def validate_punch(proposed: str, last_event: Event | None) -> None:
    """Raise StateMismatch unless proposed is the next legal direction."""
    expected = direction_after(last_event)
    if proposed != expected:
        raise StateMismatch(proposed, expected)
