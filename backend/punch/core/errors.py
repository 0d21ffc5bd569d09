"""
Domain errors raised by the punch engine and its storage layer.

Routers translate these into HTTP responses; nothing here knows about HTTP.
"""


class PunchError(Exception):
    """Base class for all punch failures."""


class ProjectNotFound(PunchError):
    def __init__(self, project_id: int) -> None:
        super().__init__(f"Project {project_id} not found")
        self.project_id = project_id


class StateMismatch(PunchError):
    """A punch was submitted in the wrong direction."""

    def __init__(self, proposed: str, expected: str) -> None:
        super().__init__(f"Cannot punch '{proposed}': next expected punch is '{expected}'")
        self.proposed = proposed
        self.expected = expected


class AmbiguousOrInvalidLocalTime(PunchError):
    """A local wall-clock value maps to zero or two UTC instants."""

    def __init__(self, local_dt, reason: str) -> None:
        super().__init__(f"Local time {local_dt.isoformat()} is {reason}")
        self.local_dt = local_dt
        self.reason = reason


class AlreadyInitialized(PunchError):
    pass


class StorageUnavailable(PunchError):
    pass
