from __future__ import annotations

from enum import Enum


class WindowUnit(str, Enum):
    NANOSECONDS = "nanoseconds"
    MICROSECONDS = "microseconds"
    MILLISECONDS = "milliseconds"
    SECONDS = "seconds"
    MINUTES = "minutes"
    HOURS = "hours"
    DAYS = "days"

    @property
    def seconds(self) -> float:
        """Length of one unit in seconds."""
        return _UNIT_SECONDS[self]

    @classmethod
    def from_str(cls, value: str) -> "WindowUnit":
        """Parse a unit name, case-insensitive. Singular forms are accepted (e.g. "second")."""
        s = value.strip().lower()
        if not s:
            raise ValueError("window unit must not be empty")
        for unit in cls:
            if s in (unit.value, unit.value[:-1]):
                return unit
        raise ValueError(f"unknown window unit: {value!r}")


_UNIT_SECONDS = {
    WindowUnit.NANOSECONDS: 1e-9,
    WindowUnit.MICROSECONDS: 1e-6,
    WindowUnit.MILLISECONDS: 1e-3,
    WindowUnit.SECONDS: 1.0,
    WindowUnit.MINUTES: 60.0,
    WindowUnit.HOURS: 3600.0,
    WindowUnit.DAYS: 86400.0,
}


class SchedulerState(Enum):
    CREATED = "CREATED"
    RUNNING = "RUNNING"
    STOPPED = "STOPPED"


class SubmissionStatus(Enum):
    SUCCESS = "SUCCESS"
    REJECTED = "REJECTED"  # non-200 HTTP status
    SERIALIZATION_ERROR = "SERIALIZATION_ERROR"
    TRANSPORT_ERROR = "TRANSPORT_ERROR"
    ADMISSION_TIMEOUT = "ADMISSION_TIMEOUT"
