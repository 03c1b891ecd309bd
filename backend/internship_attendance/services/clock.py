"""Clock sources for attendance time windows and day bucketing."""
from datetime import date, datetime
from typing import Protocol

class Clock(Protocol):
    """Anything that can tell the current server-local time."""

    def now(self) -> datetime:
        ...

    def today(self) -> date:
        ...

class SystemClock:
    """Server-local wall clock."""

    def now(self) -> datetime:
        return datetime.now()

    def today(self) -> date:
        return self.now().date()

class FixedClock:
    """Clock pinned to a given instant; move it with `set` or `advance`."""

    def __init__(self, current: datetime):
        self.current = current

    def now(self) -> datetime:
        return self.current

    def today(self) -> date:
        return self.current.date()

    def set(self, current: datetime) -> None:
        self.current = current

    def advance(self, delta) -> None:
        self.current = self.current + delta
