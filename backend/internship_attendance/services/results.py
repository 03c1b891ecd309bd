"""Typed outcomes of an attendance submission."""
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

class ErrorKind(Enum):
    """Why a submission was refused, with the HTTP status it maps to."""
    VALIDATION = ('VALIDATION', 400)
    NOT_FOUND = ('NOT_FOUND', 404)
    ACCURACY_TOO_LOW = ('ACCURACY_TOO_LOW', 400)
    LOCATION_MISMATCH = ('LOCATION_MISMATCH', 400)
    OUTSIDE_TIME_WINDOW = ('OUTSIDE_TIME_WINDOW', 400)
    ALREADY_COMPLETED = ('ALREADY_COMPLETED', 400)
    ATTENDANCE_REJECTED = ('ATTENDANCE_REJECTED', 400)

    def __init__(self, code: str, status_code: int):
        self.code = code
        self.status_code = status_code

class ResultType(Enum):
    CHECK_IN = 'CHECK_IN'
    CHECK_OUT = 'CHECK_OUT'
    REJECTED = 'REJECTED'
    ERROR = 'ERROR'

@dataclass(frozen=True)
class AttendanceError:
    kind: ErrorKind
    message: str
    requires_photo: bool = False
    type: ResultType = field(default=ResultType.ERROR, init=False)

    @property
    def ok(self) -> bool:
        return False

@dataclass(frozen=True)
class CheckIn:
    record: object
    message: str = 'Check-in successful.'
    type: ResultType = field(default=ResultType.CHECK_IN, init=False)

    @property
    def ok(self) -> bool:
        return True

@dataclass(frozen=True)
class CheckOut:
    record: object
    message: str = 'Check-out successful.'
    type: ResultType = field(default=ResultType.CHECK_OUT, init=False)

    @property
    def ok(self) -> bool:
        return True

@dataclass(frozen=True)
class Rejected:
    record: object
    message: str = 'You are too far from the location. Attendance marked as Rejected.'
    type: ResultType = field(default=ResultType.REJECTED, init=False)

    @property
    def ok(self) -> bool:
        return True

class TodayStatus(Enum):
    """Client-facing projection of the day's record."""
    NOT_STARTED = 'NOT_STARTED'
    CHECKED_IN = 'CHECKED_IN'
    COMPLETED = 'COMPLETED'
    UNKNOWN = 'UNKNOWN'

@dataclass(frozen=True)
class StatusReport:
    status: TodayStatus
    record: Optional[object] = None
