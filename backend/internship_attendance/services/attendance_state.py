"""Per-day lifecycle of an internship attendance record.

NO_RECORD -> CHECKED_IN -> COMPLETED, or NO_RECORD -> REJECTED when the
first submission of the day comes from an extreme distance.
"""
from enum import Enum
from datetime import datetime
from typing import Optional

from flask import current_app
from sqlalchemy.exc import IntegrityError

from internship_attendance import db
from internship_attendance.models.attendance import (
    AttendanceStatus, InternshipAttendance, LocationStamp
)
from internship_attendance.services.results import (
    AttendanceError, CheckIn, CheckOut, ErrorKind, Rejected, StatusReport, TodayStatus
)
from internship_attendance.services.suspicion import SuspicionClassifier
from internship_attendance.services.validation_pipeline import GateVerdict

DEFAULT_EXTREME_DISTANCE_BUFFER_METERS = 2000

class DayState(Enum):
    NO_RECORD = 'NO_RECORD'
    CHECKED_IN = 'CHECKED_IN'
    COMPLETED = 'COMPLETED'
    REJECTED = 'REJECTED'

def day_state(record: Optional[InternshipAttendance]) -> DayState:
    """Lifecycle state of a day given its record (or lack of one)."""
    if record is None:
        return DayState.NO_RECORD
    if record.status == AttendanceStatus.REJECTED:
        return DayState.REJECTED
    if record.check_out_time is not None:
        return DayState.COMPLETED
    return DayState.CHECKED_IN

def project_status(record: Optional[InternshipAttendance]) -> StatusReport:
    """Status shown to the student for the day."""
    if record is None:
        return StatusReport(TodayStatus.NOT_STARTED)
    if record.check_in_time and not record.check_out_time:
        return StatusReport(TodayStatus.CHECKED_IN, record)
    if record.check_in_time and record.check_out_time:
        return StatusReport(TodayStatus.COMPLETED, record)
    return StatusReport(TodayStatus.UNKNOWN, record)

class AttendanceStateMachine:
    """Applies an accepted gate verdict to the day's record."""

    def __init__(self, extreme_distance_buffer_meters: float = DEFAULT_EXTREME_DISTANCE_BUFFER_METERS):
        self.extreme_distance_buffer_meters = extreme_distance_buffer_meters

    def apply(self, student_id: int, location, verdict: GateVerdict,
              stamp: LocationStamp, now: datetime):
        """Check in, check out or refuse, returning a typed result."""
        try:
            return self._transition(student_id, location, verdict, stamp, now)
        except IntegrityError:
            # Another request created today's record between our read and insert
            db.session.rollback()
            current_app.logger.warning(
                f"Concurrent attendance submission for student {student_id}, "
                f"internship {location.id}; re-reading today's record"
            )
            return self._transition(student_id, location, verdict, stamp, now)

    def _transition(self, student_id, location, verdict, stamp, now):
        record = InternshipAttendance.find_for_day(student_id, location.id, now.date())
        state = day_state(record)

        if state is DayState.NO_RECORD:
            return self._check_in(student_id, location, verdict, stamp, now)
        if state is DayState.CHECKED_IN:
            return self._check_out(record, verdict, stamp, now)
        if state is DayState.REJECTED:
            return AttendanceError(
                ErrorKind.ATTENDANCE_REJECTED,
                'Your attendance for today was rejected. Contact your internship coordinator.'
            )
        return self._already_completed()

    def _check_in(self, student_id, location, verdict, stamp, now):
        record = InternshipAttendance(
            student_id=student_id,
            internship_id=location.id,
            attendance_date=now.date(),
            check_in_time=now,
            check_in_location=stamp
        )

        if verdict.distance > location.radius_meters + self.extreme_distance_buffer_meters:
            flag = SuspicionClassifier.extreme_distance(verdict.distance)
            record.status = AttendanceStatus.REJECTED
            record.is_suspicious = True
            record.suspicious_reason = flag.reason
            db.session.add(record)
            db.session.commit()
            current_app.logger.info(
                f"Student {student_id} marked as REJECTED due to extreme distance "
                f"({verdict.distance:.0f}m from internship {location.id})"
            )
            return Rejected(record)

        record.status = AttendanceStatus.PRESENT
        record.is_suspicious = verdict.is_suspicious
        record.suspicious_reason = verdict.suspicious_reason
        db.session.add(record)
        db.session.commit()
        current_app.logger.info(f"Student {student_id} checked in successfully. ID: {record.id}")
        return CheckIn(record)

    def _check_out(self, record, verdict, stamp, now):
        values = {
            'check_out_time': now,
            'check_out_location': stamp,
            'updated_at': datetime.utcnow()
        }
        # Only the first check-out of the day may land
        updated = InternshipAttendance.query.filter_by(
            id=record.id,
            check_out_time=None
        ).update(values, synchronize_session=False)

        if not updated:
            db.session.rollback()
            return self._already_completed()

        db.session.commit()
        db.session.refresh(record)
        current_app.logger.info(f"Student {record.student_id} checked out successfully.")
        return CheckOut(record)

    @staticmethod
    def _already_completed() -> AttendanceError:
        return AttendanceError(
            ErrorKind.ALREADY_COMPLETED,
            'You have already completed attendance for today.'
        )
