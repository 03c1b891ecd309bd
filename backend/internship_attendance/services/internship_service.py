"""Internship attendance operations used by the API layer."""
from datetime import date
from typing import Optional

from flask import current_app

from internship_attendance import db
from internship_attendance.models.attendance import InternshipAttendance, LocationStamp
from internship_attendance.models.internship import InternshipAssignment, InternshipLocation
from internship_attendance.services.attendance_state import (
    DEFAULT_EXTREME_DISTANCE_BUFFER_METERS, AttendanceStateMachine, project_status
)
from internship_attendance.services.results import AttendanceError, ErrorKind, StatusReport
from internship_attendance.services.validation_pipeline import (
    DEFAULT_MAX_ACCURACY_METERS, AttendanceValidationPipeline, LocationSample
)
from internship_attendance.utils.validators import Validator

class AssignmentResolver:
    """Finds the internship a student is currently assigned to."""

    @staticmethod
    def get_current_assignment(student_id: int, today: date) -> Optional[InternshipAssignment]:
        """Latest-starting assignment that has not ended yet.

        Assignments that start in the future are not excluded.
        """
        return InternshipAssignment.query.filter(
            InternshipAssignment.student_id == student_id,
            InternshipAssignment.end_date >= today
        ).order_by(
            InternshipAssignment.start_date.desc(),
            InternshipAssignment.id.desc()
        ).first()

class InternshipAttendanceService:
    """Marks internship attendance and reports the day's status."""

    def __init__(self, clock, pipeline: AttendanceValidationPipeline = None,
                 state_machine: AttendanceStateMachine = None):
        self.clock = clock
        self.pipeline = pipeline or AttendanceValidationPipeline()
        self.state_machine = state_machine or AttendanceStateMachine()

    @classmethod
    def from_app(cls, app=None) -> 'InternshipAttendanceService':
        """Build the service from application config and its clock."""
        app = app or current_app
        return cls(
            clock=app.extensions['attendance_clock'],
            pipeline=AttendanceValidationPipeline(
                max_accuracy_meters=app.config.get(
                    'INTERNSHIP_MAX_ACCURACY_METERS', DEFAULT_MAX_ACCURACY_METERS
                )
            ),
            state_machine=AttendanceStateMachine(
                extreme_distance_buffer_meters=app.config.get(
                    'INTERNSHIP_EXTREME_DISTANCE_BUFFER_METERS',
                    DEFAULT_EXTREME_DISTANCE_BUFFER_METERS
                )
            )
        )

    def mark_attendance(self, student_id: int, internship_id, latitude, longitude, accuracy,
                        photo: Optional[str] = None, ip_address: Optional[str] = None):
        """Run a submission through the gates and the day's lifecycle.

        Returns CheckIn, CheckOut, Rejected or AttendanceError. Database
        failures are not caught here.
        """
        validation = Validator.validate_location_reading(latitude, longitude, accuracy)
        internship_id = Validator.coerce_int(internship_id)
        if internship_id is None:
            validation['errors'].insert(0, 'Internship is required')
            validation['is_valid'] = False
        if not validation['is_valid']:
            current_app.logger.warning(
                f"Incomplete location data from student {student_id}: {validation['errors']}"
            )
            return AttendanceError(
                ErrorKind.VALIDATION,
                f"Location data is incomplete. {'; '.join(validation['errors'])}"
            )

        location = db.session.get(InternshipLocation, internship_id)
        if location is None:
            return AttendanceError(ErrorKind.NOT_FOUND, 'Internship location not found.')

        sample = LocationSample(
            latitude=validation['latitude'],
            longitude=validation['longitude'],
            accuracy=validation['accuracy'],
            has_photo=bool(photo)
        )
        now = self.clock.now()

        verdict = self.pipeline.evaluate(sample, location, now)
        current_app.logger.info(
            f"Distance for student {student_id}: {verdict.distance:.1f}m "
            f"(Allowed: {location.radius_meters}m)"
        )
        if not verdict.accepted:
            current_app.logger.warning(
                f"Student {student_id} attendance refused: {verdict.error.kind.code}"
            )
            return verdict.error
        if verdict.is_suspicious:
            current_app.logger.info(
                f"Student {student_id} override by photo verification: {verdict.suspicious_reason}"
            )

        stamp = LocationStamp(
            latitude=sample.latitude,
            longitude=sample.longitude,
            accuracy=sample.accuracy,
            distance_from_site=verdict.distance,
            ip_address=ip_address,
            photo=photo or None,
            override_reason=verdict.suspicious_reason
        )
        return self.state_machine.apply(student_id, location, verdict, stamp, now)

    def get_today_status(self, student_id: int) -> StatusReport:
        """Project today's record (any internship) into a client status."""
        record = InternshipAttendance.query.filter_by(
            student_id=student_id,
            attendance_date=self.clock.today()
        ).order_by(InternshipAttendance.id.asc()).first()
        return project_status(record)

    def get_current_assignment(self, student_id: int) -> Optional[InternshipAssignment]:
        return AssignmentResolver.get_current_assignment(student_id, self.clock.today())
