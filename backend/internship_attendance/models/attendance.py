"""Daily internship attendance record with check-in and check-out evidence."""
from dataclasses import asdict, dataclass
from enum import Enum
from typing import Optional
from sqlalchemy.types import JSON, TypeDecorator
from internship_attendance import db
from internship_attendance.models.base import BaseModel

class AttendanceStatus(Enum):
    """Outcome stored on a day's record."""
    PRESENT = 'Present'
    REJECTED = 'Rejected'

@dataclass(frozen=True)
class LocationStamp:
    """Where and how a check-in or check-out was captured."""
    latitude: float
    longitude: float
    accuracy: float
    distance_from_site: float
    ip_address: Optional[str] = None
    photo: Optional[str] = None
    override_reason: Optional[str] = None

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> 'LocationStamp':
        return cls(
            latitude=data['latitude'],
            longitude=data['longitude'],
            accuracy=data['accuracy'],
            distance_from_site=data['distance_from_site'],
            ip_address=data.get('ip_address'),
            photo=data.get('photo'),
            override_reason=data.get('override_reason')
        )

class LocationStampType(TypeDecorator):
    """Persist a LocationStamp as a JSON document."""

    impl = JSON
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        return value.to_dict()

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        return LocationStamp.from_dict(value)

class InternshipAttendance(BaseModel):
    """One row per student, internship and calendar day."""

    __tablename__ = 'internship_attendance'

    student_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False)
    internship_id = db.Column(db.Integer, db.ForeignKey('internship_locations.id'), nullable=False)
    attendance_date = db.Column(db.Date, nullable=False)

    check_in_time = db.Column(db.DateTime, nullable=True)
    check_in_location = db.Column(LocationStampType, nullable=True)
    check_out_time = db.Column(db.DateTime, nullable=True)
    check_out_location = db.Column(LocationStampType, nullable=True)

    status = db.Column(db.Enum(AttendanceStatus), nullable=False, default=AttendanceStatus.PRESENT)
    is_suspicious = db.Column(db.Boolean, nullable=False, default=False)
    suspicious_reason = db.Column(db.String(255), nullable=True)

    __table_args__ = (
        db.UniqueConstraint(
            'student_id', 'internship_id', 'attendance_date',
            name='uq_internship_attendance_day'
        ),
    )

    @classmethod
    def find_for_day(cls, student_id: int, internship_id: int, attendance_date) -> Optional['InternshipAttendance']:
        """Fetch the single record for a student's internship day."""
        return cls.query.filter_by(
            student_id=student_id,
            internship_id=internship_id,
            attendance_date=attendance_date
        ).first()

    def to_dict(self, exclude: list = None, include_photos: bool = False) -> dict:
        """Convert to dictionary; photos are omitted unless asked for."""
        result = super().to_dict(exclude=(exclude or []) + ['check_in_location', 'check_out_location'])
        result['check_in_location'] = self._stamp_dict(self.check_in_location, include_photos)
        result['check_out_location'] = self._stamp_dict(self.check_out_location, include_photos)
        return result

    @staticmethod
    def _stamp_dict(stamp: Optional[LocationStamp], include_photo: bool) -> Optional[dict]:
        if stamp is None:
            return None
        data = stamp.to_dict()
        photo = data.pop('photo')
        data['has_photo'] = bool(photo)
        if include_photo:
            data['photo'] = photo
        return data

    def __repr__(self) -> str:
        return f'<InternshipAttendance {self.student_id}-{self.internship_id} {self.attendance_date}>'
