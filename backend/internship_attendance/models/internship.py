"""Internship sites and the student assignments that point at them."""
from internship_attendance import db
from internship_attendance.models.base import BaseModel

class InternshipLocation(BaseModel):
    """A company site with its geofence and daily attendance window."""

    __tablename__ = 'internship_locations'

    company_name = db.Column(db.String(255), nullable=False)
    address = db.Column(db.String(500), nullable=False)

    # Geofence center and radius
    latitude = db.Column(db.Float, nullable=False)
    longitude = db.Column(db.Float, nullable=False)
    radius_meters = db.Column(db.Integer, nullable=False, default=200)

    # Local time of day, HH:MM
    allowed_start_time = db.Column(db.String(5), nullable=False)
    allowed_end_time = db.Column(db.String(5), nullable=False)

    is_active = db.Column(db.Boolean, default=True, nullable=False)

    __table_args__ = (
        db.CheckConstraint('radius_meters >= 0', name='ck_internship_radius_non_negative'),
    )

    assignments = db.relationship('InternshipAssignment', backref='internship', lazy='dynamic')
    attendance_records = db.relationship('InternshipAttendance', backref='internship', lazy='dynamic')

    def to_dict(self, exclude: list = None) -> dict:
        result = super().to_dict(exclude=exclude)
        result['radius'] = self.radius_meters
        return result

    def __repr__(self) -> str:
        return f'<InternshipLocation {self.company_name}>'

class InternshipAssignment(BaseModel):
    """Links a student to an internship site for a date range."""

    __tablename__ = 'internship_assignments'

    student_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False, index=True)
    internship_id = db.Column(db.Integer, db.ForeignKey('internship_locations.id'), nullable=False)
    start_date = db.Column(db.Date, nullable=False)
    end_date = db.Column(db.Date, nullable=False)
    allowed_days = db.Column(db.JSON, nullable=False, default=list)  # ["Monday", "Tuesday", ...]

    def to_dict(self, exclude: list = None) -> dict:
        result = super().to_dict(exclude=exclude)
        location = self.internship
        if location is not None:
            result.update({
                'company_name': location.company_name,
                'address': location.address,
                'latitude': location.latitude,
                'longitude': location.longitude,
                'radius': location.radius_meters,
                'allowed_start_time': location.allowed_start_time,
                'allowed_end_time': location.allowed_end_time
            })
        return result

    def __repr__(self) -> str:
        return f'<InternshipAssignment {self.student_id}-{self.internship_id}>'
