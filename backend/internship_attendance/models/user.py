"""User model for the identities the attendance service consumes."""
from enum import Enum
from internship_attendance import db
from internship_attendance.models.base import BaseModel

class UserRole(Enum):
    """User roles enumeration."""
    STUDENT = 'student'
    ADMIN = 'admin'

class User(BaseModel):
    """Students and internship coordinators.

    Accounts and tokens are issued by the platform's auth service; this
    table only mirrors what attendance needs to resolve a JWT identity.
    """

    __tablename__ = 'users'

    email = db.Column(db.String(255), unique=True, nullable=False, index=True)
    name = db.Column(db.String(255), nullable=False)
    admission_number = db.Column(db.String(50), unique=True, nullable=True, index=True)

    role = db.Column(db.Enum(UserRole), nullable=False, default=UserRole.STUDENT)
    is_active = db.Column(db.Boolean, default=True, nullable=False)

    # Relationships
    internship_assignments = db.relationship('InternshipAssignment', backref='student', lazy='dynamic')
    internship_attendance = db.relationship('InternshipAttendance', backref='student', lazy='dynamic')

    def is_admin(self) -> bool:
        """Check if user is an internship coordinator."""
        return self.role == UserRole.ADMIN

    def is_student(self) -> bool:
        """Check if user is a student."""
        return self.role == UserRole.STUDENT

    def __repr__(self) -> str:
        return f'<User {self.email}>'
