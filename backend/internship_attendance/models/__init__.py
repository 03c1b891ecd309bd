"""Models package with all models."""
from .base import BaseModel
from .user import User, UserRole
from .internship import InternshipLocation, InternshipAssignment
from .attendance import (
    InternshipAttendance, AttendanceStatus, LocationStamp
)

__all__ = [
    'BaseModel', 'User', 'UserRole',
    'InternshipLocation', 'InternshipAssignment',
    'InternshipAttendance', 'AttendanceStatus', 'LocationStamp'
]
