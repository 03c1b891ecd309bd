"""Shared fixtures for the internship attendance tests."""
from datetime import date, datetime

import pytest
from flask_jwt_extended import create_access_token

from internship_attendance import create_app, db
from internship_attendance.models.internship import InternshipAssignment, InternshipLocation
from internship_attendance.models.user import User, UserRole
from internship_attendance.services.clock import FixedClock

SITE_LAT = 17.4474
SITE_LNG = 78.3762

@pytest.fixture
def clock():
    """Clock pinned inside the site's attendance window."""
    return FixedClock(datetime(2026, 10, 19, 10, 0))

@pytest.fixture
def app(clock):
    """Create test app."""
    app = create_app('testing', clock=clock)
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()

@pytest.fixture
def client(app):
    """Create test client."""
    return app.test_client()

@pytest.fixture
def location(app):
    """Internship site with a 200m geofence open 09:00-18:00."""
    site = InternshipLocation(
        company_name='Acme Labs',
        address='Plot 12, HITEC City',
        latitude=SITE_LAT,
        longitude=SITE_LNG,
        radius_meters=200,
        allowed_start_time='09:00',
        allowed_end_time='18:00'
    )
    return site.save()

@pytest.fixture
def student(app):
    """Create sample student."""
    user = User(
        email='student@college.edu',
        name='Test Student',
        admission_number='22A91A0501',
        role=UserRole.STUDENT
    )
    return user.save()

@pytest.fixture
def admin(app):
    """Create sample coordinator."""
    user = User(
        email='admin@college.edu',
        name='Coordinator',
        role=UserRole.ADMIN
    )
    return user.save()

@pytest.fixture
def assignment(app, student, location):
    """Student assigned to the site for the whole term."""
    return InternshipAssignment(
        student_id=student.id,
        internship_id=location.id,
        start_date=date(2026, 10, 1),
        end_date=date(2026, 12, 31),
        allowed_days=['Monday', 'Tuesday', 'Wednesday', 'Thursday', 'Friday']
    ).save()

@pytest.fixture
def student_headers(student):
    token = create_access_token(identity=str(student.id))
    return {'Authorization': f'Bearer {token}'}

@pytest.fixture
def admin_headers(admin):
    token = create_access_token(identity=str(admin.id))
    return {'Authorization': f'Bearer {token}'}

def offset_north(meters: float):
    """Coordinates roughly `meters` due north of the site."""
    return SITE_LAT + meters / 111195.0, SITE_LNG
