"""Test the daily check-in / check-out lifecycle."""
from datetime import date, datetime, timedelta

import pytest

from conftest import SITE_LNG, offset_north
from internship_attendance import db
from internship_attendance.models.attendance import (
    AttendanceStatus, InternshipAttendance, LocationStamp
)
from internship_attendance.models.internship import InternshipAssignment
from internship_attendance.services.attendance_state import DayState, day_state, project_status
from internship_attendance.services.internship_service import (
    AssignmentResolver, InternshipAttendanceService
)
from internship_attendance.services.results import (
    AttendanceError, CheckIn, CheckOut, ErrorKind, Rejected, ResultType, TodayStatus
)

@pytest.fixture
def service(app):
    return InternshipAttendanceService.from_app(app)

def submit(service, student, location, meters=30, accuracy=15, photo=None):
    lat, lng = offset_north(meters)
    return service.mark_attendance(
        student_id=student.id,
        internship_id=location.id,
        latitude=lat,
        longitude=lng,
        accuracy=accuracy,
        photo=photo,
        ip_address='10.0.0.7'
    )

def records():
    return InternshipAttendance.query.all()

def test_day_state_derivation():
    assert day_state(None) is DayState.NO_RECORD
    open_day = InternshipAttendance(status=AttendanceStatus.PRESENT, check_in_time=datetime(2026, 10, 19, 9))
    assert day_state(open_day) is DayState.CHECKED_IN
    open_day.check_out_time = datetime(2026, 10, 19, 17)
    assert day_state(open_day) is DayState.COMPLETED
    rejected = InternshipAttendance(status=AttendanceStatus.REJECTED, check_in_time=datetime(2026, 10, 19, 9))
    assert day_state(rejected) is DayState.REJECTED

def test_status_projection():
    assert project_status(None).status is TodayStatus.NOT_STARTED
    record = InternshipAttendance(check_in_time=datetime(2026, 10, 19, 9))
    assert project_status(record).status is TodayStatus.CHECKED_IN
    record.check_out_time = datetime(2026, 10, 19, 17)
    assert project_status(record).status is TodayStatus.COMPLETED
    assert project_status(InternshipAttendance()).status is TodayStatus.UNKNOWN

def test_first_valid_submission_checks_in(service, student, location, clock):
    result = submit(service, student, location)

    assert isinstance(result, CheckIn)
    assert result.type is ResultType.CHECK_IN
    record = result.record
    assert record.status is AttendanceStatus.PRESENT
    assert record.is_suspicious is False
    assert record.suspicious_reason is None
    assert record.attendance_date == date(2026, 10, 19)
    assert record.check_in_time == clock.now()
    assert record.check_out_time is None
    assert isinstance(record.check_in_location, LocationStamp)
    assert record.check_in_location.ip_address == '10.0.0.7'
    assert record.check_in_location.distance_from_site == pytest.approx(30, abs=1)

def test_check_in_check_out_then_already_completed(service, student, location, clock):
    assert isinstance(submit(service, student, location), CheckIn)

    clock.advance(timedelta(hours=7))
    result = submit(service, student, location, meters=60)
    assert isinstance(result, CheckOut)
    assert result.record.status is AttendanceStatus.PRESENT
    assert result.record.check_out_time == datetime(2026, 10, 19, 17, 0)
    assert result.record.check_out_location.distance_from_site == pytest.approx(60, abs=1)

    clock.advance(timedelta(minutes=30))
    result = submit(service, student, location)
    assert isinstance(result, AttendanceError)
    assert result.kind is ErrorKind.ALREADY_COMPLETED
    assert len(records()) == 1

def test_next_day_starts_a_new_cycle(service, student, location, clock):
    submit(service, student, location)
    clock.advance(timedelta(days=1))
    assert isinstance(submit(service, student, location), CheckIn)
    assert len(records()) == 2

def test_soft_failure_creates_no_record(service, student, location):
    result = submit(service, student, location, accuracy=250)
    assert result.kind is ErrorKind.ACCURACY_TOO_LOW
    assert result.requires_photo

    result = submit(service, student, location, meters=900)
    assert result.kind is ErrorKind.LOCATION_MISMATCH
    assert result.requires_photo
    assert records() == []

def test_low_accuracy_with_photo_checks_in_as_suspicious(service, student, location):
    result = submit(service, student, location, accuracy=180, photo='data:image/jpeg;base64,AAA')

    assert isinstance(result, CheckIn)
    assert result.record.is_suspicious is True
    assert '180m' in result.record.suspicious_reason
    assert result.record.check_in_location.photo == 'data:image/jpeg;base64,AAA'

def test_moderate_distance_with_photo_stays_present(service, student, location):
    result = submit(service, student, location, meters=1500, photo='photo-ref')

    assert isinstance(result, CheckIn)
    assert result.record.status is AttendanceStatus.PRESENT
    assert result.record.is_suspicious is True
    assert result.record.suspicious_reason.startswith('Location Mismatch (1500m away)')

def test_extreme_distance_is_rejected(service, student, location):
    result = submit(service, student, location, meters=5000, photo='photo-ref')

    assert isinstance(result, Rejected)
    assert result.type is ResultType.REJECTED
    assert result.record.status is AttendanceStatus.REJECTED
    assert result.record.is_suspicious is True
    assert result.record.suspicious_reason == 'Extreme Distance: 5000m'

def test_rejected_day_refuses_resubmission(service, student, location, clock):
    submit(service, student, location, meters=5000, photo='photo-ref')
    clock.advance(timedelta(hours=1))

    result = submit(service, student, location)
    assert result.kind is ErrorKind.ATTENDANCE_REJECTED
    record = records()[0]
    assert record.check_out_time is None
    assert record.status is AttendanceStatus.REJECTED

def test_extreme_distance_on_check_out_is_not_rejected(service, student, location, clock):
    submit(service, student, location)
    clock.advance(timedelta(hours=6))

    result = submit(service, student, location, meters=5000, photo='photo-ref')
    assert isinstance(result, CheckOut)
    assert result.record.status is AttendanceStatus.PRESENT
    assert result.record.is_suspicious is False
    assert result.record.suspicious_reason is None
    assert result.record.check_out_location.override_reason.startswith('Location Mismatch')

def test_photo_check_out_leaves_day_flags_untouched(service, student, location, clock):
    submit(service, student, location)
    clock.advance(timedelta(hours=6))

    result = submit(service, student, location, accuracy=300, photo='photo-ref')
    assert isinstance(result, CheckOut)
    record = result.record
    assert record.is_suspicious is False
    assert record.suspicious_reason is None
    assert record.check_in_location.override_reason is None
    assert record.check_out_location.override_reason == 'Low Accuracy (300m). Photo Verified.'

def test_suspicious_check_in_keeps_its_reason_through_check_out(service, student, location, clock):
    submit(service, student, location, meters=900, photo='photo-ref')
    clock.advance(timedelta(hours=6))

    result = submit(service, student, location, accuracy=300, photo='photo-ref')
    assert result.record.is_suspicious is True
    assert result.record.suspicious_reason.startswith('Location Mismatch (900m away)')

def test_outside_window_blocks_check_in(service, student, location, clock):
    clock.set(datetime(2026, 10, 19, 7, 45))
    result = submit(service, student, location, photo='photo-ref')
    assert result.kind is ErrorKind.OUTSIDE_TIME_WINDOW
    assert records() == []

def test_unknown_internship_is_not_found(service, student):
    result = service.mark_attendance(student.id, 999, 17.4474, SITE_LNG, 10)
    assert result.kind is ErrorKind.NOT_FOUND
    assert result.kind.status_code == 404

@pytest.mark.parametrize('latitude, longitude, accuracy', [
    (None, SITE_LNG, 10),
    (17.4474, None, 10),
    (17.4474, SITE_LNG, None),
    ('north', SITE_LNG, 10),
    (123.0, SITE_LNG, 10),
])
def test_incomplete_reading_is_a_validation_error(service, student, location, latitude, longitude, accuracy):
    result = service.mark_attendance(student.id, location.id, latitude, longitude, accuracy)
    assert result.kind is ErrorKind.VALIDATION
    assert records() == []

def test_concurrent_first_submission_becomes_check_out(service, student, location, monkeypatch):
    submit(service, student, location)

    original = InternshipAttendance.find_for_day
    calls = []

    def stale_then_fresh(student_id, internship_id, attendance_date):
        calls.append(attendance_date)
        if len(calls) == 1:
            return None
        return original(student_id, internship_id, attendance_date)

    monkeypatch.setattr(InternshipAttendance, 'find_for_day', stale_then_fresh)

    result = submit(service, student, location)
    assert isinstance(result, CheckOut)
    assert len(calls) == 2
    assert len(records()) == 1

def test_today_status_follows_lifecycle(service, student, location, clock):
    assert service.get_today_status(student.id).status is TodayStatus.NOT_STARTED

    submit(service, student, location)
    report = service.get_today_status(student.id)
    assert report.status is TodayStatus.CHECKED_IN
    assert report.record.internship_id == location.id

    clock.advance(timedelta(hours=8))
    submit(service, student, location)
    assert service.get_today_status(student.id).status is TodayStatus.COMPLETED

def test_current_assignment_prefers_latest_start(app, student, location, assignment):
    later = InternshipAssignment(
        student_id=student.id,
        internship_id=location.id,
        start_date=date(2026, 11, 1),
        end_date=date(2026, 11, 30),
        allowed_days=['Monday']
    ).save()
    InternshipAssignment(
        student_id=student.id,
        internship_id=location.id,
        start_date=date(2026, 12, 1),
        end_date=date(2026, 10, 18),
        allowed_days=['Monday']
    ).save()

    # A not-yet-started assignment still counts as current
    current = AssignmentResolver.get_current_assignment(student.id, date(2026, 10, 19))
    assert current.id == later.id

def test_no_current_assignment_after_end_date(app, student, assignment):
    assert AssignmentResolver.get_current_assignment(student.id, date(2027, 1, 1)) is None
