"""Test the accuracy, location and time-window gates."""
import re
from datetime import datetime
from types import SimpleNamespace

import pytest

from internship_attendance.services.results import ErrorKind
from internship_attendance.services.suspicion import SuspicionClassifier, round_meters
from internship_attendance.services.validation_pipeline import (
    AttendanceValidationPipeline, LocationSample
)

SITE = SimpleNamespace(
    latitude=17.4474,
    longitude=78.3762,
    radius_meters=200,
    allowed_start_time='09:00',
    allowed_end_time='18:00'
)
MORNING = datetime(2026, 10, 19, 10, 0)
NEAR = SITE.latitude + 50 / 111195.0
FAR = SITE.latitude + 800 / 111195.0

@pytest.fixture
def pipeline():
    return AttendanceValidationPipeline()

def sample(lat=NEAR, accuracy=20, has_photo=False):
    return LocationSample(latitude=lat, longitude=SITE.longitude, accuracy=accuracy, has_photo=has_photo)

def test_clean_submission_passes(pipeline):
    verdict = pipeline.evaluate(sample(), SITE, MORNING)
    assert verdict.accepted
    assert not verdict.is_suspicious
    assert verdict.suspicious_reason is None
    assert verdict.distance == pytest.approx(50, abs=1)

def test_accuracy_at_threshold_is_accepted(pipeline):
    verdict = pipeline.evaluate(sample(accuracy=100), SITE, MORNING)
    assert verdict.accepted
    assert not verdict.is_suspicious

def test_low_accuracy_without_photo_requires_photo(pipeline):
    verdict = pipeline.evaluate(sample(accuracy=150), SITE, MORNING)
    assert not verdict.accepted
    assert verdict.error.kind is ErrorKind.ACCURACY_TOO_LOW
    assert verdict.error.requires_photo
    assert '150m' in verdict.error.message

def test_low_accuracy_with_photo_is_suspicious(pipeline):
    verdict = pipeline.evaluate(sample(accuracy=150.4, has_photo=True), SITE, MORNING)
    assert verdict.accepted
    assert verdict.is_suspicious
    assert verdict.suspicious_reason == 'Low Accuracy (150m). Photo Verified.'

def test_accuracy_override_skips_location_gate(pipeline):
    verdict = pipeline.evaluate(sample(lat=FAR, accuracy=150, has_photo=True), SITE, MORNING)
    assert verdict.accepted
    assert verdict.suspicious_reason.startswith('Low Accuracy')
    assert verdict.distance > SITE.radius_meters

def test_outside_radius_without_photo_requires_photo(pipeline):
    verdict = pipeline.evaluate(sample(lat=FAR), SITE, MORNING)
    assert not verdict.accepted
    assert verdict.error.kind is ErrorKind.LOCATION_MISMATCH
    assert verdict.error.requires_photo
    assert 'Allowed radius: 200m' in verdict.error.message

def test_outside_radius_with_photo_is_suspicious(pipeline):
    verdict = pipeline.evaluate(sample(lat=FAR, has_photo=True), SITE, MORNING)
    assert verdict.accepted
    assert verdict.is_suspicious
    assert re.fullmatch(r'Location Mismatch \(\d+m away\)\. Photo Verified\.', verdict.suspicious_reason)
    assert f'({round_meters(verdict.distance)}m away)' in verdict.suspicious_reason

@pytest.mark.parametrize('hour, minute', [(8, 59), (18, 1), (23, 30), (0, 0)])
def test_outside_time_window_is_refused_even_with_photo(pipeline, hour, minute):
    now = MORNING.replace(hour=hour, minute=minute)
    verdict = pipeline.evaluate(sample(lat=FAR, has_photo=True), SITE, now)
    assert not verdict.accepted
    assert verdict.error.kind is ErrorKind.OUTSIDE_TIME_WINDOW
    assert not verdict.error.requires_photo
    assert '09:00 and 18:00' in verdict.error.message

@pytest.mark.parametrize('hour, minute', [(9, 0), (18, 0)])
def test_time_window_is_inclusive(pipeline, hour, minute):
    now = MORNING.replace(hour=hour, minute=minute, second=59)
    assert pipeline.evaluate(sample(), SITE, now).accepted

def test_soft_gates_run_before_time_window(pipeline):
    evening = MORNING.replace(hour=20)
    verdict = pipeline.evaluate(sample(accuracy=300), SITE, evening)
    assert verdict.error.kind is ErrorKind.ACCURACY_TOO_LOW

def test_threshold_is_configurable():
    strict = AttendanceValidationPipeline(max_accuracy_meters=30)
    verdict = strict.evaluate(sample(accuracy=50), SITE, MORNING)
    assert verdict.error.kind is ErrorKind.ACCURACY_TOO_LOW

def test_reasons_round_half_up():
    assert round_meters(2.5) == 3
    assert round_meters(2.49) == 2
    assert SuspicionClassifier.extreme_distance(2500.5).reason == 'Extreme Distance: 2501m'
