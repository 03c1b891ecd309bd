"""Ordered gates an internship attendance submission must clear.

Gates run accuracy -> location -> time window. The first two are soft:
a photo lets the submission through but marks it suspicious. The time
window is hard and applies even to photo-verified submissions.
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from internship_attendance.services.geofence_service import GeofenceService
from internship_attendance.services.results import AttendanceError, ErrorKind
from internship_attendance.services.suspicion import (
    CLEAR, SuspicionClassifier, SuspicionFlag, round_meters
)

DEFAULT_MAX_ACCURACY_METERS = 100

@dataclass(frozen=True)
class LocationSample:
    """A location reading submitted by a student."""
    latitude: float
    longitude: float
    accuracy: float
    has_photo: bool = False

@dataclass(frozen=True)
class GateVerdict:
    accepted: bool
    distance: float
    suspicion: SuspicionFlag = CLEAR
    error: Optional[AttendanceError] = None

    @property
    def is_suspicious(self) -> bool:
        return self.suspicion.is_suspicious

    @property
    def suspicious_reason(self) -> Optional[str]:
        return self.suspicion.reason

    @classmethod
    def refused(cls, distance: float, error: AttendanceError) -> 'GateVerdict':
        return cls(accepted=False, distance=distance, error=error)

class AttendanceValidationPipeline:
    """Runs the accuracy, location and time-window gates."""

    def __init__(self, max_accuracy_meters: float = DEFAULT_MAX_ACCURACY_METERS):
        self.max_accuracy_meters = max_accuracy_meters

    def evaluate(self, sample: LocationSample, location, now: datetime) -> GateVerdict:
        """Evaluate a sample against an internship site at local time `now`."""
        distance = GeofenceService.distance_to_site(sample.latitude, sample.longitude, location)
        suspicion = CLEAR

        # 1. Accuracy
        if sample.accuracy > self.max_accuracy_meters:
            if not sample.has_photo:
                return GateVerdict.refused(distance, AttendanceError(
                    ErrorKind.ACCURACY_TOO_LOW,
                    f"Location accuracy is too low ({round_meters(sample.accuracy)}m). "
                    "Please verify with photo.",
                    requires_photo=True
                ))
            suspicion = SuspicionClassifier.low_accuracy(sample.accuracy)

        # 2. Radius, skipped once accuracy already forced a photo
        if not suspicion and distance > location.radius_meters:
            if not sample.has_photo:
                return GateVerdict.refused(distance, AttendanceError(
                    ErrorKind.LOCATION_MISMATCH,
                    f"You are {round_meters(distance)}m away from the location. "
                    f"Allowed radius: {location.radius_meters}m.",
                    requires_photo=True
                ))
            suspicion = SuspicionClassifier.location_mismatch(distance)

        # 3. Time window (HH:MM strings; windows crossing midnight are not supported)
        current_time = now.strftime('%H:%M')
        if current_time < location.allowed_start_time or current_time > location.allowed_end_time:
            return GateVerdict.refused(distance, AttendanceError(
                ErrorKind.OUTSIDE_TIME_WINDOW,
                f"Attendance is only allowed between {location.allowed_start_time} "
                f"and {location.allowed_end_time}."
            ))

        return GateVerdict(accepted=True, distance=distance, suspicion=suspicion)
