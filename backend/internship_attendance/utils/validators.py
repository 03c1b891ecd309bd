"""Validation utilities for the application."""
import math
import re
from datetime import date
from typing import Dict, List, Any, Optional

TIME_OF_DAY_PATTERN = re.compile(r'^([01]\d|2[0-3]):([0-5]\d)(:[0-5]\d)?$')
WEEKDAYS = ['Monday', 'Tuesday', 'Wednesday', 'Thursday', 'Friday', 'Saturday', 'Sunday']

class Validator:
    """Validation helper class."""

    @staticmethod
    def coerce_float(value: Any) -> Optional[float]:
        """Parse a finite number, or None."""
        if value is None or value == '' or isinstance(value, bool):
            return None
        try:
            number = float(value)
        except (TypeError, ValueError):
            return None
        if not math.isfinite(number):
            return None
        return number

    @staticmethod
    def coerce_int(value: Any) -> Optional[int]:
        """Parse an integer identifier, or None."""
        if value is None or value == '' or isinstance(value, bool):
            return None
        try:
            return int(value)
        except (TypeError, ValueError):
            return None

    @staticmethod
    def validate_location_reading(latitude: Any, longitude: Any, accuracy: Any) -> Dict[str, Any]:
        """Validate a GPS reading; parsed floats are returned alongside errors."""
        errors = []
        lat = Validator.coerce_float(latitude)
        lng = Validator.coerce_float(longitude)
        acc = Validator.coerce_float(accuracy)

        if lat is None:
            errors.append("Latitude is required")
        elif not -90 <= lat <= 90:
            errors.append("Latitude must be between -90 and 90")

        if lng is None:
            errors.append("Longitude is required")
        elif not -180 <= lng <= 180:
            errors.append("Longitude must be between -180 and 180")

        if acc is None:
            errors.append("Accuracy is required")
        elif acc < 0:
            errors.append("Accuracy cannot be negative")

        return {
            "is_valid": len(errors) == 0,
            "errors": errors,
            "latitude": lat,
            "longitude": lng,
            "accuracy": acc
        }

    @staticmethod
    def normalize_time_of_day(value: Any) -> Optional[str]:
        """Return HH:MM for 'HH:MM' or 'HH:MM:SS' input, else None."""
        if not isinstance(value, str):
            return None
        match = TIME_OF_DAY_PATTERN.match(value.strip())
        if not match:
            return None
        return f"{match.group(1)}:{match.group(2)}"

    @staticmethod
    def parse_date(value: Any) -> Optional[date]:
        """Parse an ISO YYYY-MM-DD date, or None."""
        if not isinstance(value, str):
            return None
        try:
            return date.fromisoformat(value[:10])
        except ValueError:
            return None

    @staticmethod
    def validate_allowed_days(days: Any) -> Dict[str, Any]:
        """Validate a list of weekday names."""
        errors = []
        if not isinstance(days, list) or not days:
            errors.append("Allowed days must be a non-empty list")
        else:
            unknown = [day for day in days if day not in WEEKDAYS]
            if unknown:
                errors.append(f"Unknown weekdays: {', '.join(map(str, unknown))}")

        return {
            "is_valid": len(errors) == 0,
            "errors": errors
        }

    @staticmethod
    def validate_required_fields(data: Dict, required_fields: List[str]) -> Dict[str, Any]:
        """Validate required fields in data."""
        errors = []

        for field in required_fields:
            if field not in data or data[field] is None or data[field] == '':
                errors.append(f"{field.replace('_', ' ').capitalize()} is required")

        return {
            "is_valid": len(errors) == 0,
            "errors": errors
        }
