"""Geofence distance calculations."""
import math

class GeofenceService:
    """Service for GPS distance and geofence checks."""

    EARTH_RADIUS_METERS = 6371000

    @staticmethod
    def calculate_distance(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
        """Calculate great-circle distance between two GPS points in meters."""
        lat1_rad = math.radians(lat1)
        lat2_rad = math.radians(lat2)
        delta_lat = math.radians(lat2 - lat1)
        delta_lon = math.radians(lon2 - lon1)

        a = (math.sin(delta_lat/2) ** 2 +
             math.cos(lat1_rad) * math.cos(lat2_rad) *
             math.sin(delta_lon/2) ** 2)
        c = 2 * math.atan2(math.sqrt(a), math.sqrt(1-a))

        return GeofenceService.EARTH_RADIUS_METERS * c

    @staticmethod
    def distance_to_site(latitude: float, longitude: float, location) -> float:
        """Distance from a reading to an internship site's geofence center."""
        return GeofenceService.calculate_distance(
            latitude, longitude,
            location.latitude, location.longitude
        )
