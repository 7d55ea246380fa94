"""Geodesic calculations on Earth's surface.

Used for segment lengths and network totals shown in the sidebar.
All calculations use WGS84 spherical Earth approximation (R = 6,371 km).
"""

from math import atan2, cos, radians, sin, sqrt

# Earth's radius in meters (WGS84 spherical approximation)
EARTH_RADIUS_M = 6_371_000


class GeoCalculator:
    """Static methods for geodesic calculations.

    Coordinates are in decimal degrees (WGS84). Distances are in meters.
    """

    EARTH_RADIUS_M = EARTH_RADIUS_M

    @staticmethod
    def haversine_distance_m(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
        """Calculate great-circle distance between two points using Haversine formula.

        Args:
            lat1: Latitude of first point (decimal degrees)
            lon1: Longitude of first point (decimal degrees)
            lat2: Latitude of second point (decimal degrees)
            lon2: Longitude of second point (decimal degrees)

        Returns:
            Distance in meters.
        """
        dlat = radians(lat2 - lat1)
        dlon = radians(lon2 - lon1)
        a = sin(dlat / 2) ** 2 + cos(radians(lat1)) * cos(radians(lat2)) * sin(dlon / 2) ** 2
        return EARTH_RADIUS_M * 2 * atan2(sqrt(a), sqrt(1 - a))

    @staticmethod
    def polyline_length_m(points: list[tuple[float, float]]) -> float:
        """Sum of haversine distances along a (lat, lon) polyline.

        Returns 0.0 for fewer than two points.
        """
        return sum(
            GeoCalculator.haversine_distance_m(lat1=a[0], lon1=a[1], lat2=b[0], lon2=b[1])
            for a, b in zip(points, points[1:])
        )
