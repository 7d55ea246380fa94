"""GeoPoint - The geometry atom for station locations and segment paths.

Used by:
- Station (location)
- Segment (ordered polyline geometry)
"""

from dataclasses import dataclass

from railhistory.core.geo_calculator import GeoCalculator


@dataclass(frozen=True)
class GeoPoint:
    """A WGS84 coordinate.

    Attributes:
        lat: Latitude in decimal degrees
        lon: Longitude in decimal degrees

    Example:
        point = GeoPoint(lat=55.7765, lon=37.6550)
    """

    lat: float
    lon: float

    def __post_init__(self) -> None:
        """Validate coordinate ranges."""
        if not -90.0 <= self.lat <= 90.0:
            raise ValueError(f"Latitude out of range: {self.lat}")
        if not -180.0 <= self.lon <= 180.0:
            raise ValueError(f"Longitude out of range: {self.lon}")

    @property
    def lat_lon(self) -> tuple[float, float]:
        """Return (lat, lon) tuple - standard geographic order."""
        return (self.lat, self.lon)

    @property
    def lon_lat(self) -> tuple[float, float]:
        """Return (lon, lat) tuple - GeoJSON/Pydeck order."""
        return (self.lon, self.lat)

    def distance_to(self, other: "GeoPoint") -> float:
        """Great-circle distance to another point in meters."""
        return GeoCalculator.haversine_distance_m(
            lat1=self.lat,
            lon1=self.lon,
            lat2=other.lat,
            lon2=other.lon,
        )

    def __repr__(self) -> str:
        return f"GeoPoint(lat={self.lat:.5f}, lon={self.lon:.5f})"
