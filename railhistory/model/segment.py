"""Segment - A stretch of track between two stations.

Immutable once loaded. The geometry is an ordered polyline that passes
through the resolver unchanged.
"""

from dataclasses import dataclass
from typing import Any

from railhistory.core.geo_calculator import GeoCalculator
from railhistory.model.geo_point import GeoPoint


@dataclass(frozen=True)
class Segment:
    """A track segment in the catalogue.

    Attributes:
        segment_id: Unique identifier (e.g., "SEG_0001")
        from_station_id: Station at the start of the polyline
        to_station_id: Station at the end of the polyline
        geometry: Ordered path coordinates
        geometry_quality: Path quality tag ("high", "medium", "low")
        geometry_source: Optional origin of the geometry (e.g. "osm", "manual")
        is_current: Whether the segment is part of today's network
        notes: Free text
    """

    segment_id: str
    from_station_id: str
    to_station_id: str
    geometry: tuple[GeoPoint, ...]
    geometry_quality: str | None = None
    geometry_source: str | None = None
    is_current: bool | None = None
    notes: str | None = None

    @property
    def path_lon_lat(self) -> list[list[float]]:
        """Geometry as [[lon, lat], ...] for pydeck PathLayer."""
        return [[p.lon, p.lat] for p in self.geometry]

    @property
    def length_km(self) -> float:
        """Great-circle length of the polyline in kilometers."""
        return GeoCalculator.polyline_length_m(points=[p.lat_lon for p in self.geometry]) / 1000.0

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Segment":
        """Create Segment from a source record with geometry as [[lat, lon], ...]."""
        return cls(
            segment_id=data["segment_id"],
            from_station_id=data["from_station_id"],
            to_station_id=data["to_station_id"],
            geometry=tuple(GeoPoint(lat=float(lat), lon=float(lon)) for lat, lon in data["geometry"]),
            geometry_quality=data.get("geometry_quality"),
            geometry_source=data.get("geometry_source"),
            is_current=data.get("is_current"),
            notes=data.get("notes"),
        )

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "segment_id": self.segment_id,
            "from_station_id": self.from_station_id,
            "to_station_id": self.to_station_id,
            "geometry": [[p.lat, p.lon] for p in self.geometry],
            "geometry_source": self.geometry_source,
            "geometry_quality": self.geometry_quality,
            "is_current": self.is_current,
            "notes": self.notes,
        }
        return {k: v for k, v in data.items() if v is not None}

    def __repr__(self) -> str:
        return f"Segment({self.segment_id}, {self.from_station_id}->{self.to_station_id}, {len(self.geometry)} pts)"
