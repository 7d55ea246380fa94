"""Station and StationNameVariant - catalogue entries for railway stations.

A Station is immutable once loaded. Its year-specific state is never
stored here; the resolver derives it per query year.

Name variants are alternate-language labels attached to a station by id.
"""

from dataclasses import asdict, dataclass, field, fields
from typing import Any

from railhistory.constants import CrossReferenceConfig
from railhistory.core.notes import parse_display_radius_km
from railhistory.model.geo_point import GeoPoint


@dataclass(frozen=True)
class CrossReferences:
    """Identifiers of the station in external catalogues.

    All fields are optional strings as they appear in the source data.
    """

    esr_code: str | None = None
    osm_node_id: str | None = None
    osm_way_id: str | None = None
    osm_relation_id: str | None = None
    wikidata_id: str | None = None
    wikipedia_ru: str | None = None
    parovoz_url: str | None = None
    railwayz_id: str | None = None

    @classmethod
    def field_names(cls) -> list[str]:
        return [f.name for f in fields(cls)]

    def items(self) -> list[tuple[str, str]]:
        """Present (label, identifier) pairs in field order."""
        return [
            (CrossReferenceConfig.LABELS[name], value)
            for name in self.field_names()
            if (value := getattr(self, name))
        ]

    def links(self) -> list[tuple[str, str]]:
        """(label, url) pairs for identifiers with a known URL form."""
        result = []
        for name in self.field_names():
            value = getattr(self, name)
            template = CrossReferenceConfig.URL_TEMPLATES.get(name)
            if value and template:
                result.append((CrossReferenceConfig.LABELS[name], template.format(value=value)))
        return result


@dataclass(frozen=True)
class Station:
    """A railway station in the catalogue.

    Attributes:
        station_id: Unique identifier (e.g., "STN_0001")
        name_primary: Display name in the primary (local) language
        location: Geographic coordinate
        current_status: Present-day status, independent of the query year
        name_latin: Optional latin transliteration
        country_code: Optional ISO country code
        cross_references: External catalogue identifiers
        geometry_quality: Optional location quality tag ("high", "medium", "low")
        notes: Free text; may start with a "<radius N>" marker for approximate locations
    """

    station_id: str
    name_primary: str
    location: GeoPoint
    current_status: str
    name_latin: str | None = None
    country_code: str | None = None
    cross_references: CrossReferences = field(default_factory=CrossReferences)
    geometry_quality: str | None = None
    notes: str | None = None

    @property
    def lat(self) -> float:
        return self.location.lat

    @property
    def lon(self) -> float:
        return self.location.lon

    @property
    def display_radius_km(self) -> float | None:
        """Uncertainty radius parsed from notes, None for exact locations."""
        return parse_display_radius_km(self.notes)

    @property
    def is_approximate(self) -> bool:
        """Whether the station renders as an uncertainty circle."""
        return self.display_radius_km is not None

    @property
    def display_name(self) -> str:
        """Primary name with latin transliteration when available."""
        if self.name_latin and self.name_latin != self.name_primary:
            return f"{self.name_primary} ({self.name_latin})"
        return self.name_primary

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Station":
        """Create Station from a flat source record (lat/lon and ids at top level)."""
        refs = {name: data[name] for name in CrossReferences.field_names() if data.get(name)}
        return cls(
            station_id=data["station_id"],
            name_primary=data["name_primary"],
            location=GeoPoint(lat=float(data["lat"]), lon=float(data["lon"])),
            current_status=data["current_status"],
            name_latin=data.get("name_latin"),
            country_code=data.get("country_code"),
            cross_references=CrossReferences(**refs),
            geometry_quality=data.get("geometry_quality"),
            notes=data.get("notes"),
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize back to the flat source record format, omitting empty fields."""
        data: dict[str, Any] = {
            "station_id": self.station_id,
            "name_primary": self.name_primary,
            "name_latin": self.name_latin,
            "lat": self.lat,
            "lon": self.lon,
            "country_code": self.country_code,
            **asdict(self.cross_references),
            "current_status": self.current_status,
            "geometry_quality": self.geometry_quality,
            "notes": self.notes,
        }
        return {k: v for k, v in data.items() if v is not None}

    def __repr__(self) -> str:
        return f"Station({self.station_id}, {self.name_primary!r}, {self.location})"


@dataclass(frozen=True)
class StationNameVariant:
    """An alternate-language label for a station.

    valid_from/valid_to are carried from the source schema but do not
    gate display: every variant is shown for every year.
    """

    station_id: str
    name: str
    language: str
    valid_from: str | None = None
    valid_to: str | None = None
    name_type: str | None = None
    source_id: str | None = None
    notes: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "StationNameVariant":
        """Create StationNameVariant from dictionary."""
        return cls(**{f.name: data.get(f.name) for f in fields(cls)})

    def to_dict(self) -> dict[str, Any]:
        return {k: v for k, v in asdict(self).items() if v is not None}
