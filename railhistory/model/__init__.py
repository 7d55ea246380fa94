"""Data model for the railway history viewer.

Catalogue entries (immutable once loaded):
- GeoPoint: Geometry atom (lat, lon)
- Station, CrossReferences, StationNameVariant: Stations and their labels
- Segment: Track between two stations
- Event, EventType, DatePrecision: Dated facts about one station or segment
- Catalogue, EventLog, DatabaseSnapshot: The resolver's static inputs

Resolver output:
- EntityState, EntityTimeline: Year-specific classification and its events
- AnnotatedStation, AnnotatedSegment, YearView: Visible entities for one year
"""

from railhistory.model.annotated import (
    AnnotatedSegment,
    AnnotatedStation,
    EntityState,
    EntityTimeline,
    YearView,
)
from railhistory.model.catalogue import Catalogue, DatabaseSnapshot, EventLog
from railhistory.model.event import DatePrecision, Event, EventType, SubjectKind
from railhistory.model.geo_point import GeoPoint
from railhistory.model.segment import Segment
from railhistory.model.station import CrossReferences, Station, StationNameVariant

__all__ = [
    "GeoPoint",
    "Station",
    "CrossReferences",
    "StationNameVariant",
    "Segment",
    "Event",
    "EventType",
    "DatePrecision",
    "SubjectKind",
    "Catalogue",
    "EventLog",
    "DatabaseSnapshot",
    "EntityState",
    "EntityTimeline",
    "AnnotatedStation",
    "AnnotatedSegment",
    "YearView",
]
