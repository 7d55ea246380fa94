"""Resolver output types - entities tagged with their as-of-year state.

An AnnotatedStation/AnnotatedSegment wraps the immutable catalogue entry
and adds what the resolver derived for one query year. A YearView holds
the full result of one resolve call.
"""

from dataclasses import dataclass, field
from enum import Enum

from railhistory.constants import StyleConfig
from railhistory.model.event import Event
from railhistory.model.segment import Segment
from railhistory.model.station import Station


class EntityState(Enum):
    """Year-specific classification of a visible entity."""

    EXISTING = "existing"
    NEW = "new"
    ELECTRIFIED = "electrified"
    GAUGE_CHANGE = "gauge_change"  # Reserved, never assigned by the resolver
    CLOSED = "closed"


assert {s.value for s in EntityState} == set(StyleConfig.STATE_COLORS.keys())


@dataclass(frozen=True)
class EntityTimeline:
    """The applicable events that decided an entity's state.

    Each field is the most recent event of that kind whose year is at or
    before the query year, or None.
    """

    opened: Event | None = None
    closed: Event | None = None
    electrified: Event | None = None


@dataclass(frozen=True)
class AnnotatedStation:
    """A visible station with its computed state.

    Attributes:
        station: Catalogue entry (unchanged)
        state: Classification for the query year
        alternative_names: Ordered {"name:<lang>[_<n>]": name} mapping
        timeline: Events that decided the state
    """

    station: Station
    state: EntityState
    alternative_names: dict[str, str] = field(default_factory=dict)
    timeline: EntityTimeline = field(default_factory=EntityTimeline)

    @property
    def station_id(self) -> str:
        return self.station.station_id

    @property
    def name(self) -> str:
        return self.station.name_primary


@dataclass(frozen=True)
class AnnotatedSegment:
    """A visible segment with its computed state."""

    segment: Segment
    state: EntityState
    timeline: EntityTimeline = field(default_factory=EntityTimeline)

    @property
    def segment_id(self) -> str:
        return self.segment.segment_id


@dataclass(frozen=True)
class YearView:
    """Everything visible in one query year, in catalogue order."""

    year: int
    stations: list[AnnotatedStation] = field(default_factory=list)
    segments: list[AnnotatedSegment] = field(default_factory=list)

    def station(self, station_id: str) -> AnnotatedStation | None:
        return next((s for s in self.stations if s.station_id == station_id), None)

    def segment(self, segment_id: str) -> AnnotatedSegment | None:
        return next((s for s in self.segments if s.segment_id == segment_id), None)

    @property
    def is_empty(self) -> bool:
        return not self.stations and not self.segments
