"""Catalogue, EventLog and DatabaseSnapshot - the resolver's static inputs.

Loaded once by the data loader and held as an immutable snapshot for the
session. Nothing in here is mutated after construction; a runtime update
means building a new DatabaseSnapshot and swapping it in whole.
"""

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from functools import cached_property
from typing import Any

from railhistory.constants import DataConfig
from railhistory.model.event import Event, SubjectKind
from railhistory.model.segment import Segment
from railhistory.model.station import Station, StationNameVariant

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Catalogue:
    """Fixed set of stations, segments and station name variants.

    Example:
        catalogue = Catalogue(stations=(s1, s2), segments=(seg,), station_names=())
        catalogue.station_by_id("STN_0001")
    """

    stations: tuple[Station, ...] = ()
    segments: tuple[Segment, ...] = ()
    station_names: tuple[StationNameVariant, ...] = ()

    @cached_property
    def _stations_by_id(self) -> dict[str, Station]:
        return {s.station_id: s for s in self.stations}

    @cached_property
    def _segments_by_id(self) -> dict[str, Segment]:
        return {s.segment_id: s for s in self.segments}

    @cached_property
    def _names_by_station(self) -> dict[str, tuple[StationNameVariant, ...]]:
        grouped: dict[str, list[StationNameVariant]] = defaultdict(list)
        for variant in self.station_names:
            grouped[variant.station_id].append(variant)
        return {sid: tuple(variants) for sid, variants in grouped.items()}

    def station_by_id(self, station_id: str) -> Station | None:
        return self._stations_by_id.get(station_id)

    def segment_by_id(self, segment_id: str) -> Segment | None:
        return self._segments_by_id.get(segment_id)

    def names_for_station(self, station_id: str) -> tuple[StationNameVariant, ...]:
        """Name variants of a station in the order they appear in the catalogue."""
        return self._names_by_station.get(station_id, ())

    def has_subject(self, event: Event) -> bool:
        """Whether the entity an event references exists in this catalogue."""
        if event.subject_kind is SubjectKind.STATION:
            return event.subject_id in self._stations_by_id
        return event.subject_id in self._segments_by_id


@dataclass(frozen=True)
class EventLog:
    """Chronicle of events in original log order.

    Log order matters: it is the tie-break when two events of the same
    type resolve to the same year.
    """

    events: tuple[Event, ...] = ()

    @cached_property
    def _by_station(self) -> dict[str, tuple[Event, ...]]:
        return self._group(kind=SubjectKind.STATION)

    @cached_property
    def _by_segment(self) -> dict[str, tuple[Event, ...]]:
        return self._group(kind=SubjectKind.SEGMENT)

    def _group(self, kind: SubjectKind) -> dict[str, tuple[Event, ...]]:
        grouped: dict[str, list[Event]] = defaultdict(list)
        for event in self.events:
            if event.subject_kind is kind:
                grouped[event.subject_id].append(event)
        return {sid: tuple(events) for sid, events in grouped.items()}

    def for_station(self, station_id: str) -> tuple[Event, ...]:
        """Events referencing a station, in log order. Empty for unknown ids."""
        return self._by_station.get(station_id, ())

    def for_segment(self, segment_id: str) -> tuple[Event, ...]:
        """Events referencing a segment, in log order. Empty for unknown ids."""
        return self._by_segment.get(segment_id, ())

    def __len__(self) -> int:
        return len(self.events)


@dataclass(frozen=True)
class DatabaseSnapshot:
    """Catalogue and event log captured together.

    Attributes:
        catalogue: Stations, segments and name variants
        event_log: Events in log order
        source: Where the snapshot was loaded from (for display/logging)
    """

    catalogue: Catalogue = field(default_factory=Catalogue)
    event_log: EventLog = field(default_factory=EventLog)
    source: str = ""

    def find_dangling_references(self) -> list[Event]:
        """Events whose station/segment is missing from the catalogue.

        These are a data-quality concern only: the resolver ignores them.
        """
        return [e for e in self.event_log.events if not self.catalogue.has_subject(event=e)]

    def get_stats(self) -> dict[str, int]:
        """Entity and event counts."""
        return {
            "stations": len(self.catalogue.stations),
            "segments": len(self.catalogue.segments),
            "station_names": len(self.catalogue.station_names),
            "events": len(self.event_log),
        }

    # =========================================================================
    # Serialization
    # =========================================================================

    def to_dict(self) -> dict[str, Any]:
        """Serialize snapshot to JSON-compatible dict."""
        return {
            "version": DataConfig.SNAPSHOT_VERSION,
            "stations": [s.to_dict() for s in self.catalogue.stations],
            "station_names": [n.to_dict() for n in self.catalogue.station_names],
            "segments": [s.to_dict() for s in self.catalogue.segments],
            "events": [e.to_dict() for e in self.event_log.events],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any], source: str = "") -> "DatabaseSnapshot":
        """Deserialize snapshot from dict.

        Missing sections are treated as empty. Record order is preserved.

        Raises:
            KeyError: If a record lacks a required field.
            ValueError: If a record has an invalid enum value or subject.
        """
        version = data.get("version")
        if version is not None and version != DataConfig.SNAPSHOT_VERSION:
            logger.warning(f"Snapshot version {version} differs from {DataConfig.SNAPSHOT_VERSION}")

        catalogue = Catalogue(
            stations=tuple(Station.from_dict(data=s) for s in data.get("stations", [])),
            segments=tuple(Segment.from_dict(data=s) for s in data.get("segments", [])),
            station_names=tuple(StationNameVariant.from_dict(data=n) for n in data.get("station_names", [])),
        )
        event_log = EventLog(events=tuple(Event.from_dict(data=e) for e in data.get("events", [])))
        return cls(catalogue=catalogue, event_log=event_log, source=source)
