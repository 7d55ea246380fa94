"""Temporal state resolver - as-of-year state of every station and segment.

Given the catalogue, the event log and a query year, derives which
entities are visible and how each is classified:

1. For each relevant event kind (open, close, electrification) pick the
   applicable event: the latest resolved year at or before the query
   year. Same-year ties go to the event that comes first in the log.
2. Visible only with an applicable open event, and not if an applicable
   close event lies strictly before the query year.
3. State, first match wins: closed (close year == year), electrified
   (electrification year == year), new (open year == year), existing.

gauge_change events are accepted in the log but not resolved; the
GAUGE_CHANGE state is never produced.

Pure: reads its inputs, returns a fresh YearView, mutates nothing.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from railhistory.model.annotated import (
    AnnotatedSegment,
    AnnotatedStation,
    EntityState,
    EntityTimeline,
    YearView,
)
from railhistory.model.catalogue import Catalogue, EventLog
from railhistory.model.event import Event, EventType
from railhistory.model.station import StationNameVariant

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LifecycleEventTypes:
    """Which event types open and close one kind of entity."""

    open: EventType
    close: EventType
    electrification: EventType = EventType.ELECTRIFICATION


STATION_EVENT_TYPES = LifecycleEventTypes(open=EventType.STATION_OPEN, close=EventType.STATION_CLOSE)
SEGMENT_EVENT_TYPES = LifecycleEventTypes(open=EventType.SEGMENT_OPEN, close=EventType.SEGMENT_CLOSE)


class TemporalStateResolver:
    """Static methods implementing the as-of-year resolution rules.

    Example:
        view = TemporalStateResolver.resolve(year=1900, catalogue=cat, event_log=log)
        [s.state for s in view.stations]
    """

    @staticmethod
    def select_applicable_event(events: Iterable[Event], event_type: EventType, year: int) -> Event | None:
        """Most recent event of a type whose resolved year is <= year.

        Ties on the resolved year keep the first event in iteration order.

        Raises:
            MalformedDateError: If a candidate event has an unparseable date.
        """
        best: Event | None = None
        best_year: int | None = None
        for event in events:
            if event.event_type is not event_type:
                continue
            event_year = event.year
            if event_year > year:
                continue
            # Strictly greater: an equal year never displaces an earlier log entry
            if best_year is None or event_year > best_year:
                best = event
                best_year = event_year
        return best

    @staticmethod
    def build_timeline(events: tuple[Event, ...], types: LifecycleEventTypes, year: int) -> EntityTimeline:
        """Applicable open/close/electrification events for one entity."""
        select = TemporalStateResolver.select_applicable_event
        return EntityTimeline(
            opened=select(events=events, event_type=types.open, year=year),
            closed=select(events=events, event_type=types.close, year=year),
            electrified=select(events=events, event_type=types.electrification, year=year),
        )

    @staticmethod
    def is_visible(timeline: EntityTimeline, year: int) -> bool:
        """Open by the query year and not closed before it."""
        if timeline.opened is None:
            return False
        if timeline.closed is not None and timeline.closed.year < year:
            return False
        return True

    @staticmethod
    def classify(timeline: EntityTimeline, year: int) -> EntityState:
        """State label for a visible entity, in strict priority order."""
        if timeline.closed is not None and timeline.closed.year == year:
            return EntityState.CLOSED
        if timeline.electrified is not None and timeline.electrified.year == year:
            return EntityState.ELECTRIFIED
        if timeline.opened is not None and timeline.opened.year == year:
            return EntityState.NEW
        return EntityState.EXISTING

    @staticmethod
    def build_alternative_names(variants: Iterable[StationNameVariant]) -> dict[str, str]:
        """Language-qualified name keys, suffixed per language in encounter order.

        Two "en" variants and one "fr" variant give
        {"name:en": ..., "name:en_1": ..., "name:fr": ...}.
        """
        names: dict[str, str] = {}
        seen_per_language: dict[str, int] = {}
        for variant in variants:
            index = seen_per_language.get(variant.language, 0)
            key = f"name:{variant.language}" if index == 0 else f"name:{variant.language}_{index}"
            # A language code like "en_1" could otherwise clash with a suffixed "en" key
            while key in names:
                index += 1
                key = f"name:{variant.language}_{index}"
            seen_per_language[variant.language] = index + 1
            names[key] = variant.name
        return names

    @staticmethod
    def resolve_stations(year: int, catalogue: Catalogue, event_log: EventLog) -> list[AnnotatedStation]:
        """Visible stations for the year, in catalogue order."""
        result = []
        for station in catalogue.stations:
            timeline = TemporalStateResolver.build_timeline(
                events=event_log.for_station(station_id=station.station_id),
                types=STATION_EVENT_TYPES,
                year=year,
            )
            if not TemporalStateResolver.is_visible(timeline=timeline, year=year):
                continue
            result.append(
                AnnotatedStation(
                    station=station,
                    state=TemporalStateResolver.classify(timeline=timeline, year=year),
                    alternative_names=TemporalStateResolver.build_alternative_names(
                        variants=catalogue.names_for_station(station_id=station.station_id)
                    ),
                    timeline=timeline,
                )
            )
        return result

    @staticmethod
    def resolve_segments(year: int, catalogue: Catalogue, event_log: EventLog) -> list[AnnotatedSegment]:
        """Visible segments for the year, in catalogue order."""
        result = []
        for segment in catalogue.segments:
            timeline = TemporalStateResolver.build_timeline(
                events=event_log.for_segment(segment_id=segment.segment_id),
                types=SEGMENT_EVENT_TYPES,
                year=year,
            )
            if not TemporalStateResolver.is_visible(timeline=timeline, year=year):
                continue
            result.append(
                AnnotatedSegment(
                    segment=segment,
                    state=TemporalStateResolver.classify(timeline=timeline, year=year),
                    timeline=timeline,
                )
            )
        return result

    @staticmethod
    def resolve(year: int, catalogue: Catalogue, event_log: EventLog) -> YearView:
        """Resolve every entity for one query year."""
        stations = TemporalStateResolver.resolve_stations(year=year, catalogue=catalogue, event_log=event_log)
        segments = TemporalStateResolver.resolve_segments(year=year, catalogue=catalogue, event_log=event_log)
        logger.debug(f"[RESOLVE] year={year}: {len(stations)} stations, {len(segments)} segments visible")
        return YearView(year=year, stations=stations, segments=segments)


def resolve(year: int, catalogue: Catalogue, event_log: EventLog) -> YearView:
    """Module-level entry point, see TemporalStateResolver.resolve."""
    return TemporalStateResolver.resolve(year=year, catalogue=catalogue, event_log=event_log)
