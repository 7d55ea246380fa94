"""Shared pytest fixtures for railhistory tests.

Provides small hand-built catalogues and event logs, plus the bundled
demo snapshot. Builders are plain functions so tests can assemble their
own scenarios without going through JSON.

COORDINATES:
    Test stations sit on the equator one degree apart, so segment
    lengths are easy to reason about: 1 degree ≈ 111.2 km.
"""

import pytest

from railhistory.data.loader import load_demo_snapshot
from railhistory.model.catalogue import Catalogue, DatabaseSnapshot, EventLog
from railhistory.model.event import DatePrecision, Event, EventType
from railhistory.model.geo_point import GeoPoint
from railhistory.model.segment import Segment
from railhistory.model.station import Station, StationNameVariant
from railhistory.ui.state_machine import ViewerContext, ViewerStateMachine


# =============================================================================
# BUILDERS
# =============================================================================


def make_station(station_id: str, lon: float = 0.0, notes: str | None = None) -> Station:
    """Station on the equator at the given longitude."""
    return Station(
        station_id=station_id,
        name_primary=f"Station {station_id}",
        location=GeoPoint(lat=0.0, lon=lon),
        current_status="open",
        notes=notes,
    )


def make_segment(segment_id: str, from_lon: float = 0.0, to_lon: float = 1.0) -> Segment:
    """Straight two-point segment along the equator."""
    return Segment(
        segment_id=segment_id,
        from_station_id="A",
        to_station_id="B",
        geometry=(GeoPoint(lat=0.0, lon=from_lon), GeoPoint(lat=0.0, lon=to_lon)),
    )


def station_event(
    event_id: str,
    event_type: EventType,
    date: str,
    station_id: str,
    precision: DatePrecision = DatePrecision.DAY,
) -> Event:
    return Event(
        event_id=event_id,
        event_type=event_type,
        date=date,
        date_precision=precision,
        station_id=station_id,
    )


def segment_event(
    event_id: str,
    event_type: EventType,
    date: str,
    segment_id: str,
    precision: DatePrecision = DatePrecision.DAY,
) -> Event:
    return Event(
        event_id=event_id,
        event_type=event_type,
        date=date,
        date_precision=precision,
        segment_id=segment_id,
    )


def make_snapshot(
    stations: tuple[Station, ...] = (),
    segments: tuple[Segment, ...] = (),
    events: tuple[Event, ...] = (),
    names: tuple[StationNameVariant, ...] = (),
) -> DatabaseSnapshot:
    return DatabaseSnapshot(
        catalogue=Catalogue(stations=stations, segments=segments, station_names=names),
        event_log=EventLog(events=events),
        source="test",
    )


# =============================================================================
# SCENARIO FIXTURES
# =============================================================================


@pytest.fixture
def electrified_station_snapshot() -> DatabaseSnapshot:
    """Station opened 1851 (month precision), electrified 1935-12-15."""
    return make_snapshot(
        stations=(make_station(station_id="STN_A"),),
        events=(
            station_event(
                event_id="E1",
                event_type=EventType.STATION_OPEN,
                date="1851-11-01",
                station_id="STN_A",
                precision=DatePrecision.MONTH,
            ),
            station_event(
                event_id="E2",
                event_type=EventType.ELECTRIFICATION,
                date="1935-12-15",
                station_id="STN_A",
            ),
        ),
    )


@pytest.fixture
def closed_segment_snapshot() -> DatabaseSnapshot:
    """Segment opened 1898-08-16, closed 1975-06-01."""
    return make_snapshot(
        segments=(make_segment(segment_id="SEG_A"),),
        events=(
            segment_event(event_id="S1", event_type=EventType.SEGMENT_OPEN, date="1898-08-16", segment_id="SEG_A"),
            segment_event(event_id="S2", event_type=EventType.SEGMENT_CLOSE, date="1975-06-01", segment_id="SEG_A"),
        ),
    )


@pytest.fixture
def multilingual_station_snapshot() -> DatabaseSnapshot:
    """Open station with two English and one French name variant."""
    return make_snapshot(
        stations=(make_station(station_id="STN_A"),),
        events=(
            station_event(event_id="E1", event_type=EventType.STATION_OPEN, date="1900", station_id="STN_A"),
        ),
        names=(
            StationNameVariant(station_id="STN_A", name="Alpha Central", language="en"),
            StationNameVariant(station_id="STN_A", name="Alpha Main", language="en"),
            StationNameVariant(station_id="STN_A", name="Alpha Gare", language="fr"),
        ),
    )


@pytest.fixture
def demo_snapshot() -> DatabaseSnapshot:
    """Bundled demo database (8 stations, 7 segments, 20 events)."""
    return load_demo_snapshot()


# =============================================================================
# STATE MACHINE FIXTURES
# =============================================================================


@pytest.fixture
def state_machine_and_context() -> tuple[ViewerStateMachine, ViewerContext]:
    """State machine without the Streamlit listener (no st.rerun)."""
    return ViewerStateMachine.create(add_ui_listener=False)
