"""Tests for the temporal state resolver.

Tests: TemporalStateResolver, resolve()
Focus: Visibility and state rules, tie-breaks, name variant keys, purity

Note: Builders and scenario fixtures are defined in conftest.py.
"""

import pytest
from hypothesis import given, settings, strategies as st

from conftest import make_segment, make_snapshot, make_station, segment_event, station_event
from railhistory.core.dates import MalformedDateError
from railhistory.core.resolver import TemporalStateResolver, resolve
from railhistory.model.annotated import EntityState
from railhistory.model.catalogue import DatabaseSnapshot
from railhistory.model.event import EventType
from railhistory.model.station import StationNameVariant


def _resolve(snapshot: DatabaseSnapshot, year: int):
    return resolve(year=year, catalogue=snapshot.catalogue, event_log=snapshot.event_log)


def _station_state(snapshot: DatabaseSnapshot, year: int, station_id: str) -> EntityState | None:
    station = _resolve(snapshot=snapshot, year=year).station(station_id=station_id)
    return station.state if station else None


def _segment_state(snapshot: DatabaseSnapshot, year: int, segment_id: str) -> EntityState | None:
    segment = _resolve(snapshot=snapshot, year=year).segment(segment_id=segment_id)
    return segment.state if segment else None


# =============================================================================
# CONCRETE SCENARIOS
# =============================================================================


class TestStationScenario:
    """Station opened 1851 (month precision), electrified 1935-12-15."""

    @pytest.mark.parametrize(
        "year,expected",
        [
            (1850, None),
            (1851, EntityState.NEW),
            (1900, EntityState.EXISTING),
            (1935, EntityState.ELECTRIFIED),
            (1936, EntityState.EXISTING),
        ],
    )
    def test_state_by_year(
        self, electrified_station_snapshot: DatabaseSnapshot, year: int, expected: EntityState | None
    ) -> None:
        """Absent before opening, then new / existing / electrified / existing."""
        assert _station_state(snapshot=electrified_station_snapshot, year=year, station_id="STN_A") == expected


class TestSegmentScenario:
    """Segment opened 1898-08-16, closed 1975-06-01."""

    def test_present_and_closed_in_close_year(self, closed_segment_snapshot: DatabaseSnapshot) -> None:
        assert _segment_state(snapshot=closed_segment_snapshot, year=1975, segment_id="SEG_A") == EntityState.CLOSED

    def test_absent_after_close_year(self, closed_segment_snapshot: DatabaseSnapshot) -> None:
        assert _segment_state(snapshot=closed_segment_snapshot, year=1976, segment_id="SEG_A") is None

    def test_new_in_open_year(self, closed_segment_snapshot: DatabaseSnapshot) -> None:
        assert _segment_state(snapshot=closed_segment_snapshot, year=1898, segment_id="SEG_A") == EntityState.NEW

    def test_geometry_passes_through_unchanged(self, closed_segment_snapshot: DatabaseSnapshot) -> None:
        """Resolver wraps the catalogue segment, it does not copy or alter it."""
        view = _resolve(snapshot=closed_segment_snapshot, year=1900)
        original = closed_segment_snapshot.catalogue.segments[0]
        assert view.segments[0].segment is original


# =============================================================================
# VISIBILITY AND STATE RULES
# =============================================================================


class TestVisibility:
    """An entity is visible only with an applicable open event and no earlier close."""

    def test_entity_without_events_is_omitted(self) -> None:
        snapshot = make_snapshot(stations=(make_station(station_id="X"),), segments=(make_segment(segment_id="Y"),))
        view = _resolve(snapshot=snapshot, year=1900)
        assert view.stations == []
        assert view.segments == []
        assert view.is_empty

    def test_close_without_open_is_omitted(self) -> None:
        """A close event alone does not make an entity visible."""
        snapshot = make_snapshot(
            stations=(make_station(station_id="X"),),
            events=(station_event(event_id="E1", event_type=EventType.STATION_CLOSE, date="1900", station_id="X"),),
        )
        assert _station_state(snapshot=snapshot, year=1900, station_id="X") is None

    def test_electrification_without_open_is_omitted(self) -> None:
        snapshot = make_snapshot(
            segments=(make_segment(segment_id="Y"),),
            events=(segment_event(event_id="E1", event_type=EventType.ELECTRIFICATION, date="1930", segment_id="Y"),),
        )
        assert _segment_state(snapshot=snapshot, year=1930, segment_id="Y") is None

    def test_reopened_after_close_with_later_open(self) -> None:
        """A close before the query year hides the entity, even after a later reopening."""
        snapshot = make_snapshot(
            stations=(make_station(station_id="X"),),
            events=(
                station_event(event_id="E1", event_type=EventType.STATION_OPEN, date="1880", station_id="X"),
                station_event(event_id="E2", event_type=EventType.STATION_CLOSE, date="1900", station_id="X"),
                station_event(event_id="E3", event_type=EventType.STATION_OPEN, date="1920", station_id="X"),
            ),
        )
        assert _station_state(snapshot=snapshot, year=1920, station_id="X") is None

    def test_station_and_segment_share_algorithm(self) -> None:
        """Same dates give same states for stations and segments."""
        snapshot = make_snapshot(
            stations=(make_station(station_id="X"),),
            segments=(make_segment(segment_id="Y"),),
            events=(
                station_event(event_id="E1", event_type=EventType.STATION_OPEN, date="1880", station_id="X"),
                station_event(event_id="E2", event_type=EventType.STATION_CLOSE, date="1950", station_id="X"),
                segment_event(event_id="E3", event_type=EventType.SEGMENT_OPEN, date="1880", segment_id="Y"),
                segment_event(event_id="E4", event_type=EventType.SEGMENT_CLOSE, date="1950", segment_id="Y"),
            ),
        )
        for year in (1879, 1880, 1900, 1950, 1951):
            assert _station_state(snapshot=snapshot, year=year, station_id="X") == _segment_state(
                snapshot=snapshot, year=year, segment_id="Y"
            )

    def test_station_events_do_not_apply_to_segments(self) -> None:
        """station_open on a station id never opens a segment with the same id."""
        snapshot = make_snapshot(
            segments=(make_segment(segment_id="SAME"),),
            stations=(make_station(station_id="SAME"),),
            events=(station_event(event_id="E1", event_type=EventType.STATION_OPEN, date="1900", station_id="SAME"),),
        )
        view = _resolve(snapshot=snapshot, year=1900)
        assert [s.station_id for s in view.stations] == ["SAME"]
        assert view.segments == []

    def test_results_follow_catalogue_order(self) -> None:
        snapshot = make_snapshot(
            stations=(make_station(station_id="B"), make_station(station_id="A"), make_station(station_id="C")),
            events=(
                station_event(event_id="E1", event_type=EventType.STATION_OPEN, date="1900", station_id="C"),
                station_event(event_id="E2", event_type=EventType.STATION_OPEN, date="1900", station_id="A"),
                station_event(event_id="E3", event_type=EventType.STATION_OPEN, date="1900", station_id="B"),
            ),
        )
        view = _resolve(snapshot=snapshot, year=1950)
        assert [s.station_id for s in view.stations] == ["B", "A", "C"]


class TestStatePriority:
    """closed > electrified > new > existing when several events land on one year."""

    def test_closed_beats_electrified_and_new(self) -> None:
        snapshot = make_snapshot(
            stations=(make_station(station_id="X"),),
            events=(
                station_event(event_id="E1", event_type=EventType.STATION_OPEN, date="1900", station_id="X"),
                station_event(event_id="E2", event_type=EventType.ELECTRIFICATION, date="1900", station_id="X"),
                station_event(event_id="E3", event_type=EventType.STATION_CLOSE, date="1900", station_id="X"),
            ),
        )
        assert _station_state(snapshot=snapshot, year=1900, station_id="X") == EntityState.CLOSED

    def test_electrified_beats_new(self) -> None:
        snapshot = make_snapshot(
            stations=(make_station(station_id="X"),),
            events=(
                station_event(event_id="E1", event_type=EventType.STATION_OPEN, date="1900-01-01", station_id="X"),
                station_event(event_id="E2", event_type=EventType.ELECTRIFICATION, date="1900-06-01", station_id="X"),
            ),
        )
        assert _station_state(snapshot=snapshot, year=1900, station_id="X") == EntityState.ELECTRIFIED

    def test_future_events_are_invisible(self) -> None:
        """Events after the query year never influence state."""
        snapshot = make_snapshot(
            stations=(make_station(station_id="X"),),
            events=(
                station_event(event_id="E1", event_type=EventType.STATION_OPEN, date="1900", station_id="X"),
                station_event(event_id="E2", event_type=EventType.STATION_CLOSE, date="1950", station_id="X"),
                station_event(event_id="E3", event_type=EventType.ELECTRIFICATION, date="1940", station_id="X"),
            ),
        )
        station = _resolve(snapshot=snapshot, year=1920).station(station_id="X")
        assert station is not None
        assert station.state == EntityState.EXISTING
        assert station.timeline.closed is None
        assert station.timeline.electrified is None

    def test_precision_never_changes_year(self) -> None:
        """Year precision "1900" and day precision "1900-12-31" resolve the same."""
        for date in ("1900", "1900-12", "1900-12-31"):
            snapshot = make_snapshot(
                stations=(make_station(station_id="X"),),
                events=(station_event(event_id="E1", event_type=EventType.STATION_OPEN, date=date, station_id="X"),),
            )
            assert _station_state(snapshot=snapshot, year=1900, station_id="X") == EntityState.NEW
            assert _station_state(snapshot=snapshot, year=1899, station_id="X") is None


class TestTieBreak:
    """Same-type events on the same resolved year: first in log order wins."""

    def test_first_event_in_log_order_is_selected(self) -> None:
        first = station_event(event_id="FIRST", event_type=EventType.STATION_OPEN, date="1900-10-01", station_id="X")
        second = station_event(event_id="SECOND", event_type=EventType.STATION_OPEN, date="1900-02-01", station_id="X")
        selected = TemporalStateResolver.select_applicable_event(
            events=(first, second), event_type=EventType.STATION_OPEN, year=1950
        )
        assert selected is first

    def test_later_year_wins_over_log_order(self) -> None:
        later = station_event(event_id="LATER", event_type=EventType.STATION_OPEN, date="1910", station_id="X")
        earlier = station_event(event_id="EARLIER", event_type=EventType.STATION_OPEN, date="1900", station_id="X")
        selected = TemporalStateResolver.select_applicable_event(
            events=(later, earlier), event_type=EventType.STATION_OPEN, year=1950
        )
        assert selected is later

    def test_no_applicable_event_returns_none(self) -> None:
        event = station_event(event_id="E1", event_type=EventType.STATION_OPEN, date="1910", station_id="X")
        assert (
            TemporalStateResolver.select_applicable_event(events=(event,), event_type=EventType.STATION_OPEN, year=1900)
            is None
        )


class TestGaugeChange:
    """gauge_change events are accepted but never resolved."""

    def test_gauge_change_does_not_alter_state_or_visibility(self) -> None:
        snapshot = make_snapshot(
            segments=(make_segment(segment_id="Y"), make_segment(segment_id="Z")),
            events=(
                segment_event(event_id="E1", event_type=EventType.SEGMENT_OPEN, date="1900", segment_id="Y"),
                segment_event(event_id="E2", event_type=EventType.GAUGE_CHANGE, date="1920", segment_id="Y"),
                segment_event(event_id="E3", event_type=EventType.GAUGE_CHANGE, date="1920", segment_id="Z"),
            ),
        )
        view = _resolve(snapshot=snapshot, year=1920)
        assert [s.segment_id for s in view.segments] == ["Y"]
        assert view.segments[0].state == EntityState.EXISTING

    def test_gauge_change_state_never_produced(self, demo_snapshot: DatabaseSnapshot) -> None:
        for year in range(1832, 1990):
            view = _resolve(snapshot=demo_snapshot, year=year)
            assert all(s.state is not EntityState.GAUGE_CHANGE for s in view.stations)
            assert all(s.state is not EntityState.GAUGE_CHANGE for s in view.segments)


# =============================================================================
# NAME VARIANTS
# =============================================================================


class TestAlternativeNames:
    """Language-qualified keys, suffixed per language in encounter order."""

    def test_two_en_one_fr(self, multilingual_station_snapshot: DatabaseSnapshot) -> None:
        station = _resolve(snapshot=multilingual_station_snapshot, year=1950).station(station_id="STN_A")
        assert station is not None
        assert station.alternative_names == {
            "name:en": "Alpha Central",
            "name:en_1": "Alpha Main",
            "name:fr": "Alpha Gare",
        }

    def test_key_order_follows_encounter_order(self, multilingual_station_snapshot: DatabaseSnapshot) -> None:
        station = _resolve(snapshot=multilingual_station_snapshot, year=1950).station(station_id="STN_A")
        assert station is not None
        assert list(station.alternative_names) == ["name:en", "name:en_1", "name:fr"]

    def test_interleaved_languages(self) -> None:
        names = TemporalStateResolver.build_alternative_names(
            variants=[
                StationNameVariant(station_id="X", name="a", language="en"),
                StationNameVariant(station_id="X", name="b", language="de"),
                StationNameVariant(station_id="X", name="c", language="en"),
                StationNameVariant(station_id="X", name="d", language="en"),
            ]
        )
        assert names == {"name:en": "a", "name:de": "b", "name:en_1": "c", "name:en_2": "d"}

    def test_literal_suffixed_language_does_not_collide(self) -> None:
        """A language code "en_1" must not overwrite the second "en" variant."""
        names = TemporalStateResolver.build_alternative_names(
            variants=[
                StationNameVariant(station_id="X", name="a", language="en"),
                StationNameVariant(station_id="X", name="b", language="en_1"),
                StationNameVariant(station_id="X", name="c", language="en"),
            ]
        )
        assert len(names) == 3
        assert set(names.values()) == {"a", "b", "c"}

    def test_station_without_variants_has_empty_mapping(self, electrified_station_snapshot: DatabaseSnapshot) -> None:
        station = _resolve(snapshot=electrified_station_snapshot, year=1900).station(station_id="STN_A")
        assert station is not None
        assert station.alternative_names == {}

    def test_validity_dates_do_not_gate_display(self) -> None:
        """Variants with valid_from/valid_to outside the query year are still shown."""
        snapshot = make_snapshot(
            stations=(make_station(station_id="X"),),
            events=(station_event(event_id="E1", event_type=EventType.STATION_OPEN, date="1850", station_id="X"),),
            names=(
                StationNameVariant(
                    station_id="X", name="Later Name", language="en", valid_from="1960", valid_to="1990"
                ),
            ),
        )
        station = _resolve(snapshot=snapshot, year=1860).station(station_id="X")
        assert station is not None
        assert station.alternative_names == {"name:en": "Later Name"}


# =============================================================================
# DATA QUALITY
# =============================================================================


class TestDataQuality:
    """Dangling references are ignored, malformed dates propagate."""

    def test_dangling_event_is_ignored(self) -> None:
        snapshot = make_snapshot(
            stations=(make_station(station_id="X"),),
            events=(
                station_event(event_id="E1", event_type=EventType.STATION_OPEN, date="1900", station_id="X"),
                station_event(event_id="E2", event_type=EventType.STATION_OPEN, date="1900", station_id="GHOST"),
                segment_event(event_id="E3", event_type=EventType.SEGMENT_OPEN, date="1900", segment_id="GHOST"),
            ),
        )
        view = _resolve(snapshot=snapshot, year=1950)
        assert [s.station_id for s in view.stations] == ["X"]
        assert view.segments == []

    def test_malformed_date_raises(self) -> None:
        snapshot = make_snapshot(
            stations=(make_station(station_id="X"),),
            events=(station_event(event_id="E1", event_type=EventType.STATION_OPEN, date="19th century", station_id="X"),),
        )
        with pytest.raises(MalformedDateError):
            _resolve(snapshot=snapshot, year=1900)

    def test_any_integer_year_is_accepted(self, demo_snapshot: DatabaseSnapshot) -> None:
        """No bounds in the resolver itself: far past and far future both work."""
        assert _resolve(snapshot=demo_snapshot, year=-500).is_empty
        future = _resolve(snapshot=demo_snapshot, year=3000)
        assert len(future.stations) == 7  # Irkutsk closed in 1975
        assert all(s.state == EntityState.EXISTING for s in future.stations)


# =============================================================================
# DEMO DATABASE
# =============================================================================


class TestDemoDatabase:
    """Spot checks against the bundled demo data."""

    def test_1851_opening_of_moscow_petersburg(self, demo_snapshot: DatabaseSnapshot) -> None:
        view = _resolve(snapshot=demo_snapshot, year=1851)
        assert [s.station_id for s in view.stations] == ["STN_0001", "STN_0002"]
        assert all(s.state == EntityState.NEW for s in view.stations)
        assert [s.segment_id for s in view.segments] == ["SEG_0001"]

    def test_1935_electrification(self, demo_snapshot: DatabaseSnapshot) -> None:
        view = _resolve(snapshot=demo_snapshot, year=1935)
        moscow = view.station(station_id="STN_0001")
        petersburg = view.station(station_id="STN_0002")
        assert moscow is not None and moscow.state == EntityState.ELECTRIFIED
        assert petersburg is not None and petersburg.state == EntityState.EXISTING
        segment = view.segment(segment_id="SEG_0001")
        assert segment is not None and segment.state == EntityState.ELECTRIFIED

    def test_1975_irkutsk_closure(self, demo_snapshot: DatabaseSnapshot) -> None:
        view_1975 = _resolve(snapshot=demo_snapshot, year=1975)
        view_1976 = _resolve(snapshot=demo_snapshot, year=1976)
        irkutsk = view_1975.station(station_id="STN_0006")
        assert irkutsk is not None and irkutsk.state == EntityState.CLOSED
        assert view_1976.station(station_id="STN_0006") is None
        assert view_1976.segment(segment_id="SEG_0005") is None

    def test_moscow_alternative_names(self, demo_snapshot: DatabaseSnapshot) -> None:
        moscow = _resolve(snapshot=demo_snapshot, year=1900).station(station_id="STN_0001")
        assert moscow is not None
        assert moscow.alternative_names == {"name:en": "Moscow Passenger", "name:de": "Moskau Passagier"}


# =============================================================================
# PROPERTIES
# =============================================================================


class TestResolverProperties:
    """Invariants over random open/close/electrification years."""

    @given(
        open_year=st.integers(min_value=1800, max_value=2000),
        close_offset=st.integers(min_value=0, max_value=100),
        query_year=st.integers(min_value=1700, max_value=2200),
    )
    @settings(max_examples=100)
    def test_lifecycle_invariants(self, open_year: int, close_offset: int, query_year: int) -> None:
        """Absent before open, new at open, closed at close, absent after close, existing between."""
        close_year = open_year + close_offset
        snapshot = make_snapshot(
            stations=(make_station(station_id="X"),),
            events=(
                station_event(event_id="O", event_type=EventType.STATION_OPEN, date=str(open_year), station_id="X"),
                station_event(event_id="C", event_type=EventType.STATION_CLOSE, date=str(close_year), station_id="X"),
            ),
        )
        state = _station_state(snapshot=snapshot, year=query_year, station_id="X")

        if query_year < open_year or query_year > close_year:
            assert state is None
        elif query_year == close_year:
            assert state == EntityState.CLOSED
        elif query_year == open_year:
            assert state == EntityState.NEW
        else:
            assert state == EntityState.EXISTING

    @given(year=st.integers(min_value=1800, max_value=2000))
    @settings(max_examples=50)
    def test_idempotent(self, year: int) -> None:
        """Resolving twice with unchanged inputs gives equal output."""
        snapshot = make_snapshot(
            stations=(make_station(station_id="X"), make_station(station_id="Y", lon=1.0)),
            segments=(make_segment(segment_id="S"),),
            events=(
                station_event(event_id="E1", event_type=EventType.STATION_OPEN, date="1851", station_id="X"),
                station_event(event_id="E2", event_type=EventType.ELECTRIFICATION, date="1935", station_id="X"),
                station_event(event_id="E3", event_type=EventType.STATION_OPEN, date="1900", station_id="Y"),
                segment_event(event_id="E4", event_type=EventType.SEGMENT_OPEN, date="1880", segment_id="S"),
                segment_event(event_id="E5", event_type=EventType.SEGMENT_CLOSE, date="1960", segment_id="S"),
            ),
        )
        first = _resolve(snapshot=snapshot, year=year)
        second = _resolve(snapshot=snapshot, year=year)
        assert first == second
        assert first is not second

    @given(year=st.integers(min_value=1832, max_value=1989))
    @settings(max_examples=50)
    def test_visible_entities_are_subset_of_catalogue(self, year: int) -> None:
        snapshot = make_snapshot(
            stations=(make_station(station_id="X"),),
            events=(
                station_event(event_id="E1", event_type=EventType.STATION_OPEN, date="1851", station_id="X"),
                station_event(event_id="E2", event_type=EventType.STATION_OPEN, date="1900", station_id="GHOST"),
            ),
        )
        view = _resolve(snapshot=snapshot, year=year)
        catalogue_ids = {s.station_id for s in snapshot.catalogue.stations}
        assert {s.station_id for s in view.stations} <= catalogue_ids
