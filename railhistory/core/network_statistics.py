"""Network statistics derived from resolved year views.

- count_by_state: how many stations/segments carry each state
- network_length_km: total length of visible track
- build_timeline_series: per-year counts for the growth chart
"""

import logging
from dataclasses import dataclass

import numpy as np

from railhistory.core.timeline_service import TimelineService
from railhistory.model.annotated import EntityState, YearView

logger = logging.getLogger(__name__)


@dataclass
class StateCounts:
    """Per-state counts for one kind of entity."""

    counts: dict[EntityState, int]

    @property
    def total(self) -> int:
        return sum(self.counts.values())

    def __getitem__(self, state: EntityState) -> int:
        return self.counts[state]


@dataclass
class TimelineSeries:
    """Network size for every year of a range.

    Attributes:
        years: Year values (inclusive range)
        station_counts: Visible stations per year
        segment_counts: Visible segments per year
        network_km: Total visible track length per year
    """

    years: np.ndarray
    station_counts: np.ndarray
    segment_counts: np.ndarray
    network_km: np.ndarray

    def __len__(self) -> int:
        return len(self.years)


def _count(states: list[EntityState]) -> StateCounts:
    counts = {state: 0 for state in EntityState}
    for state in states:
        counts[state] += 1
    return StateCounts(counts=counts)


def count_by_state(view: YearView) -> dict[str, StateCounts]:
    """State counts keyed by entity kind ("stations", "segments")."""
    return {
        "stations": _count([s.state for s in view.stations]),
        "segments": _count([s.state for s in view.segments]),
    }


def network_length_km(view: YearView) -> float:
    """Total length of all visible segments in kilometers."""
    return sum(s.segment.length_km for s in view.segments)


def build_timeline_series(service: TimelineService, start_year: int, end_year: int) -> TimelineSeries:
    """Resolve every year in [start_year, end_year] and collect network size.

    Raises:
        ValueError: If start_year is after end_year.
    """
    if start_year > end_year:
        raise ValueError(f"start_year {start_year} is after end_year {end_year}")

    years = np.arange(start_year, end_year + 1)
    station_counts = np.zeros(len(years), dtype=int)
    segment_counts = np.zeros(len(years), dtype=int)
    network_km = np.zeros(len(years), dtype=float)

    for i, year in enumerate(years):
        view = service.resolve(year=int(year))
        station_counts[i] = len(view.stations)
        segment_counts[i] = len(view.segments)
        network_km[i] = network_length_km(view=view)

    logger.info(f"[STATS] Timeline series built for {start_year}-{end_year} ({len(years)} years)")
    return TimelineSeries(
        years=years,
        station_counts=station_counts,
        segment_counts=segment_counts,
        network_km=network_km,
    )
