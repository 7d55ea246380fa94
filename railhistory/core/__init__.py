"""Core logic for the railway history viewer.

- GeoCalculator: Great-circle distances for segment lengths
- resolve_year / MalformedDateError: Year extraction from event dates
- parse_display_radius_km: Approximate-location radius from station notes
- TemporalStateResolver: As-of-year state of stations and segments
- TimelineService: Snapshot holder with per-year cache
- network_statistics: Per-year counts and network length
"""

from railhistory.core.dates import MalformedDateError, resolve_year
from railhistory.core.geo_calculator import GeoCalculator
from railhistory.core.notes import parse_display_radius_km

# resolver, timeline_service and network_statistics import the model package,
# which itself imports the modules above. Import them directly:
#   from railhistory.core.resolver import TemporalStateResolver, resolve

__all__ = [
    "GeoCalculator",
    "MalformedDateError",
    "resolve_year",
    "parse_display_radius_km",
]
