"""Event - A dated fact attached to exactly one station or segment.

Events drive every state transition the resolver derives. The resolved
year is the calendar year of the date; date_precision is metadata only.
"""

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any

from railhistory.core.dates import resolve_year


class EventType(Enum):
    """Kinds of events in the log."""

    STATION_OPEN = "station_open"
    STATION_CLOSE = "station_close"
    ELECTRIFICATION = "electrification"
    SEGMENT_OPEN = "segment_open"
    SEGMENT_CLOSE = "segment_close"
    GAUGE_CHANGE = "gauge_change"  # Reserved: accepted in the log, not resolved


class DatePrecision(Enum):
    """How precisely the source knows an event date."""

    DAY = "day"
    MONTH = "month"
    YEAR = "year"


class SubjectKind(Enum):
    """Which catalogue an event's subject lives in."""

    STATION = "station"
    SEGMENT = "segment"


@dataclass(frozen=True)
class Event:
    """A dated event referencing one station or one segment.

    Attributes:
        event_id: Unique identifier (e.g., "EVT_0001")
        event_type: What happened
        date: ISO date string (YYYY, YYYY-MM or YYYY-MM-DD)
        date_precision: How precise the date is
        station_id: Subject station (exclusive with segment_id)
        segment_id: Subject segment (exclusive with station_id)
        line_id: Optional line the event belongs to
        description: Human-readable summary
        source_id: Bibliographic source identifier
        source_page: Page within the source
        notes: Free text

    Raises:
        ValueError: If both or neither of station_id/segment_id are set.
    """

    event_id: str
    event_type: EventType
    date: str
    date_precision: DatePrecision = DatePrecision.DAY
    station_id: str | None = None
    segment_id: str | None = None
    line_id: str | None = None
    description: str | None = None
    source_id: str | None = None
    source_page: str | None = None
    notes: str | None = None

    def __post_init__(self) -> None:
        """Validate that the event has exactly one subject."""
        if self.station_id and self.segment_id:
            raise ValueError(f"Event {self.event_id} references both station and segment")
        if not self.station_id and not self.segment_id:
            raise ValueError(f"Event {self.event_id} references neither station nor segment")

    @property
    def year(self) -> int:
        """Resolved calendar year. Raises MalformedDateError for bad dates."""
        return resolve_year(self.date)

    @property
    def subject_kind(self) -> SubjectKind:
        return SubjectKind.STATION if self.station_id else SubjectKind.SEGMENT

    @property
    def subject_id(self) -> str:
        subject = self.station_id or self.segment_id
        assert subject is not None  # Guaranteed by __post_init__
        return subject

    @property
    def date_label(self) -> str:
        """Date shown at its stated precision (e.g. "1851-11" for month precision)."""
        cut = {DatePrecision.YEAR: 4, DatePrecision.MONTH: 7, DatePrecision.DAY: 10}[self.date_precision]
        return self.date[:cut]

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Event":
        """Create Event from dictionary.

        Raises:
            ValueError: On unknown event_type or date_precision values.
        """
        return cls(
            event_id=data["event_id"],
            event_type=EventType(data["event_type"]),
            date=data["date"],
            date_precision=DatePrecision(data.get("date_precision") or DatePrecision.DAY.value),
            station_id=data.get("station_id"),
            segment_id=data.get("segment_id"),
            line_id=data.get("line_id"),
            description=data.get("description"),
            source_id=data.get("source_id"),
            source_page=data.get("source_page"),
            notes=data.get("notes"),
        )

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["event_type"] = self.event_type.value
        data["date_precision"] = self.date_precision.value
        return {k: v for k, v in data.items() if v is not None}

    def __repr__(self) -> str:
        return f"Event({self.event_id}, {self.event_type.value}, {self.date}, {self.subject_id})"
