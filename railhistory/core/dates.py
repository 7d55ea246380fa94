"""Year extraction from event dates.

Event dates are ISO strings with day, month, or year precision:
"1851-11-01", "1851-11", "1851". A full date may carry an ISO time
("1851-11-01T00:00:00"), which is ignored. The resolved year is always the
calendar year of the date; the stated precision never changes it.

Malformed dates raise MalformedDateError. Callers must not swallow it:
a bad date means the source data needs fixing upstream.
"""

import re
from datetime import date

DATE_PATTERN = re.compile(
    r"^(\d{1,4})(?:-(\d{2})(?:-(\d{2})"
    # Optional ISO time after a full date; it never affects the year
    r"(?:[T ]\d{2}:\d{2}(?::\d{2}(?:\.\d+)?)?(?:Z|[+-]\d{2}:?\d{2})?)?"
    r")?)?$"
)


class MalformedDateError(ValueError):
    """Raised when an event date cannot be resolved to a calendar year."""

    def __init__(self, value: object, reason: str) -> None:
        self.value = value
        self.reason = reason
        super().__init__(f"Malformed event date {value!r}: {reason}")


def resolve_year(value: str | date) -> int:
    """Return the calendar year of an event date.

    Args:
        value: ISO date string (YYYY, YYYY-MM, YYYY-MM-DD, optionally with a time) or datetime.date

    Returns:
        The calendar year as an int.

    Raises:
        MalformedDateError: If the value is not a valid date.
    """
    if isinstance(value, date):
        return value.year
    if not isinstance(value, str):
        raise MalformedDateError(value=value, reason=f"expected str or date, got {type(value).__name__}")

    match = DATE_PATTERN.match(value.strip())
    if not match:
        raise MalformedDateError(value=value, reason="expected YYYY, YYYY-MM or YYYY-MM-DD")

    year_str, month_str, day_str = match.groups()
    year = int(year_str)
    month = int(month_str) if month_str else 1
    day = int(day_str) if day_str else 1

    # Validates month/day ranges (e.g. rejects 1851-13-01 and 1851-02-30)
    try:
        date(year, month, day)
    except ValueError as e:
        raise MalformedDateError(value=value, reason=str(e)) from e

    return year
