"""Parsing of markers embedded in free-text station notes."""

import re

from railhistory.constants import NotesConfig

_RADIUS_RE = re.compile(NotesConfig.RADIUS_PATTERN)


def parse_display_radius_km(notes: str | None) -> float | None:
    """Extract the approximate-location radius from station notes.

    Example:
        parse_display_radius_km("<radius 5.50> Approximate location")  # 5.5

    Returns:
        Radius in kilometers, or None when notes carry no radius marker.
    """
    if not notes:
        return None
    match = _RADIUS_RE.search(notes)
    if match is None:
        return None
    return float(match.group(1))


def strip_markers(notes: str | None) -> str:
    """Return notes with any radius marker removed, for display."""
    if not notes:
        return ""
    return _RADIUS_RE.sub("", notes).strip()
