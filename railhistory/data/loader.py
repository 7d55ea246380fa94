"""Data loader - builds a DatabaseSnapshot from JSON.

Sources:
- Local JSON file in the snapshot format (DatabaseSnapshot.to_dict)
- JSON fetched over HTTP
- Uploaded JSON bytes (sidebar file uploader)
- Bundled demo database (railhistory/data/demo_data.json)

The loader is responsible for parsing and validating source data. It
logs events that reference unknown entities but does not reject them;
the resolver ignores those.
"""

import json
import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any

import requests

from railhistory.constants import DataConfig
from railhistory.core.dates import MalformedDateError
from railhistory.model.catalogue import DatabaseSnapshot

logger = logging.getLogger(__name__)


class DataLoadError(Exception):
    """Raised when a snapshot cannot be read or parsed."""

    def __init__(self, source: str, reason: str) -> None:
        self.source = source
        self.reason = reason
        super().__init__(f"Failed to load {source}: {reason}")


def snapshot_from_dict(data: dict[str, Any], source: str) -> DatabaseSnapshot:
    """Parse snapshot data and report data-quality issues.

    Every event date is resolved here, so a snapshot that loads can be
    resolved for any year.

    Raises:
        DataLoadError: If records are missing fields, have the wrong shape,
            or carry invalid values (including malformed event dates).
    """
    if not isinstance(data, dict):
        raise DataLoadError(source=source, reason=f"expected JSON object, got {type(data).__name__}")
    try:
        snapshot = DatabaseSnapshot.from_dict(data=data, source=source)
    except KeyError as e:
        raise DataLoadError(source=source, reason=f"missing field {e}") from e
    except (TypeError, AttributeError) as e:
        raise DataLoadError(source=source, reason=f"malformed record: {e}") from e
    except ValueError as e:
        raise DataLoadError(source=source, reason=str(e)) from e

    for event in snapshot.event_log.events:
        try:
            _ = event.year
        except MalformedDateError as e:
            raise DataLoadError(source=source, reason=f"event {event.event_id}: {e}") from e

    dangling = snapshot.find_dangling_references()
    for event in dangling:
        logger.warning(f"[LOAD] Event {event.event_id} references unknown {event.subject_kind.value} {event.subject_id}")

    logger.info(f"[LOAD] Loaded {source}: {snapshot.get_stats()}, {len(dangling)} dangling reference(s)")
    return snapshot


def load_snapshot_from_file(path: Path) -> DatabaseSnapshot:
    """Load a snapshot from a local JSON file.

    Raises:
        DataLoadError: If the file is missing, not valid JSON, or malformed.
    """
    source = str(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError as e:
        raise DataLoadError(source=source, reason="file not found") from e
    except json.JSONDecodeError as e:
        raise DataLoadError(source=source, reason=f"invalid JSON: {e}") from e
    return snapshot_from_dict(data=data, source=source)


def load_snapshot_from_url(url: str, timeout: float = DataConfig.HTTP_TIMEOUT_S) -> DatabaseSnapshot:
    """Fetch a snapshot JSON document over HTTP.

    Raises:
        DataLoadError: On HTTP errors or invalid JSON.
    """
    logger.info(f"[LOAD] Fetching snapshot from {url}")
    try:
        response = requests.get(url, timeout=timeout)
        response.raise_for_status()
        data = response.json()
    except requests.RequestException as e:
        raise DataLoadError(source=url, reason=str(e)) from e
    except ValueError as e:
        raise DataLoadError(source=url, reason=f"invalid JSON: {e}") from e
    return snapshot_from_dict(data=data, source=url)


def load_demo_snapshot() -> DatabaseSnapshot:
    """Load the bundled demo database."""
    return load_snapshot_from_file(path=DataConfig.DEMO_DATA_PATH)


def save_snapshot_to_file(snapshot: DatabaseSnapshot, path: Path) -> None:
    """Write a snapshot as pretty-printed UTF-8 JSON."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(snapshot.to_dict(), f, indent=2, ensure_ascii=False)
    logger.info(f"[SAVE] Snapshot written to {path}")


def load_snapshot_from_bytes(content: bytes, source: str) -> DatabaseSnapshot:
    """Parse an uploaded snapshot document.

    Raises:
        DataLoadError: If the content is not UTF-8 JSON or is malformed.
    """
    try:
        data = json.loads(content.decode("utf-8"))
    except UnicodeDecodeError as e:
        raise DataLoadError(source=source, reason=f"not UTF-8: {e}") from e
    except json.JSONDecodeError as e:
        raise DataLoadError(source=source, reason=f"invalid JSON: {e}") from e
    return snapshot_from_dict(data=data, source=source)


class SourceKind(Enum):
    """Where a snapshot comes from."""

    DEMO = "demo"
    FILE = "file"
    URL = "url"
    UPLOAD = "upload"


@dataclass(frozen=True)
class DataSource:
    """A snapshot location the viewer can (re)load from.

    Attributes:
        kind: Source type
        location: File path, URL or upload file name (empty for DEMO)
        content: Raw bytes for UPLOAD sources
    """

    kind: SourceKind = SourceKind.DEMO
    location: str = ""
    content: bytes | None = None

    def __post_init__(self) -> None:
        if self.kind is SourceKind.UPLOAD and self.content is None:
            raise ValueError("Upload sources need content")
        if self.kind in (SourceKind.FILE, SourceKind.URL) and not self.location:
            raise ValueError(f"{self.kind.value} sources need a location")

    @property
    def label(self) -> str:
        if self.kind is SourceKind.DEMO:
            return "Demo database"
        return self.location


def load_snapshot(source: DataSource) -> DatabaseSnapshot:
    """Load a snapshot from any supported source.

    Raises:
        DataLoadError: If loading fails.
    """
    if source.kind is SourceKind.DEMO:
        return load_demo_snapshot()
    if source.kind is SourceKind.FILE:
        return load_snapshot_from_file(path=Path(source.location))
    if source.kind is SourceKind.URL:
        return load_snapshot_from_url(url=source.location)
    assert source.content is not None
    return load_snapshot_from_bytes(content=source.content, source=source.location or "upload")
