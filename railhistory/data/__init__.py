"""Loading of the station/segment catalogue and event log."""

from railhistory.data.loader import (
    DataLoadError,
    DataSource,
    SourceKind,
    load_demo_snapshot,
    load_snapshot,
    load_snapshot_from_bytes,
    load_snapshot_from_file,
    load_snapshot_from_url,
    save_snapshot_to_file,
)

__all__ = [
    "DataLoadError",
    "DataSource",
    "SourceKind",
    "load_demo_snapshot",
    "load_snapshot",
    "load_snapshot_from_bytes",
    "load_snapshot_from_file",
    "load_snapshot_from_url",
    "save_snapshot_to_file",
]
