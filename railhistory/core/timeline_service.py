"""TimelineService - holds the loaded snapshot and memoizes resolved years.

The snapshot is swapped as a whole, never mutated in place. Every resolve
call captures the snapshot reference once at its start, so a swap that
happens between calls is always seen atomically.
"""

import logging
import threading

from railhistory.core.resolver import TemporalStateResolver
from railhistory.model.annotated import YearView
from railhistory.model.catalogue import DatabaseSnapshot

logger = logging.getLogger(__name__)


class TimelineService:
    """Snapshot holder with a per-year result cache.

    Resolving is pure and idempotent, so views are cached by year until
    the next snapshot swap.

    Example:
        service = TimelineService(snapshot=load_demo_snapshot())
        view = service.resolve(year=1900)
    """

    def __init__(self, snapshot: DatabaseSnapshot) -> None:
        self._snapshot = snapshot
        self._cache: dict[int, YearView] = {}
        self._lock = threading.Lock()

    @property
    def snapshot(self) -> DatabaseSnapshot:
        """Current snapshot (read-only handle)."""
        return self._snapshot

    @property
    def cached_years(self) -> list[int]:
        return sorted(self._cache)

    def swap_snapshot(self, snapshot: DatabaseSnapshot) -> None:
        """Replace the whole snapshot and drop cached views."""
        with self._lock:
            self._snapshot = snapshot
            self._cache = {}
        logger.info(f"[TIMELINE] Snapshot swapped: {snapshot.get_stats()}")

    def resolve(self, year: int) -> YearView:
        """Resolve a year against the current snapshot, using the cache."""
        with self._lock:
            snapshot = self._snapshot
            cache = self._cache
            cached = cache.get(year)
        if cached is not None:
            return cached

        view = TemporalStateResolver.resolve(
            year=year,
            catalogue=snapshot.catalogue,
            event_log=snapshot.event_log,
        )

        with self._lock:
            # Only store if no swap happened while resolving
            if self._cache is cache:
                cache[year] = view
        return view

    def clear_cache(self) -> None:
        with self._lock:
            self._cache = {}
