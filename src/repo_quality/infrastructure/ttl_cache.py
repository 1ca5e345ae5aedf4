"""In-process time-to-live cache for GitHub API responses.

Entries are never persisted. A stale entry is treated as absent and is
overwritten by the next ``set`` for the same key.
"""

from __future__ import annotations

import logging
import time
from collections import OrderedDict
from typing import Any, Callable

from repo_quality.domain.entities import CacheEntry

logger = logging.getLogger(__name__)

DEFAULT_TTL_SECONDS = 5 * 60


class TtlCache:
    """Key → :class:`CacheEntry` map whose entries expire after *ttl_seconds*.

    Parameters
    ----------
    ttl_seconds:
        Lifetime of an entry, measured from its ``fetched_at``.
    clock:
        Zero-argument callable returning seconds; inject a fake for tests.
    max_entries:
        Optional bound; when set, the least recently used entry is evicted
        on overflow. ``None`` keeps the cache unbounded.
    """

    def __init__(
        self,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
        max_entries: int | None = None,
    ) -> None:
        if max_entries is not None and max_entries < 1:
            raise ValueError("max_entries must be positive or None")
        self._ttl = ttl_seconds
        self._clock = clock
        self._max_entries = max_entries
        self._entries: OrderedDict[str, CacheEntry] = OrderedDict()

    @property
    def ttl_seconds(self) -> float:
        return self._ttl

    def get(self, key: str) -> CacheEntry | None:
        """Return the fresh entry for *key*, or ``None`` if missing or stale."""
        entry = self._entries.get(key)
        if entry is None:
            return None
        if not self._is_fresh(entry):
            return None
        self._entries.move_to_end(key)
        return entry

    def set(self, key: str, data: Any) -> CacheEntry:
        """Store *data* under *key*, stamped with the current clock reading."""
        entry = CacheEntry(key=key, data=data, fetched_at=self._clock())
        self._entries[key] = entry
        self._entries.move_to_end(key)

        if self._max_entries is not None:
            while len(self._entries) > self._max_entries:
                evicted, _ = self._entries.popitem(last=False)
                logger.debug("Evicted cache entry %s", evicted)
        return entry

    def purge_expired(self) -> int:
        """Drop every stale entry and return how many were removed."""
        stale = [key for key, entry in self._entries.items() if not self._is_fresh(entry)]
        for key in stale:
            del self._entries[key]
        return len(stale)

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def _is_fresh(self, entry: CacheEntry) -> bool:
        return self._clock() - entry.fetched_at < self._ttl
