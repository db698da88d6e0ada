"""
In-memory TTL cache for risk reports.

Only successful fetches are stored. Entries are never evicted: a stale entry
reads as a miss and is simply overwritten by the next successful put. There is
no capacity bound; the set of tracked mints is small and caller-bounded.

Note: each process (and each uvicorn worker) has its own cache. Nothing is
persisted across restarts.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Any, Callable

from backend_rugcheck.config.settings import DEFAULT_CACHE_TTL_SEC


@dataclass(frozen=True)
class CacheEntry:
    key: str
    payload: Any
    fetched_at: float


class TTLCache:
    """Map of key -> (payload, fetched_at); freshness judged at read time."""

    def __init__(
        self,
        ttl_sec: float = DEFAULT_CACHE_TTL_SEC,
        *,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._ttl = ttl_sec
        self._clock = clock
        self._store: dict[str, CacheEntry] = {}

    @property
    def ttl_sec(self) -> float:
        return self._ttl

    def get(self, key: str) -> tuple[Any | None, bool]:
        """Return (payload, True) if a fresh entry exists, else (None, False). Stale entries stay put."""
        entry = self._store.get(key)
        if entry is None:
            return None, False
        if self._clock() - entry.fetched_at < self._ttl:
            return entry.payload, True
        return None, False

    def put(self, key: str, payload: Any) -> None:
        self._store[key] = CacheEntry(key=key, payload=payload, fetched_at=self._clock())

    def entry(self, key: str) -> CacheEntry | None:
        """Raw entry regardless of freshness (for inspection and tests)."""
        return self._store.get(key)

    def __contains__(self, key: object) -> bool:
        return key in self._store

    def __len__(self) -> int:
        return len(self._store)
