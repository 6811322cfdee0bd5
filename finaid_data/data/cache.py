"""In-memory time-boxed cache for upstream responses."""

import time
from collections.abc import Callable
from dataclasses import dataclass
from datetime import timedelta
from typing import Any


@dataclass
class CacheEntry:
    data: Any
    expires_at: float  # epoch seconds


class TTLCache:
    """Key-value store whose entries expire after a fixed time-to-live.

    Expired entries are dropped lazily on the next lookup; nothing sweeps
    them in the background and there is no size bound. Each fetcher owns
    one instance, so cached data never crosses between upstreams.
    """

    def __init__(self, ttl: timedelta, clock: Callable[[], float] = time.time) -> None:
        self.ttl = ttl
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}

    def get(self, key: str) -> Any | None:
        """Return cached data, or None if the key is missing or expired."""
        entry = self._entries.get(key)
        if entry is None:
            return None
        if self._clock() < entry.expires_at:
            return entry.data
        self._entries.pop(key, None)
        return None

    def set(self, key: str, data: Any, ttl: timedelta | None = None) -> None:
        """Store data under key, replacing any previous entry."""
        lifetime = (ttl if ttl is not None else self.ttl).total_seconds()
        self._entries[key] = CacheEntry(data=data, expires_at=self._clock() + lifetime)

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)
