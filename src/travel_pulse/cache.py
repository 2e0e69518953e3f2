"""In-process response cache with per-entry TTL."""

import threading
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from .models import Coordinates


@dataclass(frozen=True)
class CacheEntry:
    value: Any
    expires_at: float


class ResponseCache:
    """
    Key -> value store with absolute expiry per entry.

    An entry is visible only while clock() < expires_at. Expired entries are
    evicted when read; there is no background sweep. Safe to share between
    concurrent requests.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> Any | None:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            if self._clock() >= entry.expires_at:
                del self._entries[key]
                return None
            return entry.value

    def set(self, key: str, value: Any, ttl_seconds: float) -> None:
        with self._lock:
            self._entries[key] = CacheEntry(value=value, expires_at=self._clock() + ttl_seconds)

    def clear(self, key: str | None = None) -> None:
        with self._lock:
            if key is None:
                self._entries.clear()
            else:
                self._entries.pop(key, None)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


def build_cache_key(
    version: str,
    category: str,
    country: str,
    city: str,
    coords: Coordinates | None = None,
) -> str:
    """
    Deterministic cache key for a query.

    Coordinates are rounded to 4 decimals (~11 m) so nearby origins share an
    entry while distinct search origins do not.

    Example: food_v6_Japan_Tokyo_35.6762_139.6503
    """
    parts = [version, country, city]
    if category:
        parts.insert(1, category)
    if coords is None:
        parts.append("no_gps")
    else:
        parts.extend([f"{coords.lat:.4f}", f"{coords.lng:.4f}"])
    return "_".join(parts)
