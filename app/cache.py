from __future__ import annotations

import threading
import time
from collections.abc import Callable
from dataclasses import dataclass
from urllib.parse import urlsplit

from app.schemas.profile import BusinessProfile

DEFAULT_TTL_SECONDS = 24 * 60 * 60


def normalize_cache_key(url: str) -> str:
    """Lower-cased ``scheme://host/path``; query and fragment are dropped.

    Input that does not parse into a scheme and host falls back to the
    lower-cased raw string.
    """
    url = url.strip()
    try:
        parts = urlsplit(url)
        host = parts.hostname
    except ValueError:
        return url.lower()
    if not parts.scheme or not host:
        return url.lower()
    return f"{parts.scheme}://{host}{parts.path or '/'}".lower()


@dataclass(frozen=True)
class _CacheEntry:
    data: BusinessProfile
    stored_at: float


class TTLCache:
    def __init__(
        self,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._entries: dict[str, _CacheEntry] = {}
        self._ttl = ttl_seconds
        self._clock = clock
        self._lock = threading.Lock()

    @property
    def ttl_seconds(self) -> float:
        return self._ttl

    def set(self, key: str, value: BusinessProfile) -> None:
        entry = _CacheEntry(data=value, stored_at=self._clock())
        with self._lock:
            self._entries[key] = entry

    def get(self, key: str) -> BusinessProfile | None:
        now = self._clock()
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            if now - entry.stored_at > self._ttl:
                del self._entries[key]
                return None
            return entry.data

    def has(self, key: str) -> bool:
        return self.get(key) is not None

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
