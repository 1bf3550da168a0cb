import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

DEFAULT_TTL_SECONDS = 24 * 60 * 60


@dataclass(frozen=True)
class CacheEntry:
    value: Any
    timestamp: float


class GeocodeCache:
    """
    In-process cache for geocoding results with a fixed time-to-live.

    Expired entries are dropped by the lookup that finds them; there is no
    background sweep and no size bound. Writes to the same key are
    last-write-wins.
    """

    def __init__(self, ttl: float = DEFAULT_TTL_SECONDS, clock: Callable[[], float] = time.monotonic):
        self.ttl = ttl
        self._clock = clock
        self._entries: Dict[str, CacheEntry] = {}

    def get(self, key: str) -> Optional[CacheEntry]:
        entry = self._entries.get(key)
        if entry is None:
            return None
        if self._clock() - entry.timestamp < self.ttl:
            return entry
        self._entries.pop(key, None)
        return None

    def put(self, key: str, value: Any) -> CacheEntry:
        entry = CacheEntry(value=value, timestamp=self._clock())
        self._entries[key] = entry
        return entry

    def clear(self) -> int:
        count = len(self._entries)
        self._entries.clear()
        return count

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: str) -> bool:
        return key in self._entries
