# result_cache.py
# Bounded LRU cache: query prefix -> previously computed ranked result.

from __future__ import annotations

import time
from collections import OrderedDict
from typing import Any, Callable, Generic, Hashable, List, Optional, Tuple, TypeVar

V = TypeVar("V")


class ResultCache(Generic[V]):
    """
    OrderedDict-backed LRU: the front is least recently used, the back most.
    get() and put() refresh recency; exists() does not.

    Entries are never invalidated when the frequency store or graph change;
    callers that need fresher rankings set a ttl (seconds) or call clear().
    """

    def __init__(
        self,
        capacity: int = 50,
        ttl: Optional[float] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.capacity = max(1, int(capacity))
        self.ttl = ttl if ttl and ttl > 0 else None
        self._clock = clock
        self._data: "OrderedDict[Hashable, Tuple[V, float]]" = OrderedDict()
        self.hits = 0
        self.misses = 0

    def _expired(self, stamp: float) -> bool:
        return self.ttl is not None and (self._clock() - stamp) >= self.ttl

    def get(self, key: Hashable) -> Optional[V]:
        """Cached value (now most recently used) or None."""
        entry = self._data.get(key)
        if entry is None:
            self.misses += 1
            return None
        value, stamp = entry
        if self._expired(stamp):
            del self._data[key]
            self.misses += 1
            return None
        self._data.move_to_end(key)
        self.hits += 1
        return value

    def put(self, key: Hashable, value: V) -> None:
        """Insert or overwrite, mark most recently used, evict LRU past capacity."""
        self._data[key] = (value, self._clock())
        self._data.move_to_end(key)
        while len(self._data) > self.capacity:
            self._data.popitem(last=False)

    def exists(self, key: Hashable) -> bool:
        entry = self._data.get(key)
        if entry is None:
            return False
        if self._expired(entry[1]):
            del self._data[key]
            return False
        return True

    def __contains__(self, key: Hashable) -> bool:
        return self.exists(key)

    def discard(self, key: Hashable) -> bool:
        """Drop one entry if present. Does not count as a hit or miss."""
        return self._data.pop(key, None) is not None

    def keys(self) -> List[Hashable]:
        """Keys from least to most recently used."""
        return list(self._data.keys())

    def clear(self) -> None:
        self._data.clear()

    def __len__(self) -> int:
        return len(self._data)

    def stats(self) -> dict:
        return {"size": len(self._data), "capacity": self.capacity, "hits": self.hits, "misses": self.misses}
