# topk.py
# Fixed-capacity min-heap keeping the K best (score, item) pairs seen so far.

from __future__ import annotations

import heapq
from typing import List, Optional, Tuple

Scored = Tuple[float, str]


class _Entry:
    """
    Heap entry. Ordered by score; among equal scores the lexicographically
    larger item counts as smaller, so it sits at the root and is dropped first.
    """

    __slots__ = ("score", "item")

    def __init__(self, score: float, item: str) -> None:
        self.score = score
        self.item = item

    def __lt__(self, other: "_Entry") -> bool:
        if self.score != other.score:
            return self.score < other.score
        return self.item > other.item


class TopKSelector:
    """
    insert() is O(log K); the heap never grows past K.

    Once full, a new pair only gets in if its score is strictly greater than
    the current minimum, so for tied scores the earlier insertion is kept.
    get_all() orders by score descending, then item ascending.
    """

    def __init__(self, k: int) -> None:
        self.k = max(0, int(k))
        self._heap: List[_Entry] = []

    def insert(self, score: float, item: str) -> bool:
        """Offer a pair. True if it was kept."""
        if self.k == 0:
            return False
        if len(self._heap) < self.k:
            heapq.heappush(self._heap, _Entry(score, item))
            return True
        if score > self._heap[0].score:
            heapq.heapreplace(self._heap, _Entry(score, item))
            return True
        return False

    def peek_min(self) -> Optional[Scored]:
        if not self._heap:
            return None
        e = self._heap[0]
        return e.score, e.item

    def extract_min(self) -> Optional[Scored]:
        """Remove and return the weakest pair, None when empty."""
        if not self._heap:
            return None
        e = heapq.heappop(self._heap)
        return e.score, e.item

    def get_all(self) -> List[Scored]:
        return sorted(((e.score, e.item) for e in self._heap), key=lambda p: (-p[0], p[1]))

    def clear(self) -> None:
        self._heap.clear()

    @property
    def is_full(self) -> bool:
        return len(self._heap) >= self.k

    def __len__(self) -> int:
        return len(self._heap)
