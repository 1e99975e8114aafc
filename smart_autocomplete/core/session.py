# session.py
# Per-buffer state: last accepted token, result cache and edit history.
# Each open buffer gets its own Session so their contexts never mix.

from __future__ import annotations

from typing import List, Optional, Tuple

from smart_autocomplete.core.models import RankedList
from smart_autocomplete.core.result_cache import ResultCache
from smart_autocomplete.core.undo_redo import UndoRedoStack


class Session:
    def __init__(self, cache_capacity: int = 50, cache_ttl: Optional[float] = None) -> None:
        self.last_token = ""
        # (prefix, k) -> ranked result
        self.cache: ResultCache[RankedList] = ResultCache(cache_capacity, ttl=cache_ttl)
        self.history = UndoRedoStack()

    def set_last_token(self, token: str) -> None:
        self.last_token = token or ""

    def reset(self) -> None:
        """Forget context and cached rankings, e.g. when the caller switches files."""
        self.last_token = ""
        self.cache.clear()

    def describe(self) -> List[Tuple[str, str]]:
        return [
            ("last_token", self.last_token or "(none)"),
            ("cached_queries", str(len(self.cache))),
            ("undo_depth", str(len(self.history))),
        ]
