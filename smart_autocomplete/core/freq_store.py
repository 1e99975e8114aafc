# freq_store.py
# Persistent token -> usage count table.
# Write-through: every mutation rewrites the backing file before returning.

from __future__ import annotations

import logging
from collections import Counter
from typing import List, Optional, Tuple

from smart_autocomplete.core.prefix_index import is_token
from smart_autocomplete.utils.model_store import PathLike, read_records, write_records

logger = logging.getLogger(__name__)


class FrequencyStore:
    """
    token -> count, count >= 0.
    File format: one "<token> <count>" pair per line.

    Public API:
      get(token), bump(token, amount=1), set(token, value)
      reset(token), clear()          (administrative resets)
      load(), save(), most_common(n)
    """

    def __init__(self, path: Optional[PathLike] = None) -> None:
        self.path = path
        self._counts: Counter = Counter()
        self.load()

    # persistence --------------------------------------------------
    def load(self) -> int:
        """(Re)load from disk. Malformed lines are skipped. Returns records loaded."""
        self._counts.clear()
        loaded = 0
        for lineno, line in read_records(self.path):
            parts = line.split()
            if len(parts) != 2:
                logger.debug("freq %s:%d skipped (expected 2 fields)", self.path, lineno)
                continue
            token, raw = parts
            try:
                count = int(raw)
            except ValueError:
                logger.debug("freq %s:%d skipped (bad count %r)", self.path, lineno, raw)
                continue
            if count < 0:
                logger.debug("freq %s:%d skipped (negative count)", self.path, lineno)
                continue
            self._counts[token] = count
            loaded += 1
        if loaded:
            logger.info("loaded %d frequency records from %s", loaded, self.path)
        return loaded

    def save(self) -> None:
        if self.path is None:
            return
        write_records(
            self.path,
            (f"{tok} {cnt}" for tok, cnt in sorted(self._counts.items())),
        )

    # queries ------------------------------------------------------
    def get(self, token: str) -> int:
        return self._counts.get(token, 0)

    def __contains__(self, token: str) -> bool:
        return token in self._counts

    def __len__(self) -> int:
        return len(self._counts)

    def most_common(self, n: int = 10) -> List[Tuple[str, int]]:
        """Highest counts first, ties by token."""
        items = sorted(self._counts.items(), key=lambda kv: (-kv[1], kv[0]))
        return items[:n]

    # mutation -----------------------------------------------------
    def bump(self, token: str, amount: int = 1) -> bool:
        """Add amount (>= 0) to token's count and persist."""
        if not is_token(token) or amount < 0:
            return False
        self._counts[token] += amount
        self.save()
        return True

    def set(self, token: str, value: int) -> bool:
        """Overwrite token's count (>= 0) and persist."""
        if not is_token(token) or value < 0:
            return False
        self._counts[token] = value
        self.save()
        return True

    def reset(self, token: str) -> bool:
        """Drop a token's record entirely. False if it had none."""
        if token not in self._counts:
            return False
        del self._counts[token]
        self.save()
        return True

    def clear(self) -> None:
        self._counts.clear()
        self.save()
