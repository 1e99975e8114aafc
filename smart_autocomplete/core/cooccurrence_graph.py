# cooccurrence_graph.py
# Directed weighted graph of "token A was accepted right before token B".
# Same shape as a first-order Markov chain: prev -> Counter(next).

from __future__ import annotations

import logging
import math
from collections import Counter, defaultdict
from typing import Dict, Iterator, List, Optional, Tuple

from smart_autocomplete.core.prefix_index import is_token
from smart_autocomplete.utils.model_store import PathLike, read_records, write_records

logger = logging.getLogger(__name__)

BOOST_SCALE = 0.5

Edge = Tuple[str, str, int]


class CooccurrenceGraph:
    """
    from -> {to: weight}, weight >= 1. Self-loops allowed, need not be connected.

    Session-only unless a path is given; with a path every add_edge rewrites
    "<from> <to> <weight>" lines (write-through, like the other stores).
    """

    def __init__(self, path: Optional[PathLike] = None) -> None:
        self.path = path
        self._adj: Dict[str, Counter] = defaultdict(Counter)
        self.load()

    # mutation -----------------------------------------------------
    def add_edge(self, src: str, dst: str) -> int:
        """Record one src -> dst transition. Returns the new weight (0 if refused)."""
        if not is_token(src) or not is_token(dst):
            return 0
        self._adj[src][dst] += 1
        self.save()
        return self._adj[src][dst]

    # queries ------------------------------------------------------
    def get_edge_weight(self, src: str, dst: str) -> int:
        nbrs = self._adj.get(src)
        if not nbrs:
            return 0
        return nbrs.get(dst, 0)

    def get_boost(self, src: str, dst: str) -> float:
        """
        ln(1 + weight) * 0.5 for an existing edge, else 0.0.
        Sub-linear: a one-off transition adds ~0.35, a hundred add ~2.3.
        """
        w = self.get_edge_weight(src, dst)
        if w <= 0:
            return 0.0
        return math.log1p(w) * BOOST_SCALE

    def neighbors(self, src: str) -> List[Tuple[str, int]]:
        """Outgoing edges of src, heaviest first then by token."""
        nbrs = self._adj.get(src)
        if not nbrs:
            return []
        return sorted(nbrs.items(), key=lambda kv: (-kv[1], kv[0]))

    def edges(self) -> Iterator[Edge]:
        for src in sorted(self._adj):
            for dst, w in sorted(self._adj[src].items()):
                yield src, dst, w

    def edge_count(self) -> int:
        return sum(len(v) for v in self._adj.values())

    def node_count(self) -> int:
        nodes = set(self._adj)
        for nbrs in self._adj.values():
            nodes.update(nbrs)
        return len(nodes)

    def describe(self) -> List[str]:
        """One "from -> to(w) to(w)" line per source token, for display."""
        lines = []
        for src in sorted(self._adj):
            parts = " ".join(f"{dst}({w})" for dst, w in self.neighbors(src))
            lines.append(f"{src} -> {parts}")
        return lines

    # persistence --------------------------------------------------
    def load(self) -> int:
        self._adj.clear()
        loaded = 0
        for lineno, line in read_records(self.path):
            parts = line.split()
            if len(parts) != 3:
                logger.debug("graph %s:%d skipped (expected 3 fields)", self.path, lineno)
                continue
            src, dst, raw = parts
            try:
                w = int(raw)
            except ValueError:
                logger.debug("graph %s:%d skipped (bad weight %r)", self.path, lineno, raw)
                continue
            if w < 1:
                logger.debug("graph %s:%d skipped (weight < 1)", self.path, lineno)
                continue
            self._adj[src][dst] = w
            loaded += 1
        if loaded:
            logger.info("loaded %d graph edges from %s", loaded, self.path)
        return loaded

    def save(self) -> None:
        if self.path is None:
            return
        write_records(self.path, (f"{s} {d} {w}" for s, d, w in self.edges()))
