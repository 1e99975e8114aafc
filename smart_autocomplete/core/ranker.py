# ranker.py
"""
Ranker - scores candidates from the frequency store and the co-occurrence graph.

    score(token) = frequency(token) + graph_boost(last_token, token)

The boost term is only added when the session has a last accepted token.
Scores go through a fresh TopKSelector per call, so ordering is
score descending, then text ascending.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Tuple

from smart_autocomplete.core.cooccurrence_graph import CooccurrenceGraph
from smart_autocomplete.core.freq_store import FrequencyStore
from smart_autocomplete.core.models import RankedCandidate
from smart_autocomplete.core.session import Session
from smart_autocomplete.core.topk import TopKSelector


class Ranker:
    def __init__(self, freq: FrequencyStore, graph: CooccurrenceGraph, session: Optional[Session] = None) -> None:
        self.freq = freq
        self.graph = graph
        # used when a call does not pass its own session
        self.session = session or Session()

    def set_last_token(self, token: str) -> None:
        """Affects the next scoring pass only; cached results are not rescored."""
        self.session.set_last_token(token)

    def compute_score(self, token: str, session: Optional[Session] = None) -> float:
        last = (session or self.session).last_token
        score = float(self.freq.get(token))
        if last:
            score += self.graph.get_boost(last, token)
        return score

    def rank_results(
        self,
        candidates: Iterable[str],
        k: int,
        session: Optional[Session] = None,
        pinned: Iterable[Tuple[str, float]] = (),
        sources: Optional[Dict[str, str]] = None,
    ) -> List[RankedCandidate]:
        """
        Score candidates and keep the best k.
        pinned: already-scored (text, score) pairs, e.g. phrases, that compete
        in the same selection. sources: optional text -> source label.
        """
        if k <= 0:
            return []
        sources = dict(sources or {})
        heap = TopKSelector(k)
        for text, score in pinned:
            heap.insert(float(score), text)
            sources.setdefault(text, "phrase")
        for token in candidates:
            heap.insert(self.compute_score(token, session), token)
        return [
            RankedCandidate(text, score, sources.get(text, "token"))
            for score, text in heap.get_all()
        ]
