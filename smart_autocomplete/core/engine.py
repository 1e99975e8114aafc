# engine.py
"""
AutocompleteEngine - application facade over the core stores.

Purpose:
 - Own the prefix index, frequency store, co-occurrence graph and phrase store
 - Compose the query path: cache -> prefix index -> substring fallback
   -> phrases -> ranker/top-k -> cache
 - Record acceptances (frequency, graph edge, coined tokens, edit history)
 - Simple public API for the shell/editor/tests:
     suggest(prefix, k), accept(text), learn_phrase(trigger, text), learn_line(line),
     bump(token, amount), undo(), redo(), load_seeds(path), stats()

All stores are write-through, so there is no separate save step.
Not thread safe: wrap calls in a lock if the host is multi-threaded.
"""

from __future__ import annotations

import weakref
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Tuple

from smart_autocomplete.core.cooccurrence_graph import CooccurrenceGraph
from smart_autocomplete.core.freq_store import FrequencyStore
from smart_autocomplete.core.models import RankedCandidate, RankedList
from smart_autocomplete.core.phrase_store import Phrase, PhraseStore, extract_trigger
from smart_autocomplete.core.prefix_index import PrefixIndex, is_token
from smart_autocomplete.core.ranker import Ranker
from smart_autocomplete.core.session import Session
from smart_autocomplete.core.substring_search import SubstringSearcher
from smart_autocomplete.core.undo_redo import HistoryResult
from smart_autocomplete.utils.config_manager import EngineConfig
from smart_autocomplete.utils.logger_utils import Log
from smart_autocomplete.utils.model_store import PathLike


class AutocompleteEngine:
    """
    Public API:
      - suggest(prefix, k=None, session=None) -> List[RankedCandidate]
      - accept(text, position=0, trigger=None, session=None) -> bool
      - learn_phrase(trigger, full_text) -> bool
      - learn_line(line) -> Optional[Phrase]
      - bump(token, amount=None) -> bool
      - undo(session=None) / redo(session=None) -> HistoryResult
      - load_seeds(path) -> int, add_tokens(tokens) -> int
      - toggle_substring_search() -> bool
      - new_session() -> Session
      - stats() -> Dict[str, Any]
    """

    def __init__(
        self,
        config: Optional[EngineConfig] = None,
        freq_path: Optional[PathLike] = None,
        phrase_path: Optional[PathLike] = None,
        graph_path: Optional[PathLike] = None,
    ) -> None:
        self.config = config or EngineConfig()
        self.index = PrefixIndex()
        self.freq = FrequencyStore(freq_path)
        self.graph = CooccurrenceGraph(graph_path)
        self.phrases = PhraseStore(phrase_path)
        self.substring_search = bool(self.config.substring_search)

        self._sessions: "weakref.WeakSet[Session]" = weakref.WeakSet()
        self.session = self.new_session()
        self.ranker = Ranker(self.freq, self.graph, self.session)

        # tokens the user accepted earlier are part of the vocabulary too
        self.index.insert_many(tok for tok, _ in self.freq.most_common(len(self.freq)))
        Log.debug(
            f"[Engine] ready: vocab={len(self.index)} freq={len(self.freq)} "
            f"phrases={self.phrases.total_phrases()}"
        )

    # sessions -----------------------------------------------------
    def new_session(self) -> Session:
        """A fresh buffer context with its own last token, cache and history."""
        ttl = self.config.cache_ttl if self.config.cache_ttl > 0 else None
        s = Session(self.config.cache_capacity, ttl)
        self._sessions.add(s)
        return s

    def _after_write(self) -> None:
        if self.config.invalidate_on_write:
            self._clear_caches()

    def _clear_caches(self) -> None:
        for s in list(self._sessions):
            s.cache.clear()

    def _forget_prefix(self, prefix: str) -> None:
        """Drop cached results for one query prefix (every k) in all sessions."""
        for s in list(self._sessions):
            for key in s.cache.keys():
                if key[0] == prefix:
                    s.cache.discard(key)

    # vocabulary ---------------------------------------------------
    def load_seeds(self, path: PathLike) -> int:
        """Insert whitespace-separated tokens from a seed file. Returns tokens read."""
        p = Path(path)
        if not p.exists():
            Log.warning(f"[Engine] seed file not found: {p}")
            return 0
        with Log.time_block("load_seeds"):
            with open(p, "r", encoding="utf-8") as fh:
                count = sum(self.add_tokens(line.split()) for line in fh)
        Log.info(f"[Engine] loaded {count} tokens from {p}")
        return count

    def add_tokens(self, tokens: Iterable[str]) -> int:
        return self.index.insert_many(tokens)

    # query path ---------------------------------------------------
    def suggest(self, prefix: str, k: Optional[int] = None, session: Optional[Session] = None) -> List[RankedCandidate]:
        """
        Ranked completions for prefix, best first.
        Between mutations, repeated calls return the cached result unchanged.
        """
        session = session or self.session
        k = self.config.max_suggestions if k is None else int(k)
        if not prefix or k <= 0:
            return []

        key = (prefix, k)
        cached = session.cache.get(key)
        if cached is not None:
            return list(cached)

        ranked = self._compute(prefix, k, session)
        session.cache.put(key, ranked)
        return list(ranked)

    def _compute(self, prefix: str, k: int, session: Session) -> RankedList:
        want = max(k, k * max(1, self.config.candidate_multiplier))
        candidates = self.index.prefix_search(prefix, want)
        sources: Dict[str, str] = {}

        if self.substring_search and len(candidates) < self.config.substring_threshold:
            extra = self._substring_candidates(prefix, set(candidates))
            for tok in extra:
                sources[tok] = "substring"
            candidates = sorted(set(candidates).union(extra))

        pinned: List[Tuple[str, float]] = []
        if self.config.phrase_suggestions:
            for ph in self.phrases.get_top_phrases(prefix, self.config.phrase_limit):
                pinned.append((ph.snippet, self.config.phrase_score))
            if pinned:
                taken = {text for text, _ in pinned}
                candidates = [c for c in candidates if c not in taken]

        return tuple(self.ranker.rank_results(candidates, k, session, pinned=pinned, sources=sources))

    def _substring_candidates(self, pattern: str, seen: set) -> List[str]:
        searcher = SubstringSearcher(pattern)
        return [tok for tok in searcher.scan(self.index.all_tokens()) if tok not in seen]

    # learning -----------------------------------------------------
    def accept(
        self,
        text: str,
        position: int = 0,
        trigger: Optional[str] = None,
        session: Optional[Session] = None,
    ) -> bool:
        """
        Record that the user took a suggestion (or typed a token).
        Single tokens update frequency, the graph edge from the previous
        accepted token, the vocabulary and the session's last token.
        With a trigger, (trigger, text) is also taught to the phrase store.
        """
        session = session or self.session
        text = (text or "").strip()
        if not text:
            return False

        if is_token(text):
            self.freq.bump(text, 1)
            if session.last_token:
                self.graph.add_edge(session.last_token, text)
            if text not in self.index:
                self.index.insert(text)
                Log.debug(f"[Engine] new token {text!r}")
            session.set_last_token(text)

        if trigger and trigger != text:
            if self.phrases.add_phrase(trigger, text):
                self._forget_prefix(trigger)

        session.history.push(position, text)
        self._after_write()
        Log.debug(f"[Engine] accepted {text!r}")
        return True

    def learn_phrase(self, trigger: str, full_text: str) -> bool:
        ok = self.phrases.add_phrase(trigger, full_text)
        if ok:
            self._forget_prefix(trigger)
            self._after_write()
            Log.info(f"[Engine] phrase saved: {trigger!r} -> {full_text!r}")
        return ok

    def learn_line(self, line: str) -> Optional[Phrase]:
        """Save a whole line as a phrase; the trigger is its first word."""
        phrase = self.phrases.learn_line(line)
        if phrase is None:
            Log.debug(f"[Engine] line not saved as phrase (trigger={extract_trigger(line)!r})")
            return None
        self._forget_prefix(phrase.trigger)
        self._after_write()
        return phrase

    def bump(self, token: str, amount: Optional[int] = None) -> bool:
        """Administrative frequency increase (default: config.bump_amount)."""
        n = self.config.bump_amount if amount is None else int(amount)
        ok = self.freq.bump(token, n)
        if ok:
            self._after_write()
            Log.info(f"[Engine] bumped {token!r} by {n}")
        return ok

    # history ------------------------------------------------------
    def undo(self, session: Optional[Session] = None) -> HistoryResult:
        res = (session or self.session).history.undo()
        Log.debug(f"[Engine] undo -> {res}")
        return res

    def redo(self, session: Optional[Session] = None) -> HistoryResult:
        res = (session or self.session).history.redo()
        Log.debug(f"[Engine] redo -> {res}")
        return res

    # misc ---------------------------------------------------------
    def toggle_substring_search(self) -> bool:
        """Flip the fallback. Cached results were computed under the old mode, so all are dropped."""
        self.substring_search = not self.substring_search
        self._clear_caches()
        return self.substring_search

    def stats(self) -> Dict[str, Any]:
        return {
            "vocab_size": len(self.index),
            "index_nodes": self.index.node_count(),
            "freq_records": len(self.freq),
            "graph_edges": self.graph.edge_count(),
            "phrases": self.phrases.total_phrases(),
            "substring_search": self.substring_search,
            "last_token": self.session.last_token,
            "cache": self.session.cache.stats(),
        }
