# phrase_store.py
"""
PhraseStore - learned multi-token snippets keyed by a short trigger.

Example: the user saves the line "for(i=0;i<n;i++)"; its trigger is "for".
Next time "for" is typed the whole loop is offered as a suggestion.

 - trigger -> list of phrases in insertion order, re-sorted by use_count on read
 - identical (trigger, snippet) pairs are merged by bumping use_count
 - degenerate phrases (snippet == trigger, or fewer than 3 extra chars) are refused
 - persisted as "trigger|snippet|useCount" lines, rewritten on every change
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Dict, List, Optional

from smart_autocomplete.utils.model_store import PathLike, read_records, write_records

logger = logging.getLogger(__name__)

SEP = "|"
MIN_EXTRA_CHARS = 3
TRIGGER_STOP_CHARS = " \t({[<>"


@dataclass
class Phrase:
    trigger: str
    snippet: str
    use_count: int = 1


def is_valid_phrase(trigger: str, snippet: str) -> bool:
    if not trigger or not snippet:
        return False
    if SEP in trigger or any(ch in trigger or ch in snippet for ch in "\r\n"):
        return False
    if snippet == trigger:
        return False
    return len(snippet) >= len(trigger) + MIN_EXTRA_CHARS


def extract_trigger(line: str) -> str:
    """Leading characters of the (stripped) line up to a space or an opening bracket."""
    out = []
    for ch in line.strip():
        if ch in TRIGGER_STOP_CHARS:
            break
        out.append(ch)
    return "".join(out)


class PhraseStore:
    """
    Public API:
      add_phrase(trigger, text) -> bool
      get_phrases(trigger), get_top_phrases(trigger, n)
      has_phrase(trigger, text), total_phrases(), triggers()
      learn_line(line) -> Optional[Phrase]
      save(), load()
    """

    def __init__(self, path: Optional[PathLike] = None) -> None:
        self.path = path
        self._phrases: Dict[str, List[Phrase]] = {}
        self.load()

    # learning -----------------------------------------------------
    def add_phrase(self, trigger: str, text: str) -> bool:
        """Teach or reinforce (trigger, text). False if the phrase is degenerate."""
        if not is_valid_phrase(trigger, text):
            logger.debug("phrase refused: %r -> %r", trigger, text)
            return False
        bucket = self._phrases.setdefault(trigger, [])
        for p in bucket:
            if p.snippet == text:
                p.use_count += 1
                break
        else:
            bucket.append(Phrase(trigger, text))
        self.save()
        return True

    def learn_line(self, line: str) -> Optional[Phrase]:
        """Save a whole line as a phrase under its extracted trigger."""
        text = line.strip()
        trigger = extract_trigger(text)
        if not trigger or not self.add_phrase(trigger, text):
            return None
        return next(p for p in self.get_phrases(trigger) if p.snippet == text)

    # queries ------------------------------------------------------
    def get_phrases(self, trigger: str) -> List[Phrase]:
        """Copies of the trigger's phrases, most used first (ties keep insertion order)."""
        bucket = self._phrases.get(trigger)
        if not bucket:
            return []
        return [replace(p) for p in sorted(bucket, key=lambda p: -p.use_count)]

    def get_top_phrases(self, trigger: str, n: int = 5) -> List[Phrase]:
        if n <= 0:
            return []
        return self.get_phrases(trigger)[:n]

    def has_phrase(self, trigger: str, text: str) -> bool:
        return any(p.snippet == text for p in self._phrases.get(trigger, ()))

    def total_phrases(self) -> int:
        return sum(len(b) for b in self._phrases.values())

    def triggers(self) -> List[str]:
        return sorted(self._phrases)

    # persistence --------------------------------------------------
    def save(self) -> None:
        if self.path is None:
            return
        lines = (
            f"{p.trigger}{SEP}{p.snippet}{SEP}{p.use_count}"
            for bucket in self._phrases.values()
            for p in bucket
        )
        write_records(self.path, lines)

    def load(self) -> int:
        """
        Rebuild from disk. The trigger ends at the first '|', the count starts
        after the last one, so snippets may themselves contain '|'.
        """
        self._phrases.clear()
        loaded = 0
        for lineno, line in read_records(self.path):
            head, sep, raw_count = line.rpartition(SEP)
            trigger, sep2, snippet = head.partition(SEP)
            if not sep or not sep2:
                logger.debug("phrases %s:%d skipped (expected 3 fields)", self.path, lineno)
                continue
            try:
                count = int(raw_count)
            except ValueError:
                logger.debug("phrases %s:%d skipped (bad count %r)", self.path, lineno, raw_count)
                continue
            if count < 1 or not is_valid_phrase(trigger, snippet):
                logger.debug("phrases %s:%d skipped (invalid phrase)", self.path, lineno)
                continue
            if self.has_phrase(trigger, snippet):
                logger.debug("phrases %s:%d skipped (duplicate)", self.path, lineno)
                continue
            self._phrases.setdefault(trigger, []).append(Phrase(trigger, snippet, count))
            loaded += 1
        if loaded:
            logger.info("loaded %d phrases from %s", loaded, self.path)
        return loaded
