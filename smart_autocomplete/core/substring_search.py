# substring_search.py
# Knuth-Morris-Pratt substring matching, used as the fallback when prefix
# matching finds too few candidates.

from __future__ import annotations

from typing import Iterable, Iterator, List


def compute_failure(pattern: str) -> List[int]:
    """
    failure[i] = length of the longest proper prefix of pattern[:i+1]
    that is also a suffix of it.
    """
    m = len(pattern)
    failure = [0] * m
    length = 0
    i = 1
    while i < m:
        if pattern[i] == pattern[length]:
            length += 1
            failure[i] = length
            i += 1
        elif length:
            length = failure[length - 1]
        else:
            failure[i] = 0
            i += 1
    return failure


def _matches(text: str, pattern: str, failure: List[int]) -> Iterator[int]:
    """Start offsets of every (possibly overlapping) occurrence. Single pass over text."""
    n, m = len(text), len(pattern)
    j = 0
    for i in range(n):
        while j and text[i] != pattern[j]:
            j = failure[j - 1]
        if text[i] == pattern[j]:
            j += 1
            if j == m:
                yield i - m + 1
                j = failure[j - 1]


def contains(text: str, pattern: str) -> bool:
    """True if pattern occurs in text. The empty pattern occurs everywhere."""
    if not pattern:
        return True
    if len(pattern) > len(text):
        return False
    return next(_matches(text, pattern, compute_failure(pattern)), None) is not None


def find_all(text: str, pattern: str) -> List[int]:
    """Every match start offset, ascending. Empty pattern -> []."""
    if not pattern or len(pattern) > len(text):
        return []
    return list(_matches(text, pattern, compute_failure(pattern)))


class SubstringSearcher:
    """Precomputes the failure table once for scanning many texts with one pattern."""

    def __init__(self, pattern: str) -> None:
        self.pattern = pattern
        self._failure = compute_failure(pattern)

    def contains(self, text: str) -> bool:
        if not self.pattern:
            return True
        if len(self.pattern) > len(text):
            return False
        return next(_matches(text, self.pattern, self._failure), None) is not None

    def find_all(self, text: str) -> List[int]:
        if not self.pattern or len(self.pattern) > len(text):
            return []
        return list(_matches(text, self.pattern, self._failure))

    def scan(self, texts: Iterable[str]) -> Iterator[str]:
        """Texts containing the pattern, in input order."""
        for t in texts:
            if self.contains(t):
                yield t
