# models.py - small value types shared across core modules

from __future__ import annotations

from typing import NamedTuple, Tuple


class RankedCandidate(NamedTuple):
    """One suggestion: a token or phrase snippet with its score. Never persisted."""
    text: str
    score: float
    source: str = "token"  # "token", "substring" or "phrase"


RankedList = Tuple[RankedCandidate, ...]
