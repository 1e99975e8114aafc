# prefix_index.py
# Ternary search tree for prefix lookups over the dictionary + accepted tokens.
# Nodes live in flat parallel lists (an arena) and refer to each other by index,
# so there are no parent/child object references and the whole tree is just lists.
# Enumeration order is the in-order walk: ascending code-point lexicographic order.

from __future__ import annotations

from itertools import islice
from typing import Iterator, List

ABSENT = -1

# traversal stack tags
_VISIT = 0
_EMIT = 1


def is_token(text: str) -> bool:
    """A token is a non-empty string without whitespace."""
    return bool(text) and not any(ch.isspace() for ch in text)


class PrefixIndex:
    """
    Ternary search tree (left / mid / right per node).
    Per character, a node compares three ways instead of holding one child per
    alphabet symbol, so memory follows the number of distinct transitions.

    No per-token metadata is kept here: frequencies and graph edges live in
    their own stores.
    """

    __slots__ = ("_char", "_left", "_mid", "_right", "_end", "_root", "_size")

    def __init__(self) -> None:
        self._char: List[str] = []
        self._left: List[int] = []
        self._mid: List[int] = []
        self._right: List[int] = []
        self._end: List[bool] = []
        self._root = ABSENT
        self._size = 0

    def _new_node(self, ch: str) -> int:
        self._char.append(ch)
        self._left.append(ABSENT)
        self._mid.append(ABSENT)
        self._right.append(ABSENT)
        self._end.append(False)
        return len(self._char) - 1

    # insertion -----------------------------------------------------
    def insert(self, token: str) -> bool:
        """
        Add a token. Idempotent: re-inserting is a no-op that still returns True.
        Returns False for empty tokens or tokens with whitespace.
        """
        if not is_token(token):
            return False

        if self._root == ABSENT:
            self._root = self._new_node(token[0])

        node = self._root
        i = 0
        last = len(token) - 1
        while True:
            ch = token[i]
            here = self._char[node]
            if ch < here:
                nxt = self._left[node]
                if nxt == ABSENT:
                    nxt = self._new_node(ch)
                    self._left[node] = nxt
                node = nxt
            elif ch > here:
                nxt = self._right[node]
                if nxt == ABSENT:
                    nxt = self._new_node(ch)
                    self._right[node] = nxt
                node = nxt
            elif i < last:
                i += 1
                nxt = self._mid[node]
                if nxt == ABSENT:
                    nxt = self._new_node(token[i])
                    self._mid[node] = nxt
                node = nxt
            else:
                if not self._end[node]:
                    self._end[node] = True
                    self._size += 1
                return True

    def insert_many(self, tokens) -> int:
        """Insert an iterable of tokens, returns how many were accepted."""
        return sum(1 for t in tokens if self.insert(t))

    # lookup -------------------------------------------------------
    def _locate(self, prefix: str) -> int:
        """Node index holding the last character of prefix, or ABSENT."""
        node = self._root
        i = 0
        n = len(prefix)
        while node != ABSENT:
            ch = prefix[i]
            here = self._char[node]
            if ch < here:
                node = self._left[node]
            elif ch > here:
                node = self._right[node]
            else:
                i += 1
                if i == n:
                    return node
                node = self._mid[node]
        return ABSENT

    def search(self, token: str) -> bool:
        """Exact membership."""
        if not token:
            return False
        node = self._locate(token)
        return node != ABSENT and self._end[node]

    def __contains__(self, token: str) -> bool:
        return self.search(token)

    def prefix_search(self, prefix: str, k: int = 10) -> List[str]:
        """
        Up to k tokens starting with prefix, in ascending lexicographic order.
        An empty prefix enumerates the whole vocabulary (still capped at k).
        """
        if k <= 0:
            return []
        if not prefix:
            return list(islice(self.all_tokens(), k))

        node = self._locate(prefix)
        if node == ABSENT:
            return []

        out: List[str] = []
        if self._end[node]:
            out.append(prefix)
            if len(out) >= k:
                return out
        out.extend(islice(self._walk(self._mid[node], prefix), k - len(out)))
        return out

    # traversal ----------------------------------------------------
    def all_tokens(self) -> Iterator[str]:
        """Every stored token, lexicographic order."""
        return self._walk(self._root, "")

    def _walk(self, start: int, base: str) -> Iterator[str]:
        """
        In-order walk (left, self, mid, right) without recursion so that long
        tokens or lopsided branches cannot hit the interpreter's recursion limit.
        """
        if start == ABSENT:
            return
        stack = [(_VISIT, start, base)]
        while stack:
            tag, node, text = stack.pop()
            if tag == _EMIT:
                yield text
                continue
            word = text + self._char[node]
            # pushed in reverse of the visiting order
            if self._right[node] != ABSENT:
                stack.append((_VISIT, self._right[node], text))
            if self._mid[node] != ABSENT:
                stack.append((_VISIT, self._mid[node], word))
            if self._end[node]:
                stack.append((_EMIT, node, word))
            if self._left[node] != ABSENT:
                stack.append((_VISIT, self._left[node], text))

    # convenience/debugging -----------------------------------------
    def __len__(self) -> int:
        return self._size

    def node_count(self) -> int:
        return len(self._char)
