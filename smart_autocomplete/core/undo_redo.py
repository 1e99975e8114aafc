# undo_redo.py
# Two LIFO sequences of accepted edits. A new edit clears the redo history.

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional


@dataclass(frozen=True)
class Edit:
    position: int
    text: str


@dataclass(frozen=True)
class HistoryResult:
    """Outcome of undo()/redo(): either the moved edit or the reason nothing moved."""
    ok: bool
    edit: Optional[Edit] = None
    message: str = ""

    def __bool__(self) -> bool:
        return self.ok


class UndoRedoStack:
    def __init__(self) -> None:
        self._undo: List[Edit] = []
        self._redo: List[Edit] = []

    def push(self, position: int, text: str) -> Edit:
        edit = Edit(position, text)
        self._undo.append(edit)
        self._redo.clear()
        return edit

    def undo(self) -> HistoryResult:
        if not self._undo:
            return HistoryResult(False, message="Nothing to undo")
        edit = self._undo.pop()
        self._redo.append(edit)
        return HistoryResult(True, edit)

    def redo(self) -> HistoryResult:
        if not self._redo:
            return HistoryResult(False, message="Nothing to redo")
        edit = self._redo.pop()
        self._undo.append(edit)
        return HistoryResult(True, edit)

    @property
    def can_undo(self) -> bool:
        return bool(self._undo)

    @property
    def can_redo(self) -> bool:
        return bool(self._redo)

    def clear_redo(self) -> None:
        self._redo.clear()

    def clear(self) -> None:
        self._undo.clear()
        self._redo.clear()

    def __len__(self) -> int:
        return len(self._undo)
