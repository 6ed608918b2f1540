"""Two-stack undo log of whole-buffer snapshots."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Deque, List, Optional, Tuple

from .state import Cursor


@dataclass(frozen=True, slots=True)
class UndoEntry:
    label: str
    before_lines: Tuple[str, ...]
    after_lines: Tuple[str, ...]
    cursor_before: Cursor
    cursor_after: Cursor


class UndoTimeline:
    """Committed edits on one stack, undone edits on the other.

    A fresh edit empties the redo stack; the oldest edits fall off once
    ``limit`` is reached.
    """

    def __init__(self, *, limit: int = 500) -> None:
        self._done: Deque[UndoEntry] = deque(maxlen=limit)
        self._undone: List[UndoEntry] = []

    def __len__(self) -> int:
        return len(self._done) + len(self._undone)

    def push(self, entry: UndoEntry) -> None:
        self._undone.clear()
        self._done.append(entry)

    def undo(self) -> Optional[UndoEntry]:
        if not self._done:
            return None
        entry = self._done.pop()
        self._undone.append(entry)
        return entry

    def redo(self) -> Optional[UndoEntry]:
        if not self._undone:
            return None
        entry = self._undone.pop()
        self._done.append(entry)
        return entry
