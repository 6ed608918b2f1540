"""Cursor and save-state tracking for buffers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

Cursor = Tuple[int, int]  # (row, column)


@dataclass(slots=True)
class BufferState:
    """Mutable cursor position plus the dirty flag.

    ``saved`` starts out ``True``: an untouched buffer may be quit with ``:q``.
    """

    cursor: Cursor = (0, 0)
    saved: bool = True

    @property
    def row(self) -> int:
        return self.cursor[0]

    @property
    def col(self) -> int:
        return self.cursor[1]

    def set_cursor(self, row: int, col: int) -> None:
        self.cursor = (row, col)

    def mark_saved(self) -> None:
        self.saved = True

    def mark_unsaved(self) -> None:
        self.saved = False
