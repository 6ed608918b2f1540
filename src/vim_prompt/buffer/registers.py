"""Single-slot, line-wise register used by yank, delete and paste."""

from __future__ import annotations

from typing import Iterable, Tuple


class Register:
    """Holds the most recent yank or delete until the next one replaces it."""

    def __init__(self) -> None:
        self._lines: Tuple[str, ...] = ()

    def yank(self, lines: Iterable[str]) -> Tuple[str, ...]:
        self._lines = tuple(lines)
        return self._lines

    @property
    def lines(self) -> Tuple[str, ...]:
        return self._lines
