"""Core document storage for editor buffers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Sequence


@dataclass(slots=True)
class BufferDocument:
    """Ordered list of lines that never shrinks below a single line.

    Every mutation bumps ``version`` so renderers and caches can cheaply
    detect change.
    """

    _lines: List[str] = field(default_factory=lambda: [""])
    version: int = 0

    def __post_init__(self) -> None:
        if not self._lines:
            self._lines = [""]

    @classmethod
    def from_text(cls, text: str) -> "BufferDocument":
        normalized = text.replace("\r\n", "\n")
        return cls(_lines=normalized.split("\n"))

    def snapshot(self) -> Sequence[str]:
        """Return the current lines without exposing internal mutability."""

        return tuple(self._lines)

    @property
    def text(self) -> str:
        return "\n".join(self._lines)

    @property
    def line_count(self) -> int:
        return len(self._lines)

    def get_line(self, index: int) -> str:
        return self._lines[index]

    def set_line(self, index: int, value: str) -> None:
        self._lines[index] = value
        self._touch()

    def insert_lines(self, index: int, lines: Iterable[str]) -> None:
        self._lines[index:index] = list(lines)
        self._touch()

    def delete_lines(self, start: int, end: int) -> List[str]:
        """Remove ``[start:end]`` and return it; an emptied document keeps ``[""]``."""

        removed = self._lines[start:end]
        del self._lines[start:end]
        if not self._lines:
            self._lines.append("")
        self._touch()
        return removed

    def replace(self, lines: Iterable[str]) -> None:
        self._lines = list(lines) or [""]
        self._touch()

    def _touch(self) -> None:
        self.version += 1
