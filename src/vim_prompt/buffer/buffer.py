"""High-level buffer façade combining document, state, register, and undo."""

from __future__ import annotations

from contextlib import AbstractContextManager
from typing import ContextManager, Optional, Sequence, Tuple

from vim_prompt.runtime import telemetry

from .document import BufferDocument
from .registers import Register
from .state import BufferState, Cursor
from .undo import UndoEntry, UndoTimeline
from .validation import clamp_cursor, ensure_cursor


class Buffer:
    def __init__(
        self,
        *,
        name: str = "default",
        document: Optional[BufferDocument] = None,
        state: Optional[BufferState] = None,
        register: Optional[Register] = None,
        undo: Optional[UndoTimeline] = None,
    ) -> None:
        self.name = name
        self.document = document or BufferDocument()
        self.state = state or BufferState()
        self.register = register or Register()
        self.undo_log = undo or UndoTimeline()

    @classmethod
    def from_text(cls, text: str, *, name: str = "default") -> "Buffer":
        return cls(name=name, document=BufferDocument.from_text(text))

    @property
    def lines(self) -> Sequence[str]:
        return self.document.snapshot()

    @property
    def text(self) -> str:
        return self.document.text

    @property
    def current_line(self) -> str:
        return self.document.get_line(self.state.row)

    # -- cursor motions -------------------------------------------------

    def move_to(self, row: int, col: int) -> Cursor:
        self.state.set_cursor(*clamp_cursor(self.document, row, col))
        return self.state.cursor

    def move_left(self) -> Cursor:
        row, col = self.state.cursor
        return self.move_to(row, col - 1)

    def move_right(self) -> Cursor:
        row, col = self.state.cursor
        return self.move_to(row, col + 1)

    def move_up(self) -> Cursor:
        row, col = self.state.cursor
        return self.move_to(row - 1, col)

    def move_down(self) -> Cursor:
        row, col = self.state.cursor
        return self.move_to(row + 1, col)

    def move_line_start(self) -> Cursor:
        return self.move_to(self.state.row, 0)

    def move_line_end(self) -> Cursor:
        return self.move_to(self.state.row, len(self.current_line))

    def move_buffer_start(self) -> Cursor:
        return self.move_to(0, 0)

    def move_buffer_end(self) -> Cursor:
        return self.move_to(self.document.line_count - 1, 0)

    def move_word_forward(self) -> Cursor:
        row, col = self.state.cursor
        return self.move_to(row, next_word_start(self.current_line, col))

    def move_word_backward(self) -> Cursor:
        row, col = self.state.cursor
        return self.move_to(row, previous_word_start(self.current_line, col))

    # -- edits ----------------------------------------------------------

    def insert_text(self, text: str) -> None:
        row, col = self.state.cursor
        with Transaction(self, "insert_text"):
            line = self.current_line
            self.document.set_line(row, line[:col] + text + line[col:])
            self.state.set_cursor(row, col + len(text))

    def split_line(self) -> None:
        row, col = self.state.cursor
        with Transaction(self, "split_line"):
            line = self.current_line
            self.document.set_line(row, line[:col])
            self.document.insert_lines(row + 1, [line[col:]])
            self.state.set_cursor(row + 1, 0)

    def backspace(self) -> None:
        row, col = self.state.cursor
        if col > 0:
            with Transaction(self, "backspace"):
                line = self.current_line
                self.document.set_line(row, line[: col - 1] + line[col:])
                self.state.set_cursor(row, col - 1)
        elif row > 0:
            with Transaction(self, "join_lines"):
                previous = self.document.get_line(row - 1)
                self.document.set_line(row - 1, previous + self.current_line)
                self.document.delete_lines(row, row + 1)
                self.state.set_cursor(row - 1, len(previous))

    def delete_char(self) -> None:
        row, col = self.state.cursor
        line = self.current_line
        if col >= len(line):
            return
        with Transaction(self, "delete_char"):
            self.document.set_line(row, line[:col] + line[col + 1 :])
            self.state.set_cursor(*clamp_cursor(self.document, row, col))

    def delete_char_before(self) -> None:
        row, col = self.state.cursor
        if col == 0:
            return
        with Transaction(self, "delete_char_before"):
            line = self.current_line
            self.document.set_line(row, line[: col - 1] + line[col:])
            self.state.set_cursor(row, col - 1)

    def open_line_below(self) -> None:
        row = self.state.row
        with Transaction(self, "open_below"):
            self.document.insert_lines(row + 1, [""])
            self.state.set_cursor(row + 1, 0)

    def open_line_above(self) -> None:
        row = self.state.row
        with Transaction(self, "open_above"):
            self.document.insert_lines(row, [""])
            self.state.set_cursor(row, 0)

    def yank_lines(self, start: int, end: int) -> Tuple[str, ...]:
        """Copy the inclusive line range ``[start, end]`` into the register."""

        start, end = sorted((start, end))
        lines = self.document.snapshot()[start : end + 1]
        return self.register.yank(lines)

    def delete_lines(self, start: int, end: int) -> Tuple[str, ...]:
        """Yank then remove the inclusive range; an emptied buffer keeps one line."""

        start, end = sorted((start, end))
        removed = self.yank_lines(start, end)
        whole_buffer = start == 0 and end >= self.document.line_count - 1
        with Transaction(self, "delete_lines"):
            self.document.delete_lines(start, end + 1)
            if whole_buffer:
                self.state.set_cursor(0, 0)
            else:
                self.state.set_cursor(*clamp_cursor(self.document, start, 0))
        return removed

    def delete_line(self) -> Tuple[str, ...]:
        row, col = self.state.cursor
        removed = self.yank_lines(row, row)
        with Transaction(self, "delete_line"):
            self.document.delete_lines(row, row + 1)
            self.state.set_cursor(*clamp_cursor(self.document, row, col))
        return removed

    def paste_below(self) -> bool:
        lines = self.register.lines
        if not lines:
            return False
        row = self.state.row
        with Transaction(self, "paste_below"):
            self.document.insert_lines(row + 1, lines)
            self.state.set_cursor(row + 1, 0)
        return True

    def paste_above(self) -> bool:
        lines = self.register.lines
        if not lines:
            return False
        row = self.state.row
        with Transaction(self, "paste_above"):
            self.document.insert_lines(row, lines)
            self.state.set_cursor(row, 0)
        return True

    def reload(self, text: str) -> None:
        """Replace the whole document, reset the cursor and mark it saved."""

        with Transaction(self, "reload"):
            self.document.replace(BufferDocument.from_text(text).snapshot())
            self.state.set_cursor(0, 0)
        self.state.mark_saved()

    # -- history --------------------------------------------------------

    def undo(self) -> bool:
        entry = self.undo_log.undo()
        if entry is None:
            return False
        self._restore(entry.before_lines, entry.cursor_before)
        return True

    def redo(self) -> bool:
        entry = self.undo_log.redo()
        if entry is None:
            return False
        self._restore(entry.after_lines, entry.cursor_after)
        return True

    def _restore(self, lines: Sequence[str], cursor: Cursor) -> None:
        self.document.replace(lines)
        self.state.set_cursor(*clamp_cursor(self.document, *cursor))
        self.state.mark_unsaved()


class Transaction(AbstractContextManager["Transaction"]):
    """Snapshot a mutation for undo and flag the buffer unsaved if it changed."""

    def __init__(self, buffer: Buffer, label: str) -> None:
        self.buffer = buffer
        self.label = label
        self._span_cm: Optional[ContextManager[object]] = None
        self._before_lines: Tuple[str, ...] = ()
        self._before_cursor: Cursor = (0, 0)

    def __enter__(self) -> "Transaction":
        self._before_lines = tuple(self.buffer.document.snapshot())
        self._before_cursor = self.buffer.state.cursor
        self._span_cm = telemetry.span(
            name=f"buffer::{self.label}",
            component=True,
            metadata={"buffer": self.buffer.name},
        )
        self._span_cm.__enter__()
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        try:
            if exc_type is None:
                self._commit()
        finally:
            if self._span_cm is not None:
                self._span_cm.__exit__(exc_type, exc, tb)
        return False

    def _commit(self) -> None:
        buffer = self.buffer
        ensure_cursor(buffer.document, buffer.state.cursor)
        after_lines = tuple(buffer.document.snapshot())
        if after_lines == self._before_lines:
            return
        buffer.undo_log.push(
            UndoEntry(
                label=self.label,
                before_lines=self._before_lines,
                after_lines=after_lines,
                cursor_before=self._before_cursor,
                cursor_after=buffer.state.cursor,
            )
        )
        buffer.state.mark_unsaved()


def next_word_start(line: str, col: int) -> int:
    """Column of the next whitespace-delimited word, or the line end."""

    index = col
    length = len(line)
    while index < length and not line[index].isspace():
        index += 1
    while index < length and line[index].isspace():
        index += 1
    return index


def previous_word_start(line: str, col: int) -> int:
    """Column where the word before ``col`` starts, or 0."""

    index = min(col, len(line))
    while index > 0 and line[index - 1].isspace():
        index -= 1
    while index > 0 and not line[index - 1].isspace():
        index -= 1
    return index
