"""Buffer model: lines, cursor, register and undo history."""

from .buffer import (
    Buffer,
    Transaction,
    next_word_start,
    previous_word_start,
)
from .document import BufferDocument
from .registers import Register
from .state import BufferState, Cursor
from .undo import UndoEntry, UndoTimeline
from .validation import BufferValidationError, clamp_cursor, ensure_cursor

__all__ = [
    "BufferDocument",
    "BufferState",
    "Cursor",
    "Register",
    "UndoTimeline",
    "UndoEntry",
    "Buffer",
    "Transaction",
    "BufferValidationError",
    "clamp_cursor",
    "ensure_cursor",
    "next_word_start",
    "previous_word_start",
]
