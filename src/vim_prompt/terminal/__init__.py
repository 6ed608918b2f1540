"""Terminal session lifecycle and input sources."""

from .input_source import (
    InputListeners,
    InputSource,
    QueueInputSource,
    TerminalInputSource,
)
from .session import SessionController, edit_text, run_editor

__all__ = [
    "InputListeners",
    "InputSource",
    "QueueInputSource",
    "TerminalInputSource",
    "SessionController",
    "edit_text",
    "run_editor",
]
