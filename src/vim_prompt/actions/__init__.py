"""High-level editing verbs reused across modes."""

from .core import (
    append_after_cursor,
    append_at_line_end,
    enter_command_mode,
    enter_insert_mode,
    enter_visual_mode,
    exit_insert_mode,
    exit_to_normal_mode,
    insert_at_line_start,
    noop_action,
    save_and_quit,
)
from .edit import (
    delete_char,
    delete_char_before,
    delete_line,
    insert_backspace,
    insert_newline,
    open_line_above,
    open_line_below,
    paste_above,
    paste_below,
    redo,
    undo,
    yank_line,
)
from .visual import delete_selection, selection_range, yank_selection
from .command import command_backspace, execute_command, submit_command_line

__all__ = [
    "append_after_cursor",
    "append_at_line_end",
    "enter_command_mode",
    "enter_insert_mode",
    "enter_visual_mode",
    "exit_insert_mode",
    "exit_to_normal_mode",
    "insert_at_line_start",
    "noop_action",
    "save_and_quit",
    "delete_char",
    "delete_char_before",
    "delete_line",
    "insert_backspace",
    "insert_newline",
    "open_line_above",
    "open_line_below",
    "paste_above",
    "paste_below",
    "redo",
    "undo",
    "yank_line",
    "delete_selection",
    "selection_range",
    "yank_selection",
    "command_backspace",
    "execute_command",
    "submit_command_line",
]
