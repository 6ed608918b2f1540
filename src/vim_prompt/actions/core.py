"""Core action implementations: mode entry and exit, session shortcuts."""

from __future__ import annotations

from vim_prompt.config import EditorMode
from vim_prompt.modes.base_mode import ModeContext, ModeResult

NORMAL = EditorMode.NORMAL.value
INSERT = EditorMode.INSERT.value


def enter_insert_mode(context: ModeContext, match) -> ModeResult:
    del context, match
    return ModeResult(consumed=True, switch_to=INSERT, message="enter_insert")


def insert_at_line_start(context: ModeContext, match) -> ModeResult:
    del match
    context.buffer.move_line_start()
    return ModeResult(consumed=True, switch_to=INSERT, message="enter_insert")


def append_after_cursor(context: ModeContext, match) -> ModeResult:
    del match
    context.buffer.move_right()
    return ModeResult(consumed=True, switch_to=INSERT, message="enter_insert")


def append_at_line_end(context: ModeContext, match) -> ModeResult:
    del match
    context.buffer.move_line_end()
    return ModeResult(consumed=True, switch_to=INSERT, message="enter_insert")


def exit_insert_mode(context: ModeContext, match) -> ModeResult:
    del match
    context.buffer.move_left()
    return ModeResult(consumed=True, switch_to=NORMAL, message="exit_insert")


def exit_to_normal_mode(context: ModeContext, match) -> ModeResult:
    del context, match
    return ModeResult(consumed=True, switch_to=NORMAL, message="exit_to_normal")


def enter_visual_mode(context: ModeContext, match) -> ModeResult:
    del context, match
    return ModeResult(
        consumed=True, switch_to=EditorMode.VISUAL.value, message="enter_visual"
    )


def enter_command_mode(context: ModeContext, match) -> ModeResult:
    del context, match
    return ModeResult(
        consumed=True, switch_to=EditorMode.COMMAND.value, message="enter_command"
    )


def save_and_quit(context: ModeContext, match) -> ModeResult:
    """``ZZ``: keep the text and end the session."""

    del match
    context.buffer.state.mark_saved()
    return ModeResult(consumed=True, status="save_quit", stop=True)


def noop_action(context: ModeContext, match) -> ModeResult:
    del context, match
    return ModeResult(consumed=True, status="noop")


__all__ = [
    "enter_insert_mode",
    "insert_at_line_start",
    "append_after_cursor",
    "append_at_line_end",
    "exit_insert_mode",
    "exit_to_normal_mode",
    "enter_visual_mode",
    "enter_command_mode",
    "save_and_quit",
    "noop_action",
]
