"""Text-changing actions for Normal and Insert modes."""

from __future__ import annotations

from vim_prompt.config import EditorMode
from vim_prompt.modes.base_mode import ModeContext, ModeResult, notify


def _plural(count: int, noun: str) -> str:
    return f"{count} {noun}" if count == 1 else f"{count} {noun}s"


def delete_char(context: ModeContext, match) -> ModeResult:
    del match
    context.buffer.delete_char()
    return ModeResult(consumed=True, status="delete_char")


def delete_char_before(context: ModeContext, match) -> ModeResult:
    del match
    context.buffer.delete_char_before()
    return ModeResult(consumed=True, status="delete_char_before")


def delete_line(context: ModeContext, match) -> ModeResult:
    del match
    removed = context.buffer.delete_line()
    context.bus.emit("register.yank", removed)
    return ModeResult(consumed=True, status="delete_line")


def yank_line(context: ModeContext, match) -> ModeResult:
    del match
    row = context.buffer.state.row
    yanked = context.buffer.yank_lines(row, row)
    context.bus.emit("register.yank", yanked)
    notify(context, f"{_plural(len(yanked), 'line')} yanked")
    return ModeResult(consumed=True, status="yank_line")


def paste_below(context: ModeContext, match) -> ModeResult:
    del match
    if not context.buffer.paste_below():
        return ModeResult(consumed=True, status="register_empty")
    return ModeResult(consumed=True, status="paste")


def paste_above(context: ModeContext, match) -> ModeResult:
    del match
    if not context.buffer.paste_above():
        return ModeResult(consumed=True, status="register_empty")
    return ModeResult(consumed=True, status="paste")


def open_line_below(context: ModeContext, match) -> ModeResult:
    del match
    context.buffer.open_line_below()
    return ModeResult(
        consumed=True, switch_to=EditorMode.INSERT.value, message="enter_insert"
    )


def open_line_above(context: ModeContext, match) -> ModeResult:
    del match
    context.buffer.open_line_above()
    return ModeResult(
        consumed=True, switch_to=EditorMode.INSERT.value, message="enter_insert"
    )


def undo(context: ModeContext, match) -> ModeResult:
    del match
    if not context.buffer.undo():
        notify(context, "Already at oldest change")
        return ModeResult(consumed=True, status="undo_empty")
    return ModeResult(consumed=True, status="undo")


def redo(context: ModeContext, match) -> ModeResult:
    del match
    if not context.buffer.redo():
        notify(context, "Already at newest change")
        return ModeResult(consumed=True, status="redo_empty")
    return ModeResult(consumed=True, status="redo")


def insert_newline(context: ModeContext, match) -> ModeResult:
    del match
    context.buffer.split_line()
    return ModeResult(consumed=True, status="split_line")


def insert_backspace(context: ModeContext, match) -> ModeResult:
    del match
    context.buffer.backspace()
    return ModeResult(consumed=True, status="backspace")


__all__ = [
    "delete_char",
    "delete_char_before",
    "delete_line",
    "yank_line",
    "paste_below",
    "paste_above",
    "open_line_below",
    "open_line_above",
    "undo",
    "redo",
    "insert_newline",
    "insert_backspace",
]
