"""Cursor motions shared by Normal, Insert (arrows) and Visual modes."""

from __future__ import annotations

from typing import Callable

from vim_prompt.buffer import Buffer, Cursor
from vim_prompt.modes.base_mode import ModeContext, ModeResult

Motion = Callable[[Buffer], Cursor]


def _motion(move: Motion) -> Callable[[ModeContext, object], ModeResult]:
    def action(context: ModeContext, match: object) -> ModeResult:
        del match
        cursor = move(context.buffer)
        context.bus.emit("cursor.move", cursor)
        return ModeResult(consumed=True, status="motion")

    action.__name__ = move.__name__
    action.__doc__ = move.__doc__
    return action


move_left = _motion(Buffer.move_left)
move_right = _motion(Buffer.move_right)
move_up = _motion(Buffer.move_up)
move_down = _motion(Buffer.move_down)
word_forward = _motion(Buffer.move_word_forward)
word_backward = _motion(Buffer.move_word_backward)
line_start = _motion(Buffer.move_line_start)
line_end = _motion(Buffer.move_line_end)
buffer_start = _motion(Buffer.move_buffer_start)
buffer_end = _motion(Buffer.move_buffer_end)


__all__ = [
    "move_left",
    "move_right",
    "move_up",
    "move_down",
    "word_forward",
    "word_backward",
    "line_start",
    "line_end",
    "buffer_start",
    "buffer_end",
]
