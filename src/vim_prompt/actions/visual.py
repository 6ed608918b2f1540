"""Actions operating on the Visual-mode line range."""

from __future__ import annotations

from typing import Optional, Tuple

from vim_prompt.config import EditorMode
from vim_prompt.modes.base_mode import ModeContext, ModeResult, notify, visual_state


def selection_range(context: ModeContext) -> Optional[Tuple[int, int]]:
    """Inclusive ``(first, last)`` line range between the anchor and the cursor."""

    anchor = visual_state(context).get("anchor")
    if anchor is None:
        return None
    anchor_row = anchor[0]
    cursor_row = context.buffer.state.row
    return min(anchor_row, cursor_row), max(anchor_row, cursor_row)


def yank_selection(context: ModeContext, match) -> ModeResult:
    del match
    selection = selection_range(context)
    if selection is None:
        return ModeResult(consumed=False, status="no_selection")
    start, end = selection
    yanked = context.buffer.yank_lines(start, end)
    context.bus.emit("visual.yank", {"lines": yanked, "range": selection})
    notify(context, f"{len(yanked)} line{'s' if len(yanked) != 1 else ''} yanked")
    return ModeResult(
        consumed=True,
        switch_to=EditorMode.NORMAL.value,
        status="visual_yank",
    )


def delete_selection(context: ModeContext, match) -> ModeResult:
    del match
    selection = selection_range(context)
    if selection is None:
        return ModeResult(consumed=False, status="no_selection")
    start, end = selection
    removed = context.buffer.delete_lines(start, end)
    context.bus.emit("visual.delete", {"lines": removed, "range": selection})
    if len(removed) > 2:
        notify(context, f"{len(removed)} fewer lines")
    return ModeResult(
        consumed=True,
        switch_to=EditorMode.NORMAL.value,
        status="visual_delete",
    )


__all__ = ["selection_range", "yank_selection", "delete_selection"]
