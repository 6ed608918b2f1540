"""Built-in keymaps that seed each mode with the editor's key tables."""

from __future__ import annotations

from typing import Iterable, Mapping, Sequence

from vim_prompt.actions import command as command_actions
from vim_prompt.actions import core as core_actions
from vim_prompt.actions import edit as edit_actions
from vim_prompt.actions import motion as motion_actions
from vim_prompt.actions import visual as visual_actions
from vim_prompt.config import EditorMode

from .models import ActionRef, Binding, KeySequence
from .registry import KeymapRegistry

NORMAL = EditorMode.NORMAL.value
INSERT = EditorMode.INSERT.value
VISUAL = EditorMode.VISUAL.value
COMMAND = EditorMode.COMMAND.value

DEFAULT_ACTIONS: tuple[ActionRef, ...] = (
    ActionRef(
        id="core.enter_insert",
        handler=core_actions.enter_insert_mode,
        description="Enter insert mode",
    ),
    ActionRef(
        id="core.insert_line_start",
        handler=core_actions.insert_at_line_start,
        description="Insert at the start of the line",
    ),
    ActionRef(
        id="core.append",
        handler=core_actions.append_after_cursor,
        description="Append after the cursor",
    ),
    ActionRef(
        id="core.append_line_end",
        handler=core_actions.append_at_line_end,
        description="Append at the end of the line",
    ),
    ActionRef(
        id="core.exit_insert",
        handler=core_actions.exit_insert_mode,
        description="Leave insert mode",
    ),
    ActionRef(
        id="core.exit_to_normal",
        handler=core_actions.exit_to_normal_mode,
        description="Return to normal mode",
    ),
    ActionRef(
        id="core.enter_visual",
        handler=core_actions.enter_visual_mode,
        description="Enter visual line mode",
    ),
    ActionRef(
        id="core.enter_command",
        handler=core_actions.enter_command_mode,
        description="Enter command-line mode",
    ),
    ActionRef(
        id="core.save_quit",
        handler=core_actions.save_and_quit,
        description="Save and quit",
    ),
    ActionRef(
        id="core.noop",
        handler=core_actions.noop_action,
        description="Do nothing",
    ),
    ActionRef(id="motion.left", handler=motion_actions.move_left, description="Cursor left"),
    ActionRef(id="motion.right", handler=motion_actions.move_right, description="Cursor right"),
    ActionRef(id="motion.up", handler=motion_actions.move_up, description="Cursor up"),
    ActionRef(id="motion.down", handler=motion_actions.move_down, description="Cursor down"),
    ActionRef(
        id="motion.word_forward",
        handler=motion_actions.word_forward,
        description="Next word start",
    ),
    ActionRef(
        id="motion.word_backward",
        handler=motion_actions.word_backward,
        description="Previous word start",
    ),
    ActionRef(
        id="motion.line_start",
        handler=motion_actions.line_start,
        description="Start of line",
    ),
    ActionRef(
        id="motion.line_end",
        handler=motion_actions.line_end,
        description="End of line",
    ),
    ActionRef(
        id="motion.buffer_start",
        handler=motion_actions.buffer_start,
        description="First line",
    ),
    ActionRef(
        id="motion.buffer_end",
        handler=motion_actions.buffer_end,
        description="Last line",
    ),
    ActionRef(
        id="edit.delete_char",
        handler=edit_actions.delete_char,
        description="Delete character under cursor",
    ),
    ActionRef(
        id="edit.delete_char_before",
        handler=edit_actions.delete_char_before,
        description="Delete character before cursor",
    ),
    ActionRef(
        id="edit.delete_line",
        handler=edit_actions.delete_line,
        description="Delete current line",
    ),
    ActionRef(
        id="edit.yank_line",
        handler=edit_actions.yank_line,
        description="Yank current line",
    ),
    ActionRef(
        id="edit.paste_below",
        handler=edit_actions.paste_below,
        description="Paste below the cursor line",
    ),
    ActionRef(
        id="edit.paste_above",
        handler=edit_actions.paste_above,
        description="Paste above the cursor line",
    ),
    ActionRef(
        id="edit.open_below",
        handler=edit_actions.open_line_below,
        description="Open a line below",
    ),
    ActionRef(
        id="edit.open_above",
        handler=edit_actions.open_line_above,
        description="Open a line above",
    ),
    ActionRef(id="edit.undo", handler=edit_actions.undo, description="Undo"),
    ActionRef(id="edit.redo", handler=edit_actions.redo, description="Redo"),
    ActionRef(
        id="edit.newline",
        handler=edit_actions.insert_newline,
        description="Split the line at the cursor",
    ),
    ActionRef(
        id="edit.backspace",
        handler=edit_actions.insert_backspace,
        description="Delete backwards, joining lines at column 0",
    ),
    ActionRef(
        id="visual.yank_selection",
        handler=visual_actions.yank_selection,
        description="Yank the selected lines",
    ),
    ActionRef(
        id="visual.delete_selection",
        handler=visual_actions.delete_selection,
        description="Delete the selected lines",
    ),
    ActionRef(
        id="command.submit_line",
        handler=command_actions.submit_command_line,
        description="Evaluate the active command line",
    ),
    ActionRef(
        id="command.backspace",
        handler=command_actions.command_backspace,
        description="Trim the command line",
    ),
)


def _binding(mode: str, key: str, action_id: str, description: str = "") -> Binding:
    return Binding(
        id=f"{mode}.{action_id.split('.', 1)[1]}.{key.lower()}",
        mode=mode,
        sequence=KeySequence.from_strings(key),
        action_id=action_id,
        description=description,
    )


_ARROWS: tuple[tuple[str, str], ...] = (
    ("LEFT", "motion.left"),
    ("RIGHT", "motion.right"),
    ("UP", "motion.up"),
    ("DOWN", "motion.down"),
)

_NORMAL_KEYS: tuple[tuple[str, str], ...] = (
    ("i", "core.enter_insert"),
    ("I", "core.insert_line_start"),
    ("a", "core.append"),
    ("A", "core.append_line_end"),
    ("o", "edit.open_below"),
    ("O", "edit.open_above"),
    ("h", "motion.left"),
    ("l", "motion.right"),
    ("k", "motion.up"),
    ("j", "motion.down"),
    ("w", "motion.word_forward"),
    ("b", "motion.word_backward"),
    ("0", "motion.line_start"),
    ("$", "motion.line_end"),
    ("g", "motion.buffer_start"),
    ("G", "motion.buffer_end"),
    ("x", "edit.delete_char"),
    ("X", "edit.delete_char_before"),
    ("d", "edit.delete_line"),
    ("y", "edit.yank_line"),
    ("p", "edit.paste_below"),
    ("P", "edit.paste_above"),
    ("u", "edit.undo"),
    ("CTRL+R", "edit.redo"),
    ("v", "core.enter_visual"),
    (":", "core.enter_command"),
    ("Z", "core.save_quit"),
    ("ESC", "core.noop"),
) + _ARROWS

_INSERT_KEYS: tuple[tuple[str, str], ...] = (
    ("ESC", "core.exit_insert"),
    ("ENTER", "edit.newline"),
    ("BACKSPACE", "edit.backspace"),
) + _ARROWS

_VISUAL_KEYS: tuple[tuple[str, str], ...] = (
    ("h", "motion.left"),
    ("l", "motion.right"),
    ("k", "motion.up"),
    ("j", "motion.down"),
    ("g", "motion.buffer_start"),
    ("G", "motion.buffer_end"),
    ("y", "visual.yank_selection"),
    ("d", "visual.delete_selection"),
    ("ESC", "core.exit_to_normal"),
) + _ARROWS

_COMMAND_KEYS: tuple[tuple[str, str], ...] = (
    ("ESC", "core.exit_to_normal"),
    ("ENTER", "command.submit_line"),
    ("BACKSPACE", "command.backspace"),
)

DEFAULT_BINDINGS: tuple[Binding, ...] = tuple(
    _binding(mode, key, action_id)
    for mode, table in (
        (NORMAL, _NORMAL_KEYS),
        (INSERT, _INSERT_KEYS),
        (VISUAL, _VISUAL_KEYS),
        (COMMAND, _COMMAND_KEYS),
    )
    for key, action_id in table
)


def load_default_keymaps(
    registry: KeymapRegistry,
    *,
    replace: bool = False,
    extra_bindings: Iterable[Binding] | None = None,
    include_actions: Sequence[str] | None = None,
    exclude_actions: Sequence[str] | None = None,
    include_bindings: Sequence[str] | None = None,
    exclude_bindings: Sequence[str] | None = None,
    per_mode_overrides: Mapping[str, Iterable[Binding]] | None = None,
) -> None:
    """Register built-in actions and bindings for every mode."""

    allowed_actions = _build_filters(include_actions, exclude_actions)
    allowed_bindings = _build_filters(include_bindings, exclude_bindings)

    for action in DEFAULT_ACTIONS:
        if not _selected(action.id, allowed_actions):
            continue
        registry.register_action(action, replace=replace)

    for binding in DEFAULT_BINDINGS:
        if not _selected(binding.id, allowed_bindings):
            continue
        registry.register_binding(binding, replace=replace)

    if extra_bindings:
        for binding in extra_bindings:
            registry.register_binding(binding, replace=replace)

    if per_mode_overrides:
        for mode, bindings in per_mode_overrides.items():
            for binding in bindings:
                if binding.mode != mode:
                    raise ValueError(
                        f"Override binding '{binding.id}' must target mode '{mode}'"
                    )
                registry.register_binding(binding, replace=True)


__all__ = ["load_default_keymaps", "DEFAULT_ACTIONS", "DEFAULT_BINDINGS"]


def _build_filters(
    include: Sequence[str] | None, exclude: Sequence[str] | None
) -> tuple[set[str] | None, set[str]]:
    include_set = set(include) if include else None
    exclude_set = set(exclude or ())
    return include_set, exclude_set


def _selected(item_id: str, filters: tuple[set[str] | None, set[str]]) -> bool:
    include, exclude = filters
    if include is not None and item_id not in include:
        return False
    if item_id in exclude:
        return False
    return True
