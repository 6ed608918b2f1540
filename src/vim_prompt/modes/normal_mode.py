"""Normal mode: motions, line edits and mode entry points."""

from __future__ import annotations

from vim_prompt.config import EditorMode

from .base_mode import Mode


class NormalMode(Mode):
    name = EditorMode.NORMAL.value
