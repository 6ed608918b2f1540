"""Insert mode: printable text is spliced in at the cursor."""

from __future__ import annotations

from vim_prompt.config import EditorMode
from vim_prompt.keys import KeyEvent, Printable

from .base_mode import Mode, ModeResult


class InsertMode(Mode):
    name = EditorMode.INSERT.value
    accepts_text_runs = True

    def handle_unbound(self, key: KeyEvent) -> ModeResult:
        if not isinstance(key, Printable):
            return ModeResult(consumed=False, status="miss")
        self.context.buffer.insert_text(key.text)
        return ModeResult(consumed=True, status="insert_text")
