"""Visual mode: a line-wise selection between an anchor and the cursor."""

from __future__ import annotations

from vim_prompt.config import EditorMode

from .base_mode import Mode, visual_state


class VisualMode(Mode):
    name = EditorMode.VISUAL.value

    def on_enter(self, previous: str | None) -> None:
        del previous
        visual_state(self.context)["anchor"] = self.context.buffer.state.cursor
        self.context.bus.emit("visual.start", self.context.buffer.state.cursor)

    def on_exit(self, next_mode: str | None) -> None:
        super().on_exit(next_mode)
        visual_state(self.context).pop("anchor", None)
