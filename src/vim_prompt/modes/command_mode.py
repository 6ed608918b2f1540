"""Command-line mode with inline editing."""

from __future__ import annotations

from vim_prompt.config import EditorMode
from vim_prompt.keys import KeyEvent, Printable

from .base_mode import Mode, ModeResult, command_state


class CommandMode(Mode):
    name = EditorMode.COMMAND.value
    accepts_text_runs = True

    def on_enter(self, previous: str | None) -> None:
        del previous
        command_state(self.context)["text"] = ""
        self.context.bus.emit("command.start", None)

    def on_exit(self, next_mode: str | None) -> None:
        super().on_exit(next_mode)
        self.context.bus.emit("command.end", self.current_command)
        command_state(self.context)["text"] = ""

    @property
    def current_command(self) -> str:
        return str(command_state(self.context)["text"])

    def handle_unbound(self, key: KeyEvent) -> ModeResult:
        if not isinstance(key, Printable):
            return ModeResult(consumed=False, status="miss")
        command_state(self.context)["text"] = self.current_command + key.text
        return ModeResult(consumed=True, status="editing")
