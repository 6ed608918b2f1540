"""Minimal Textual adapter that wires ModalEditor events into UI callbacks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Optional

from vim_prompt.editor import EditorView, ModalEditor
from vim_prompt.keys import Arrow, Control, KeyEvent, Printable
from vim_prompt.keys.decoder import BACKSPACE, CTRL_C, ENTER, ESC
from vim_prompt.modes import ModeResult


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


_NAMED_KEYS: Dict[str, KeyEvent] = {
    "escape": Control(ESC),
    "enter": Control(ENTER),
    "backspace": Control(BACKSPACE),
    "ctrl+h": Control(BACKSPACE),
    "ctrl+c": Control(CTRL_C),
    "tab": Printable("\t"),
    "up": Arrow("up"),
    "down": Arrow("down"),
    "left": Arrow("left"),
    "right": Arrow("right"),
}


def textual_key_event(key: str, character: Optional[str] = None) -> Optional[KeyEvent]:
    """Translate a Textual key name (plus its character) into a key event."""

    named = _NAMED_KEYS.get(key)
    if named is not None:
        return named
    if key.startswith("ctrl+") and len(key) == len("ctrl+") + 1:
        letter = key[-1].upper()
        if "A" <= letter <= "Z":
            return Control(ord(letter) - 0x40)
    if character and character.isprintable():
        return Printable(character)
    return None


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    update_view: Callable[[EditorView], None]
    finish: Callable[[Optional[str]], None] = _noop
    handle_event: Callable[[str, object | None], None] = _noop
    # Optional realtime log callback a host may use to surface debug lines
    log: Callable[[str], None] = _noop


class TextualEditorAdapter:
    """Bridges ModalEditor + bus events to a Textual-friendly surface."""

    def __init__(self, editor: ModalEditor, hooks: TextualUIHooks) -> None:
        self.editor = editor
        self.hooks = hooks
        self._subscribe_events()
        self._refresh_view()

    def handle_textual_key(
        self, key: str, *, character: Optional[str] = None
    ) -> Optional[ModeResult]:
        """Translate a Textual key event and dispatch it; unknown keys are ignored."""

        if self.editor.stopped:
            return None
        event = textual_key_event(key, character)
        self._log_state("key ->", key=key, character=character, event=event)
        if event is None:
            return None
        result = self.editor.handle_key(event)
        self._log_state(
            "result <-",
            consumed=result.consumed,
            status=result.status,
            switch_to=result.switch_to,
        )
        if self.editor.stopped:
            self.hooks.finish(self.editor.result())
        else:
            self._refresh_view()
        return result

    def _subscribe_events(self) -> None:
        bus = self.editor.context.bus
        for event in (
            "visual.start",
            "visual.yank",
            "visual.delete",
            "register.yank",
            "command.start",
            "command.end",
            "editor.notice",
        ):
            bus.subscribe(
                event, lambda payload, name=event: self._handle_event(name, payload)
            )

    def _handle_event(self, name: str, payload: object | None) -> None:
        self._log_state("event ->", event=name, payload=payload)
        self.hooks.handle_event(name, payload)

    def _refresh_view(self) -> None:
        self.hooks.update_view(self.editor.view())

    def _log_state(self, prefix: str, **fields: object) -> None:
        snapshot: Dict[str, object] = {
            "mode": self.editor.mode.value,
            "cursor": self.editor.buffer.state.cursor,
            "saved": self.editor.buffer.state.saved,
        }
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        parts = [prefix]
        for key, value in snapshot.items():
            parts.append(f"{key}={value!r}")
        self.hooks.log(" ".join(parts))


__all__ = ["TextualEditorAdapter", "TextualUIHooks", "textual_key_event"]
