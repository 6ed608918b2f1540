"""Modal editor façade: one buffer, four modes, default keymaps."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

from vim_prompt.buffer import Buffer, Cursor
from vim_prompt.config import EditorConfig, EditorMode
from vim_prompt.keymaps import KeymapRegistry, KeymapResolver, load_default_keymaps
from vim_prompt.keys import KeyEvent, decode
from vim_prompt.modes import (
    CommandMode,
    InsertMode,
    ModeBus,
    ModeContext,
    ModeResult,
    NormalMode,
    VisualMode,
)
from vim_prompt.modes.base_mode import command_state, visual_state
from vim_prompt.modes.mode_manager import ModeManager
from vim_prompt.runtime import telemetry


class EditorClosedError(RuntimeError):
    """Raised when keys are fed to an editor whose session already ended."""


@dataclass(frozen=True, slots=True)
class EditorView:
    """Read-only snapshot handed to renderers."""

    lines: Tuple[str, ...]
    cursor: Cursor
    mode: EditorMode
    anchor: Optional[Cursor]
    command_text: str
    saved: bool
    filename: str
    notice: str = ""

    @property
    def selection(self) -> Optional[Tuple[int, int]]:
        if self.mode is not EditorMode.VISUAL or self.anchor is None:
            return None
        row = self.cursor[0]
        return min(self.anchor[0], row), max(self.anchor[0], row)


def create_default_manager(
    buffer: Buffer,
    *,
    registry: KeymapRegistry | None = None,
    extras: dict | None = None,
) -> ModeManager:
    """Build a ModeManager with the standard mode set + default keymaps."""

    if registry is None:
        registry = KeymapRegistry(logger_name="vim_prompt.keymaps")
        load_default_keymaps(registry)
    resolver = KeymapResolver(registry, logger_name="vim_prompt.keymaps")
    context = ModeContext(buffer=buffer, bus=ModeBus(), extras=dict(extras or {}))
    manager = ModeManager(
        context,
        keymap_registry=registry,
        keymap_resolver=resolver,
        load_defaults=False,
    )
    manager.register_mode(NormalMode)
    manager.register_mode(InsertMode)
    manager.register_mode(VisualMode)
    manager.register_mode(CommandMode)
    return manager


class ModalEditor:
    """Key-driven editing session over a single in-memory buffer.

    ``feed`` accepts decoded terminal text; ``view`` snapshots what a renderer
    needs; ``result`` is the final text once the session stops, or ``None``
    when the edits were discarded.
    """

    def __init__(
        self,
        initial_text: str = "",
        filename: str = "",
        *,
        config: EditorConfig | None = None,
        registry: KeymapRegistry | None = None,
    ) -> None:
        self.config = config or EditorConfig()
        self.filename = filename
        self.buffer = Buffer.from_text(initial_text, name=filename or "untitled")
        self.manager = create_default_manager(
            self.buffer,
            registry=registry,
            extras={"initial_text": initial_text},
        )
        self.context = self.manager.context
        self._notice = ""
        self.context.bus.subscribe("editor.notice", self._on_notice)
        telemetry.record_event(
            "editor.open",
            level="debug",
            data={"filename": filename, "lines": self.buffer.document.line_count},
        )

    @property
    def stopped(self) -> bool:
        return self.manager.stopped

    @property
    def mode(self) -> EditorMode:
        return EditorMode(self.manager.active_name or EditorMode.NORMAL.value)

    @property
    def notice(self) -> str:
        return self._notice

    def feed(self, chunk: str) -> List[ModeResult]:
        """Decode one input chunk and dispatch every key it contains."""

        if self.stopped:
            raise EditorClosedError("editor session has already ended")
        results: List[ModeResult] = []
        for event in decode(chunk):
            if self.stopped:
                break
            results.append(self.handle_key(event))
        return results

    def handle_key(self, event: KeyEvent) -> ModeResult:
        if self.stopped:
            raise EditorClosedError("editor session has already ended")
        self._notice = ""
        return self.manager.handle_key(event)

    def discard(self) -> ModeResult:
        """Stop the session as Ctrl+C would."""

        if self.stopped:
            raise EditorClosedError("editor session has already ended")
        return self.manager.force_quit()

    def view(self) -> EditorView:
        anchor = visual_state(self.context).get("anchor")
        return EditorView(
            lines=tuple(self.buffer.lines),
            cursor=self.buffer.state.cursor,
            mode=self.mode,
            anchor=anchor if self.mode is EditorMode.VISUAL else None,
            command_text=str(command_state(self.context)["text"]),
            saved=self.buffer.state.saved,
            filename=self.filename,
            notice=self._notice,
        )

    def result(self) -> Optional[str]:
        if not self.buffer.state.saved:
            return None
        return self.buffer.text

    def _on_notice(self, payload: object) -> None:
        self._notice = str(payload or "")


__all__ = ["EditorClosedError", "EditorView", "ModalEditor", "create_default_manager"]
