"""Raw-mode session controller: owns the input source for one editing run."""

from __future__ import annotations

import asyncio
from contextlib import contextmanager
from typing import Iterator, Optional

from rich.console import Console

from vim_prompt.config import EditorConfig
from vim_prompt.editor import ModalEditor
from vim_prompt.render import render
from vim_prompt.runtime import telemetry

from .input_source import InputSource, TerminalInputSource


class SessionController:
    """Feed keys from ``source`` to ``editor`` and redraw after every chunk.

    The source is suspended (host listeners paused, raw mode on) for the whole
    run and resumed on every way out: quit commands, Ctrl+C, end of input,
    task cancellation and ``KeyboardInterrupt`` alike.
    """

    def __init__(
        self,
        editor: ModalEditor,
        source: InputSource,
        *,
        console: Optional[Console] = None,
        config: Optional[EditorConfig] = None,
    ) -> None:
        self.editor = editor
        self.source = source
        self.console = console or Console()
        self.config = config or editor.config

    async def run(self) -> Optional[str]:
        telemetry.record_event(
            "session.start", data={"filename": self.editor.filename}
        )
        with telemetry.span("session::run", component="session"):
            with self._acquired():
                self.redraw()
                while not self.editor.stopped:
                    chunk = await self.source.read()
                    if chunk == "":
                        self.editor.discard()
                        break
                    self.editor.feed(chunk)
                    if not self.editor.stopped:
                        self.redraw()
                self.console.clear()
        result = self.editor.result()
        telemetry.record_event(
            "session.end", data={"saved": result is not None}
        )
        return result

    def redraw(self) -> None:
        self.console.clear()
        self.console.print(render(self.editor.view(), self.config))

    @contextmanager
    def _acquired(self) -> Iterator[InputSource]:
        self.source.suspend()
        try:
            yield self.source
        finally:
            try:
                self.source.resume()
            except Exception as exc:
                telemetry.record_event(
                    "session.restore_failed",
                    level="error",
                    data={"step": "resume", "error": repr(exc)},
                )


async def run_editor(
    initial_text: str = "",
    filename: str = "",
    *,
    source: Optional[InputSource] = None,
    console: Optional[Console] = None,
    config: Optional[EditorConfig] = None,
) -> Optional[str]:
    """Edit ``initial_text`` interactively; ``None`` means the edits were discarded."""

    config = config or EditorConfig.from_env()
    editor = ModalEditor(initial_text, filename, config=config)
    controller = SessionController(
        editor,
        source if source is not None else TerminalInputSource(),
        console=console,
        config=config,
    )
    return await controller.run()


def edit_text(
    initial_text: str = "",
    filename: str = "",
    *,
    config: Optional[EditorConfig] = None,
) -> Optional[str]:
    """Blocking wrapper around ``run_editor`` for callers without an event loop."""

    return asyncio.run(run_editor(initial_text, filename, config=config))


__all__ = ["SessionController", "edit_text", "run_editor"]
