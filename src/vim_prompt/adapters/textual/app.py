"""Textual app that hosts the modal editor full-screen."""

from __future__ import annotations

from typing import Optional

from textual import events
from textual.app import App, ComposeResult
from textual.widgets import Static

from vim_prompt.config import EditorConfig
from vim_prompt.editor import EditorView, ModalEditor
from vim_prompt.render import render
from vim_prompt.runtime import telemetry

from .controller import TextualEditorAdapter, TextualUIHooks


class EditorApp(App[Optional[str]]):
    """``App.run()`` returns the saved text, or ``None`` when discarded."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#editor-view {
		height: 1fr;
		padding: 0 1;
		content-align: left top;
	}
	"""

    def __init__(
        self,
        initial_text: str = "",
        filename: str = "",
        *,
        config: EditorConfig | None = None,
    ) -> None:
        super().__init__()
        self.config = config or EditorConfig.from_env()
        self.editor = ModalEditor(initial_text, filename, config=self.config)
        self.adapter: TextualEditorAdapter | None = None
        self._view_widget: Static | None = None
        self._logger = telemetry.get_logger("vim_prompt.textual")

    def compose(self) -> ComposeResult:
        self._view_widget = Static("", id="editor-view")
        yield self._view_widget

    def on_mount(self) -> None:
        hooks = TextualUIHooks(
            update_view=self._update_view,
            finish=self._finish,
            log=self._log_line,
        )
        self.adapter = TextualEditorAdapter(self.editor, hooks)

    async def on_key(self, event: events.Key) -> None:
        if not self.adapter:
            return
        self.adapter.handle_textual_key(event.key, character=event.character)
        event.stop()
        event.prevent_default()

    def _update_view(self, view: EditorView) -> None:
        if self._view_widget:
            self._view_widget.update(render(view, self.config))

    def _finish(self, result: Optional[str]) -> None:
        self.exit(result)

    def _log_line(self, line: str) -> None:
        self._logger.debug(line)


__all__ = ["EditorApp"]
