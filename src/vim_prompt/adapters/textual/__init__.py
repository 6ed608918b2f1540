"""Textual host for the modal editor."""

from .controller import TextualEditorAdapter, TextualUIHooks, textual_key_event

__all__ = ["TextualEditorAdapter", "TextualUIHooks", "textual_key_event"]
