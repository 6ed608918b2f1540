from __future__ import annotations

import pytest

from vim_prompt.actions.command import UNSAVED_NOTICE
from vim_prompt.config import EditorMode
from vim_prompt.editor import ModalEditor

ESC = "\x1b"
ENTER = "\r"
BACKSPACE = "\x7f"


def run_command(editor: ModalEditor, command: str) -> None:
    editor.feed(":")
    editor.feed(command)
    editor.feed(ENTER)


def dirty_editor(text: str = "abc") -> ModalEditor:
    editor = ModalEditor(text)
    editor.feed("i")
    editor.feed("x")
    editor.feed(ESC)
    return editor


def test_quit_rejected_with_unsaved_changes() -> None:
    editor = dirty_editor()
    lines = editor.buffer.lines

    run_command(editor, "q")

    assert editor.stopped is False
    assert editor.mode is EditorMode.NORMAL
    assert editor.buffer.lines == lines
    assert editor.view().notice == UNSAVED_NOTICE


def test_force_quit_discards() -> None:
    editor = dirty_editor()

    run_command(editor, "q!")

    assert editor.stopped is True
    assert editor.result() is None


def test_write_then_quit() -> None:
    editor = dirty_editor()

    run_command(editor, "w")
    assert editor.stopped is False
    assert editor.buffer.state.saved is True
    assert editor.mode is EditorMode.NORMAL

    run_command(editor, "q")
    assert editor.stopped is True
    assert editor.result() == "xabc"


@pytest.mark.parametrize("command", ["wq", "x", "exit", "wq!", "x!"])
def test_write_quit_aliases(command: str) -> None:
    editor = dirty_editor()

    run_command(editor, command)

    assert editor.stopped is True
    assert editor.result() == "xabc"


def test_command_is_trimmed() -> None:
    editor = dirty_editor()

    run_command(editor, "  wq  ")

    assert editor.result() == "xabc"


def test_line_jump() -> None:
    editor = ModalEditor("\n".join(f"line {n}" for n in range(10)))
    editor.feed("$")

    run_command(editor, "5")

    assert editor.buffer.state.cursor == (4, 0)
    assert editor.mode is EditorMode.NORMAL


@pytest.mark.parametrize("command", ["0", "11", "-1", "abc", "s/a/b/"])
def test_unknown_commands_return_to_normal_silently(command: str) -> None:
    editor = ModalEditor("\n".join(str(n) for n in range(10)))
    editor.feed("j")

    run_command(editor, command)

    assert editor.mode is EditorMode.NORMAL
    assert editor.stopped is False
    assert editor.buffer.state.cursor == (1, 0)
    assert editor.view().notice == ""


def test_reload_restores_initial_text() -> None:
    editor = dirty_editor("start")

    run_command(editor, "e!")

    assert editor.buffer.lines == ("start",)
    assert editor.buffer.state.cursor == (0, 0)
    assert editor.buffer.state.saved is True
    editor.feed("u")
    assert editor.buffer.lines == ("xstart",)


def test_backspace_on_last_character_returns_to_normal() -> None:
    editor = ModalEditor("abc")
    editor.feed(":")
    editor.feed("w")

    editor.feed(BACKSPACE)

    assert editor.mode is EditorMode.NORMAL
    assert editor.view().command_text == ""


def test_escape_cancels_command() -> None:
    editor = ModalEditor("abc")

    editor.feed(":q!")
    editor.feed(ESC)

    assert editor.stopped is False
    assert editor.mode is EditorMode.NORMAL


def test_command_text_visible_while_typing() -> None:
    editor = ModalEditor("abc")

    editor.feed(":wq")

    assert editor.mode is EditorMode.COMMAND
    assert editor.view().command_text == "wq"


@pytest.mark.parametrize("command", ["²", "①", "٣"])
def test_non_ascii_digits(command: str) -> None:
    editor = ModalEditor("a\nb\nc\nd")

    run_command(editor, command)

    assert editor.mode is EditorMode.NORMAL
    assert editor.stopped is False
