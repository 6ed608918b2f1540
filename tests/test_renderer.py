from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.text import Text

from vim_prompt.config import EditorConfig
from vim_prompt.editor import ModalEditor
from vim_prompt.render import render, viewport
from vim_prompt.render.renderer import buffer_line, status_line


def render_plain(editor: ModalEditor, config: EditorConfig | None = None) -> str:
    console = Console(file=StringIO(), width=60, color_system=None, force_terminal=False)
    console.print(render(editor.view(), config))
    return console.file.getvalue()


def test_viewport_centres_and_stays_full() -> None:
    assert viewport(0, 100, 20) == (0, 20)
    assert viewport(50, 100, 20) == (40, 60)
    assert viewport(99, 100, 20) == (80, 100)
    assert viewport(2, 5, 20) == (0, 5)


def test_title_shows_name_and_modified_marker() -> None:
    editor = ModalEditor("abc", "notes.md")
    assert "Vim editor - notes.md" in render_plain(editor)
    assert "[+]" not in render_plain(editor)

    editor.feed("x")
    assert "Vim editor - notes.md [+]" in render_plain(editor)


def test_untitled_placeholder() -> None:
    output = render_plain(ModalEditor("abc"))
    assert "[No Name]" in output


def test_gutter_and_status_line() -> None:
    editor = ModalEditor("first\nsecond")
    editor.feed("jl")

    output = render_plain(editor)

    assert "   1 │ first" in output
    assert "   2 │ second" in output
    assert "-- NORMAL --  2:2  2 lines" in output


def test_command_mode_shows_command_text() -> None:
    editor = ModalEditor("abc")
    editor.feed(":wq")

    output = render_plain(editor)

    assert ":wq█" in output
    assert "-- NORMAL --" not in output


def test_hints_can_be_disabled() -> None:
    editor = ModalEditor("abc")
    hint = "i=insert"

    assert hint in render_plain(editor)
    assert hint not in render_plain(editor, EditorConfig(show_hints=False))


def test_only_visible_window_is_rendered() -> None:
    editor = ModalEditor("\n".join(f"row{n}" for n in range(50)))
    editor.feed("G")

    output = render_plain(editor, EditorConfig(max_visible_lines=5))

    assert "row49" in output
    assert "row45" in output
    assert "row44" not in output


def test_cursor_cell_is_reversed() -> None:
    editor = ModalEditor("abc")
    editor.feed("l")

    line = buffer_line(editor.view(), 0)

    assert isinstance(line, Text)
    assert line.plain.endswith("abc")
    cursor_spans = [span for span in line.spans if str(span.style) == "reverse"]
    assert len(cursor_spans) == 1
    assert line.plain[cursor_spans[0].start : cursor_spans[0].end] == "b"


def test_cursor_past_line_end_renders_space() -> None:
    editor = ModalEditor("")

    line = buffer_line(editor.view(), 0)

    assert line.plain.endswith(" ")


def test_visual_lines_are_highlighted() -> None:
    editor = ModalEditor("a\nb\nc")
    editor.feed("vj")

    view = editor.view()
    selected = buffer_line(view, 0)
    outside = buffer_line(view, 2)

    assert any(str(span.style) == "white on blue" for span in selected.spans)
    assert not any(str(span.style) == "white on blue" for span in outside.spans)


def test_notice_is_rendered() -> None:
    editor = ModalEditor("abc")
    editor.feed("y")

    assert "1 line yanked" in render_plain(editor)
    assert status_line(editor.view()).plain.startswith("-- NORMAL --")


def test_separator_rules_span_console_width() -> None:
    console = Console(file=StringIO(), width=42, color_system=None)

    console.print(render(ModalEditor("abc").view()))

    rules = [line for line in console.file.getvalue().splitlines() if set(line) == {"─"}]
    assert len(rules) == 2
    assert all(len(line) == 42 for line in rules)
