"""Render an ``EditorView`` as a rich renderable."""

from __future__ import annotations

from typing import List, Optional, Tuple

from rich.console import Group, RenderableType
from rich.rule import Rule
from rich.text import Text

from vim_prompt.config import MODE_STYLES, EditorConfig, EditorMode
from vim_prompt.editor import EditorView

GUTTER_STYLE = "bright_black"
CURSOR_LINE_STYLE = "black on white"
CURSOR_CELL_STYLE = "reverse"
SELECTION_STYLE = "white on blue"
TITLE_STYLE = "bold cyan"
NOTICE_STYLE = "yellow"


def viewport(cursor_row: int, line_count: int, max_visible: int) -> Tuple[int, int]:
    """Half-open ``[start, end)`` window of lines centred on the cursor row."""

    start = max(0, cursor_row - max_visible // 2)
    end = min(line_count, start + max_visible)
    start = max(0, end - max_visible)
    return start, end


def title_line(view: EditorView, config: EditorConfig) -> Text:
    name = view.filename or config.untitled
    modified = "" if view.saved else " [+]"
    return Text(f"{config.title} - {name}{modified}", style=TITLE_STYLE)


def buffer_line(view: EditorView, index: int) -> Text:
    line = view.lines[index]
    text = Text(f"{index + 1:>4} │ ", style=GUTTER_STYLE)
    row, col = view.cursor
    if index == row:
        cell = line[col] if col < len(line) else " "
        body = Text(style=CURSOR_LINE_STYLE)
        body.append(line[:col])
        body.append(cell, style=CURSOR_CELL_STYLE)
        body.append(line[col + 1 :])
        text.append_text(body)
        return text
    selection = view.selection
    if selection is not None and selection[0] <= index <= selection[1]:
        text.append(line, style=SELECTION_STYLE)
    else:
        text.append(line)
    return text


def status_line(view: EditorView) -> Text:
    if view.mode is EditorMode.COMMAND:
        return Text(f":{view.command_text}█", style="yellow")
    style = MODE_STYLES[view.mode]
    row, col = view.cursor
    text = Text(style.label, style=style.color)
    text.append(f"  {row + 1}:{col + 1}  {len(view.lines)} lines", style=GUTTER_STYLE)
    return text


def hint_line(view: EditorView, config: EditorConfig) -> Optional[Text]:
    if not config.show_hints:
        return None
    hint = MODE_STYLES[view.mode].hint
    if not hint:
        return None
    return Text(hint, style=GUTTER_STYLE)


def render(view: EditorView, config: EditorConfig | None = None) -> RenderableType:
    """Title, rule, numbered viewport, rule, status line, notice and hint."""

    config = config or EditorConfig()
    start, end = viewport(view.cursor[0], len(view.lines), config.max_visible_lines)
    parts: List[RenderableType] = [
        title_line(view, config),
        Rule(style=GUTTER_STYLE),
    ]
    parts.extend(buffer_line(view, index) for index in range(start, end))
    parts.append(Rule(style=GUTTER_STYLE))
    parts.append(status_line(view))
    if view.notice:
        parts.append(Text(view.notice, style=NOTICE_STYLE))
    hint = hint_line(view, config)
    if hint is not None:
        parts.append(hint)
    return Group(*parts)


__all__ = ["render", "viewport", "status_line", "title_line", "buffer_line"]
