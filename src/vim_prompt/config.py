"""Editor mode constants and display configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum
from typing import Mapping

ENV_PREFIX = "VIM_PROMPT_"


class EditorMode(str, Enum):
    """Available editor modes."""

    NORMAL = "normal"
    INSERT = "insert"
    VISUAL = "visual"
    COMMAND = "command"


@dataclass(frozen=True)
class ModeStyle:
    """Status-line presentation for a mode."""

    label: str
    color: str
    hint: str = ""


MODE_STYLES: Mapping[EditorMode, ModeStyle] = {
    EditorMode.NORMAL: ModeStyle(
        "-- NORMAL --",
        "green",
        "i=insert  :wq=save & quit  :q!=discard  ZZ=save & quit  Ctrl+C=force quit",
    ),
    EditorMode.INSERT: ModeStyle(
        "-- INSERT --",
        "blue",
        "ESC=normal mode  Enter=new line  Backspace=delete/join",
    ),
    EditorMode.VISUAL: ModeStyle(
        "-- VISUAL --",
        "magenta",
        "h/j/k/l=extend  y=yank lines  d=delete lines  ESC=cancel",
    ),
    EditorMode.COMMAND: ModeStyle("-- COMMAND --", "yellow"),
}


def _env_int(name: str, fallback: int) -> int:
    value = os.environ.get(f"{ENV_PREFIX}{name}")
    if value is None:
        return fallback
    try:
        return int(value)
    except ValueError:
        return fallback


def _env_flag(name: str, fallback: bool) -> bool:
    value = os.environ.get(f"{ENV_PREFIX}{name}")
    if value is None:
        return fallback
    return value.lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class EditorConfig:
    """Rendering knobs for an editing session."""

    max_visible_lines: int = 20
    show_hints: bool = True
    title: str = "Vim editor"
    untitled: str = "[No Name]"

    def __post_init__(self) -> None:
        if self.max_visible_lines < 1:
            raise ValueError("max_visible_lines must be positive")

    @classmethod
    def from_env(cls) -> "EditorConfig":
        defaults = cls()
        return cls(
            max_visible_lines=max(1, _env_int("MAX_LINES", defaults.max_visible_lines)),
            show_hints=_env_flag("SHOW_HINTS", defaults.show_hints),
            title=os.environ.get(f"{ENV_PREFIX}TITLE", defaults.title),
        )


__all__ = ["EditorMode", "ModeStyle", "MODE_STYLES", "EditorConfig"]
