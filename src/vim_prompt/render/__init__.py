"""Terminal rendering of editor state."""

from .renderer import render, viewport

__all__ = ["render", "viewport"]
