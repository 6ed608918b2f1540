"""Vim-style modal text editing for terminal prompts."""

__all__ = [
    "actions",
    "adapters",
    "buffer",
    "config",
    "editor",
    "keymaps",
    "keys",
    "modes",
    "render",
    "runtime",
    "terminal",
]

__version__ = "0.1.0"
