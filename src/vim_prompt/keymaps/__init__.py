"""Declarative keymap registry and default bindings."""

from .models import ActionRef, Binding, KeySequence
from .registry import KeymapConflictError, KeymapRegistry, RegistryStats
from .resolver import KeymapResolver, ResolutionMatch, ResolutionResult
from .defaults import DEFAULT_ACTIONS, DEFAULT_BINDINGS, load_default_keymaps

__all__ = [
    "ActionRef",
    "Binding",
    "KeySequence",
    "KeymapRegistry",
    "KeymapConflictError",
    "RegistryStats",
    "KeymapResolver",
    "ResolutionResult",
    "ResolutionMatch",
    "DEFAULT_ACTIONS",
    "DEFAULT_BINDINGS",
    "load_default_keymaps",
]
