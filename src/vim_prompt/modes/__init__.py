"""Mode state machine: Normal, Insert, Visual and Command modes."""

from .base_mode import Mode, ModeBus, ModeContext, ModeResult
from .normal_mode import NormalMode
from .insert_mode import InsertMode
from .visual_mode import VisualMode
from .command_mode import CommandMode

__all__ = [
    "Mode",
    "ModeBus",
    "ModeContext",
    "ModeResult",
    "NormalMode",
    "InsertMode",
    "VisualMode",
    "CommandMode",
]
