"""Value types shared by the keymap registry, resolver and default tables."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Callable, Mapping


@dataclass(frozen=True, slots=True)
class KeySequence:
    """Key tokens typed in order, e.g. ``("Z", "Z")`` or ``("CTRL+R",)``.

    Tokens are the ``KeyEvent.token`` strings produced by the key decoder.
    """

    tokens: tuple[str, ...]

    def __post_init__(self) -> None:
        if not self.tokens or "" in self.tokens:
            raise ValueError(f"key sequence needs non-empty tokens, got {self.tokens!r}")

    def __len__(self) -> int:
        return len(self.tokens)

    @classmethod
    def from_strings(cls, *keys: str) -> "KeySequence":
        return cls(tuple(key for key in keys if key))


@dataclass(frozen=True, slots=True)
class ActionRef:
    """Named editor operation; ``handler(context, match)`` returns a ``ModeResult``."""

    id: str
    handler: Callable[..., object]
    description: str = ""
    metadata: Mapping[str, object] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("action id cannot be empty")
        if not callable(self.handler):
            raise TypeError(f"handler for '{self.id}' is not callable")
        object.__setattr__(self, "metadata", MappingProxyType(dict(self.metadata)))

    def __call__(self, *args: object, **kwargs: object) -> object:
        return self.handler(*args, **kwargs)


@dataclass(frozen=True, slots=True)
class Binding:
    id: str
    mode: str
    sequence: KeySequence
    action_id: str
    description: str = ""
    priority: int = 0

    def __post_init__(self) -> None:
        for name in ("id", "mode", "action_id"):
            if not getattr(self, name):
                raise ValueError(f"binding {name} cannot be empty")

    @property
    def key_signature(self) -> str:
        return " ".join(self.sequence.tokens)


__all__ = ["ActionRef", "Binding", "KeySequence"]
