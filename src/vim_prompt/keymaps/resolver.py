"""Resolve the keys typed so far against one mode's bindings.

Each mode gets a flat :class:`ModeKeyTable` keyed by complete token tuples,
plus a map from every strict prefix to the tokens that may follow it. Tables
are rebuilt lazily whenever the registry revision moves.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Literal, Optional, Sequence, Set, Tuple

from vim_prompt.runtime.telemetry import span

from .models import ActionRef, Binding
from .registry import KeymapRegistry

Tokens = Tuple[str, ...]


@dataclass(slots=True)
class ModeKeyTable:
    mode: str
    revision: int
    complete: Dict[Tokens, List[Binding]] = field(default_factory=dict)
    followers: Dict[Tokens, Set[str]] = field(default_factory=dict)

    @classmethod
    def build(cls, mode: str, revision: int, bindings: Iterable[Binding]) -> "ModeKeyTable":
        table = cls(mode=mode, revision=revision)
        for binding in bindings:
            keys = binding.sequence.tokens
            table.complete.setdefault(keys, []).append(binding)
            for depth in range(len(keys)):
                table.followers.setdefault(keys[:depth], set()).add(keys[depth])
        for candidates in table.complete.values():
            candidates.sort(key=lambda b: (-b.priority, b.id))
        return table

    def best(self, keys: Tokens) -> Optional[Binding]:
        candidates = self.complete.get(keys)
        return candidates[0] if candidates else None

    def continuations(self, keys: Tokens) -> Tokens:
        return tuple(sorted(self.followers.get(keys, ())))


@dataclass(frozen=True, slots=True)
class ResolutionMatch:
    binding: Binding
    action: ActionRef


@dataclass(frozen=True, slots=True)
class ResolutionResult:
    """``match`` runs an action, ``pending`` waits for more keys, ``miss`` gives up."""

    status: Literal["match", "pending", "miss"]
    match: Optional[ResolutionMatch] = None
    consumed: int = 0
    next_expected: Tokens = ()


class KeymapResolver:
    def __init__(
        self, registry: KeymapRegistry, *, logger_name: str | None = None
    ) -> None:
        self._registry = registry
        self._logger_name = logger_name
        self._tables: Dict[str, ModeKeyTable] = {}

    def table_for(self, mode: str) -> ModeKeyTable:
        revision = self._registry.revision()
        table = self._tables.get(mode)
        if table is None or table.revision != revision:
            table = ModeKeyTable.build(mode, revision, self._registry.iter_bindings(mode))
            self._tables[mode] = table
        return table

    def resolve(self, mode: str, tokens: Sequence[str]) -> ResolutionResult:
        typed = tuple(tokens)
        with span(
            "keymaps::resolve",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"mode": mode, "length": len(typed)},
        ) as handle:
            table = self.table_for(mode)
            binding = table.best(typed)
            if binding is not None:
                handle.add_metadata("status", "match")
                handle.add_metadata("binding_id", binding.id)
                action = self._registry.get_action(binding.action_id)
                return ResolutionResult(
                    status="match",
                    match=ResolutionMatch(binding=binding, action=action),
                    consumed=len(typed),
                )

            following = table.continuations(typed) if typed else ()
            if following:
                handle.add_metadata("status", "pending")
                return ResolutionResult(
                    status="pending", consumed=len(typed), next_expected=following
                )

            handle.add_metadata("status", "miss")
            return ResolutionResult(status="miss")

    def reset(self, mode: Optional[str] = None) -> None:
        if mode is None:
            self._tables.clear()
        else:
            self._tables.pop(mode, None)


__all__ = [
    "KeymapResolver",
    "ModeKeyTable",
    "ResolutionMatch",
    "ResolutionResult",
]
