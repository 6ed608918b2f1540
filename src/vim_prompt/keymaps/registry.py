"""Store of editor actions and the key bindings that trigger them."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from vim_prompt.runtime.telemetry import span

from .models import ActionRef, Binding

SlotKey = Tuple[str, Tuple[str, ...]]


@dataclass(slots=True)
class RegistryStats:
    action_count: int
    binding_count: int
    modes: tuple[str, ...]


class KeymapConflictError(RuntimeError):
    """A binding would shadow keys another binding already owns in that mode."""

    def __init__(self, binding: Binding, conflicts: Iterable[Binding]):
        self.binding = binding
        self.conflicts = tuple(conflicts)
        owners = ", ".join(existing.id for existing in self.conflicts)
        super().__init__(
            f"{binding.mode} keys {binding.key_signature!r} for '{binding.id}' "
            f"already bound by {owners}"
        )


def _slot(binding: Binding) -> SlotKey:
    return binding.mode, binding.sequence.tokens


class KeymapRegistry:
    """Actions by id, bindings by id, and an index of which ids sit on each key slot.

    Every binding change bumps :meth:`revision` so resolvers know to rebuild.
    """

    def __init__(self, *, logger_name: str | None = None) -> None:
        self._logger_name = logger_name
        self._actions: Dict[str, ActionRef] = {}
        self._bindings: Dict[str, Binding] = {}
        self._slots: Dict[SlotKey, List[str]] = {}
        self._revision = 0

    def revision(self) -> int:
        return self._revision

    def get_action(self, action_id: str) -> ActionRef:
        action = self._actions.get(action_id)
        if action is None:
            raise KeyError(f"no action registered as '{action_id}'")
        return action

    def get_binding(self, binding_id: str) -> Binding:
        binding = self._bindings.get(binding_id)
        if binding is None:
            raise KeyError(f"no binding registered as '{binding_id}'")
        return binding

    def register_action(self, action: ActionRef, *, replace: bool = False) -> ActionRef:
        with span(
            "keymaps::register_action",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"action_id": action.id},
        ):
            if action.id in self._actions and not replace:
                raise ValueError(f"action '{action.id}' is already registered")
            self._actions[action.id] = action
            return action

    def register_binding(self, binding: Binding, *, replace: bool = False) -> Binding:
        """Add ``binding``; with ``replace`` it evicts its old id and any slot owners."""

        with span(
            "keymaps::register_binding",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"binding_id": binding.id, "mode": binding.mode},
        ) as handle:
            if binding.action_id not in self._actions:
                handle.add_metadata("missing_action", binding.action_id)
                raise KeyError(
                    f"binding '{binding.id}' points at unknown action '{binding.action_id}'"
                )

            rivals = [b for b in self.detect_conflicts(binding) if b.id != binding.id]
            if not replace:
                if rivals:
                    handle.add_metadata("conflicts", ",".join(b.id for b in rivals))
                    raise KeymapConflictError(binding, rivals)
                if binding.id in self._bindings:
                    raise ValueError(f"binding id '{binding.id}' is already registered")

            evicted = list(rivals)
            previous = self._bindings.get(binding.id)
            if previous is not None:
                evicted.append(previous)
            for old in evicted:
                self._forget(old)
            self._bindings[binding.id] = binding
            self._slots.setdefault(_slot(binding), []).append(binding.id)
            self._revision += 1
            return binding

    def unregister_binding(self, binding_id: str) -> Optional[Binding]:
        binding = self._bindings.get(binding_id)
        if binding is not None:
            self._forget(binding)
            self._revision += 1
        return binding

    def iter_bindings(self, mode: Optional[str] = None) -> Iterator[Binding]:
        if mode is None:
            yield from self._bindings.values()
            return
        for slot in sorted(self._slots):
            if slot[0] != mode:
                continue
            for binding_id in sorted(self._slots[slot]):
                yield self._bindings[binding_id]

    def modes(self) -> tuple[str, ...]:
        return tuple(sorted({mode for mode, _ in self._slots}))

    def stats(self) -> RegistryStats:
        return RegistryStats(
            action_count=len(self._actions),
            binding_count=len(self._bindings),
            modes=self.modes(),
        )

    def detect_conflicts(self, binding: Binding) -> list[Binding]:
        owners = self._slots.get(_slot(binding), [])
        return [self._bindings[binding_id] for binding_id in sorted(owners)]

    def _forget(self, binding: Binding) -> None:
        self._bindings.pop(binding.id, None)
        slot = _slot(binding)
        owners = self._slots.get(slot)
        if owners is None:
            return
        if binding.id in owners:
            owners.remove(binding.id)
        if not owners:
            del self._slots[slot]


__all__ = [
    "KeymapConflictError",
    "KeymapRegistry",
    "RegistryStats",
]
