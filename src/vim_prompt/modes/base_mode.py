"""Base classes and shared utilities for editor modes."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable, Dict, List, MutableMapping, Optional, cast

from vim_prompt.buffer import Buffer, Cursor
from vim_prompt.keys import KeyEvent, Printable
from vim_prompt.runtime import telemetry

if TYPE_CHECKING:
    from vim_prompt.keymaps.resolver import KeymapResolver, ResolutionMatch


@dataclass(slots=True)
class ModeResult:
    """Result returned from ``Mode.handle_key``.

    ``stop`` ends the editing session; the buffer's saved flag then decides
    whether the host receives the text.
    """

    consumed: bool
    switch_to: Optional[str] = None
    status: str = "ok"
    message: Optional[str] = None
    stop: bool = False


@dataclass(slots=True)
class ModeContext:
    """Shared services every mode can access."""

    buffer: Buffer
    bus: "ModeBus"
    extras: Dict[str, object] = field(default_factory=dict)


class ModeBus:
    """Minimal event bus letting modes exchange structured signals."""

    def __init__(self) -> None:
        self._subscribers: Dict[str, list[Callable[[object], None]]] = {}

    def subscribe(self, event: str, callback: Callable[[object], None]) -> None:
        self._subscribers.setdefault(event, []).append(callback)

    def emit(self, event: str, payload: object | None = None) -> None:
        for callback in self._subscribers.get(event, []):
            callback(payload)


def visual_state(context: ModeContext) -> MutableMapping[str, Cursor]:
    return cast(
        MutableMapping[str, Cursor], context.extras.setdefault("visual_state", {})
    )


def command_state(context: ModeContext) -> MutableMapping[str, object]:
    state = cast(
        MutableMapping[str, object], context.extras.setdefault("command_state", {})
    )
    state.setdefault("text", "")
    state.setdefault("history", [])
    return state


def notify(context: ModeContext, message: str) -> None:
    """Surface a one-line notice under the status line."""

    context.bus.emit("editor.notice", message)


class Mode:
    """Base class for editor modes.

    Keys are resolved against the mode's keymap first; anything left unbound
    goes to ``handle_unbound``.
    """

    name: str = "mode"
    accepts_text_runs: bool = False

    def __init__(self, context: ModeContext) -> None:
        self.context = context
        self.logger = telemetry.get_logger(f"vim_prompt.modes.{self.name}")
        self._resolver = self._require_resolver()
        self._pending: List[str] = []

    def on_enter(self, previous: Optional[str]) -> None:
        del previous

    def on_exit(self, next_mode: Optional[str]) -> None:
        del next_mode
        self._pending.clear()

    def handle_key(self, key: KeyEvent) -> ModeResult:
        if isinstance(key, Printable) and len(key.text) > 1:
            # a pasted run is text, never a key name such as "UP" or "ENTER"
            self._pending.clear()
            return self.handle_unbound(key)

        self._pending.append(key.token)
        result = self._resolver.resolve(self.name, tuple(self._pending))

        if result.status == "match" and result.match:
            self._pending.clear()
            return self._execute_match(result.match)

        if result.status == "pending":
            return ModeResult(consumed=True, status="pending", message="awaiting_sequence")

        self._pending.clear()
        return self.handle_unbound(key)

    def handle_unbound(self, key: KeyEvent) -> ModeResult:
        del key
        return ModeResult(consumed=False, status="miss")

    def _execute_match(self, match: "ResolutionMatch") -> ModeResult:
        with telemetry.span(
            "keymaps::execute",
            component="keymaps",
            metadata={"binding_id": match.binding.id, "action": match.action.id},
        ):
            outcome = match.action(self.context, match)

        if isinstance(outcome, ModeResult):
            return outcome
        return ModeResult(consumed=True)

    def _require_resolver(self) -> "KeymapResolver":
        resolver = self.context.extras.get("keymap_resolver")
        if resolver is None or not hasattr(resolver, "resolve"):
            raise RuntimeError("ModeContext.extras missing 'keymap_resolver'")
        return cast("KeymapResolver", resolver)
