"""Mode manager coordinating Normal/Insert/Visual/Command dispatch."""

from __future__ import annotations

from typing import Dict, Optional, Type

from vim_prompt.keymaps import KeymapRegistry, KeymapResolver, load_default_keymaps
from vim_prompt.keys import Control, KeyEvent, Printable
from vim_prompt.keys.decoder import CTRL_C
from vim_prompt.runtime import telemetry

from .base_mode import Mode, ModeContext, ModeResult


class ModeManager:
    """Owns the active mode, handles transitions, and dispatches key events.

    Ctrl+C is intercepted before any mode sees it and always ends the session
    discarding the buffer.
    """

    def __init__(
        self,
        context: ModeContext,
        *,
        keymap_registry: KeymapRegistry | None = None,
        keymap_resolver: KeymapResolver | None = None,
        load_defaults: bool = True,
    ) -> None:
        self.context = context
        self._modes: Dict[str, Mode] = {}
        self._active: Optional[str] = None
        self.stopped = False
        self.logger = telemetry.get_logger("vim_prompt.modes")
        self.keymap_registry = keymap_registry or KeymapRegistry(
            logger_name="vim_prompt.keymaps"
        )
        if load_defaults and keymap_registry is None:
            load_default_keymaps(self.keymap_registry)
        self.keymap_resolver = keymap_resolver or KeymapResolver(
            self.keymap_registry, logger_name="vim_prompt.keymaps"
        )
        self.context.extras.setdefault("keymap_registry", self.keymap_registry)
        self.context.extras.setdefault("keymap_resolver", self.keymap_resolver)
        self.context.extras.setdefault("mode_manager", self)

    @property
    def active_mode(self) -> Optional[Mode]:
        if self._active is None:
            return None
        return self._modes.get(self._active)

    @property
    def active_name(self) -> Optional[str]:
        return self._active

    def register_mode(
        self,
        mode_cls: Type[Mode],
        /,
        *mode_args: object,
        **mode_kwargs: object,
    ) -> Mode:
        mode = mode_cls(self.context, *mode_args, **mode_kwargs)
        if mode.name in self._modes:
            raise ValueError(f"Mode '{mode.name}' already registered")
        self._modes[mode.name] = mode
        if self._active is None:
            self._active = mode.name
            mode.on_enter(None)
        return mode

    def switch_mode(self, name: str) -> None:
        if name not in self._modes:
            raise KeyError(f"Unknown mode '{name}'")
        previous = self.active_mode
        if previous and previous.name == name:
            return
        if previous:
            previous.on_exit(name)
        self._active = name
        self._modes[name].on_enter(previous.name if previous else None)
        telemetry.record_event("mode.switch", level="debug", data={"mode": name})

    def handle_key(self, key: KeyEvent) -> ModeResult:
        mode = self._require_active()
        if isinstance(key, Control) and key.code == CTRL_C:
            return self.force_quit()
        if isinstance(key, Printable) and len(key.text) > 1 and not mode.accepts_text_runs:
            return self._dispatch_run(key.text)
        return self._dispatch(mode, key)

    def _dispatch_run(self, text: str) -> ModeResult:
        """Feed a printable run one character at a time until a text mode takes over."""

        result = ModeResult(consumed=False, status="miss")
        for index, char in enumerate(text):
            if self.stopped:
                break
            mode = self._require_active()
            if mode.accepts_text_runs:
                return self._dispatch(mode, Printable(text[index:]))
            result = self._dispatch(mode, Printable(char))
        return result

    def _dispatch(self, mode: Mode, key: KeyEvent) -> ModeResult:
        with telemetry.span(
            name=f"mode::{mode.name}",
            component=True,
            metadata={"key": key.token, "mode": mode.name},
        ):
            result = mode.handle_key(key)
        return self._after_mode_result(result)

    def _after_mode_result(self, result: ModeResult) -> ModeResult:
        if result.stop:
            self.stopped = True
            telemetry.record_event(
                "session.stop",
                data={"status": result.status, "saved": self.context.buffer.state.saved},
            )
        elif result.switch_to:
            self.switch_mode(result.switch_to)
        return result

    def force_quit(self) -> ModeResult:
        """End the session discarding the buffer, whatever the dirty flag says."""

        self.context.buffer.state.mark_unsaved()
        return self._after_mode_result(
            ModeResult(consumed=True, status="force_quit", stop=True)
        )

    def _require_active(self) -> Mode:
        mode = self.active_mode
        if mode is None:
            raise RuntimeError("No active mode registered")
        return mode
