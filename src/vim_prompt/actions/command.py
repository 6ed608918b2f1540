"""Command-line interpreter for text submitted from Command mode."""

from __future__ import annotations

from typing import Callable, Dict, List, cast

from vim_prompt.config import EditorMode
from vim_prompt.modes.base_mode import ModeContext, ModeResult, command_state, notify
from vim_prompt.runtime import telemetry

NORMAL = EditorMode.NORMAL.value

UNSAVED_NOTICE = "E37: No write since last change (add ! to override)"

CommandHandler = Callable[[ModeContext], ModeResult]


def _back_to_normal(status: str) -> ModeResult:
    return ModeResult(consumed=True, switch_to=NORMAL, status=status)


def _quit(context: ModeContext) -> ModeResult:
    state = context.buffer.state
    if not state.saved:
        notify(context, UNSAVED_NOTICE)
        return _back_to_normal("quit_rejected")
    state.mark_saved()
    return ModeResult(consumed=True, status="quit", stop=True)


def _force_quit(context: ModeContext) -> ModeResult:
    context.buffer.state.mark_unsaved()
    return ModeResult(consumed=True, status="force_quit", stop=True)


def _write(context: ModeContext) -> ModeResult:
    context.buffer.state.mark_saved()
    notify(context, f"{context.buffer.name} written")
    return _back_to_normal("write")


def _write_quit(context: ModeContext) -> ModeResult:
    context.buffer.state.mark_saved()
    return ModeResult(consumed=True, status="write_quit", stop=True)


def _reload(context: ModeContext) -> ModeResult:
    initial = context.extras.get("initial_text", "")
    context.buffer.reload(str(initial))
    return _back_to_normal("reload")


COMMANDS: Dict[str, CommandHandler] = {
    "q": _quit,
    "quit": _quit,
    "q!": _force_quit,
    "quit!": _force_quit,
    "w": _write,
    "write": _write,
    "wq": _write_quit,
    "wq!": _write_quit,
    "x": _write_quit,
    "x!": _write_quit,
    "exit": _write_quit,
    "e!": _reload,
    "edit!": _reload,
}


def execute_command(context: ModeContext, command: str) -> ModeResult:
    """Run one trimmed command line and report how the session should continue."""

    command = command.strip()
    handler = COMMANDS.get(command)
    if handler is not None:
        return handler(context)

    if command.isdecimal():
        line = int(command)
        if 0 < line <= context.buffer.document.line_count:
            context.buffer.move_to(line - 1, 0)
            return _back_to_normal("line_jump")

    telemetry.record_event(
        "command.unknown", level="debug", data={"command": command}
    )
    return _back_to_normal("unknown_command")


def submit_command_line(context: ModeContext, match) -> ModeResult:
    del match
    state = command_state(context)
    text = str(state.get("text", ""))
    state["text"] = ""
    if text.strip():
        cast(List[str], state["history"]).append(text)
    with telemetry.span(
        "command::execute", component="command", metadata={"command": text}
    ):
        return execute_command(context, text)


def command_backspace(context: ModeContext, match) -> ModeResult:
    del match
    state = command_state(context)
    text = str(state.get("text", ""))[:-1]
    state["text"] = text
    if not text:
        return _back_to_normal("command_cancel")
    return ModeResult(consumed=True, status="command_edit")


__all__ = [
    "COMMANDS",
    "UNSAVED_NOTICE",
    "command_backspace",
    "execute_command",
    "submit_command_line",
]
