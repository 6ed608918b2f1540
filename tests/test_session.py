from __future__ import annotations

import asyncio
import os
from io import StringIO
from typing import Any, Dict, List, Sequence

import pytest
from rich.console import Console

from vim_prompt.editor import ModalEditor
from vim_prompt.runtime import telemetry
from vim_prompt.terminal import (
    InputListeners,
    QueueInputSource,
    SessionController,
    TerminalInputSource,
    run_editor,
)


def make_console() -> Console:
    return Console(file=StringIO(), width=60, color_system=None)


class RecordingSource(QueueInputSource):
    """Queue source that remembers how many host listeners were live per read."""

    def __init__(self, chunks: Sequence[str], listeners: InputListeners) -> None:
        super().__init__(chunks, listeners=listeners)
        self.live_listener_counts: List[int] = []

    async def read(self) -> str:
        self.live_listener_counts.append(len(self.listeners))
        return await super().read()


class FailingListeners(InputListeners):
    def attach_all(self, listeners) -> None:
        raise RuntimeError("stdin is gone")


class FailingResumeSource(QueueInputSource):
    def resume(self) -> None:
        raise OSError("tcsetattr failed")


@pytest.fixture
def recorded_events(monkeypatch: pytest.MonkeyPatch) -> List[Dict[str, Any]]:
    events: List[Dict[str, Any]] = []

    def fake_record_event(name: str, **kwargs: Any) -> None:
        events.append({"name": name, **kwargs})

    monkeypatch.setattr(telemetry, "record_event", fake_record_event)
    return events


@pytest.mark.asyncio
async def test_session_returns_saved_text() -> None:
    source = QueueInputSource(["i", "hello", "\x1b", ":wq", "\r"])
    controller = SessionController(ModalEditor(""), source, console=make_console())

    result = await controller.run()

    assert result == "hello"
    assert source.suspended is False


@pytest.mark.asyncio
async def test_ctrl_c_discards_and_restores_listeners() -> None:
    listeners = InputListeners()
    seen: List[str] = []
    listeners.add(seen.append)
    source = RecordingSource(["ihello", "\x03"], listeners)
    controller = SessionController(ModalEditor("x"), source, console=make_console())

    result = await controller.run()

    assert result is None
    assert source.live_listener_counts == [0, 0]
    assert len(listeners) == 1
    listeners.dispatch("after")
    assert seen == ["after"]


@pytest.mark.asyncio
async def test_end_of_input_discards() -> None:
    source = QueueInputSource(["ix"])
    source.close()
    controller = SessionController(ModalEditor("keep"), source, console=make_console())

    assert await controller.run() is None


@pytest.mark.asyncio
async def test_unsaved_quit_keeps_session_running() -> None:
    source = QueueInputSource(["x", ":q", "\r"])
    editor = ModalEditor("abc")
    controller = SessionController(editor, source, console=make_console())
    task = asyncio.create_task(controller.run())

    await asyncio.sleep(0.01)
    assert not task.done()
    assert editor.mode.value == "normal"

    source.push(":q!\r")
    assert await task is None


@pytest.mark.asyncio
async def test_cancellation_releases_source() -> None:
    source = QueueInputSource()
    controller = SessionController(ModalEditor(""), source, console=make_console())
    task = asyncio.create_task(controller.run())

    await asyncio.sleep(0)
    assert source.suspended is True
    task.cancel()

    with pytest.raises(asyncio.CancelledError):
        await task
    assert source.suspended is False


@pytest.mark.asyncio
async def test_listener_restore_failure_is_logged(
    recorded_events: List[Dict[str, Any]],
) -> None:
    source = QueueInputSource([":wq\r"], listeners=FailingListeners())
    controller = SessionController(ModalEditor("ok"), source, console=make_console())

    result = await controller.run()

    assert result == "ok"
    failures = [e for e in recorded_events if e["name"] == "session.restore_failed"]
    assert failures and failures[0]["level"] == "error"
    assert failures[0]["data"]["step"] == "listeners"


@pytest.mark.asyncio
async def test_resume_failure_does_not_propagate(
    recorded_events: List[Dict[str, Any]],
) -> None:
    source = FailingResumeSource(["\x03"])
    controller = SessionController(ModalEditor("ok"), source, console=make_console())

    assert await controller.run() is None
    assert any(e["name"] == "session.restore_failed" for e in recorded_events)


@pytest.mark.asyncio
async def test_run_editor_renders_each_chunk() -> None:
    console = make_console()
    source = QueueInputSource(["ihi", "\x1b", "ZZ"])

    result = await run_editor("", "draft.txt", source=source, console=console)

    assert result == "hi"
    output = console.file.getvalue()
    assert "draft.txt" in output
    assert "-- INSERT --" in output


@pytest.mark.asyncio
async def test_terminal_source_reads_from_pipe() -> None:
    read_fd, write_fd = os.pipe()
    listeners = InputListeners()
    listeners.add(lambda text: None)
    source = TerminalInputSource(fd=read_fd, listeners=listeners)
    try:
        assert source.is_tty is False
        source.suspend()
        assert len(listeners) == 0

        os.write(write_fd, "ié".encode("utf-8"))
        os.close(write_fd)
        assert await source.read() == "ié"
        assert await source.read() == ""
    finally:
        source.resume()
        os.close(read_fd)

    assert len(listeners) == 1


@pytest.mark.asyncio
async def test_run_editor_accepts_piped_input() -> None:
    read_fd, write_fd = os.pipe()
    os.write(write_fd, b"ihi\x1b:wq\r")
    os.close(write_fd)
    try:
        result = await run_editor(
            source=TerminalInputSource(fd=read_fd), console=make_console()
        )
    finally:
        os.close(read_fd)

    assert result == "hi"
