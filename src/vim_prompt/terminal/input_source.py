"""Input capabilities handed to the session controller.

An input source owns three things while an editing session runs: the host's
own stdin listeners (paused), the terminal's line discipline (raw) and the
stream of decoded key text. ``suspend``/``resume`` bracket the session;
``read`` yields decoded text chunks, with ``""`` marking end of input.
"""

from __future__ import annotations

import asyncio
import os
import sys
import termios
import tty
from typing import Callable, List, Optional, Protocol, Sequence

from vim_prompt.keys import KeyDecoder
from vim_prompt.runtime import telemetry

Listener = Callable[[str], None]


class InputSource(Protocol):
    def suspend(self) -> None: ...

    def resume(self) -> None: ...

    async def read(self) -> str: ...


class InputListeners:
    """Host callbacks that normally consume stdin text."""

    def __init__(self) -> None:
        self._listeners: List[Listener] = []

    def add(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def remove(self, listener: Listener) -> None:
        self._listeners.remove(listener)

    def detach_all(self) -> List[Listener]:
        detached, self._listeners = self._listeners, []
        return detached

    def attach_all(self, listeners: Sequence[Listener]) -> None:
        self._listeners.extend(listeners)

    def dispatch(self, text: str) -> None:
        for listener in list(self._listeners):
            listener(text)

    def __len__(self) -> int:
        return len(self._listeners)


def _log_restore_failure(step: str, exc: BaseException) -> None:
    telemetry.record_event(
        "session.restore_failed",
        level="error",
        data={"step": step, "error": repr(exc)},
    )


class TerminalInputSource:
    """Raw-mode reader over a tty file descriptor."""

    def __init__(
        self,
        fd: Optional[int] = None,
        listeners: Optional[InputListeners] = None,
        *,
        read_size: int = 1024,
    ) -> None:
        self.fd = sys.stdin.fileno() if fd is None else fd
        self.listeners = listeners or InputListeners()
        self.read_size = read_size
        self._decoder = KeyDecoder()
        self._detached: List[Listener] = []
        self._saved_attrs: Optional[list] = None
        self._queue: Optional[asyncio.Queue[str]] = None
        self._loop: Optional[asyncio.AbstractEventLoop] = None

    @property
    def is_tty(self) -> bool:
        return os.isatty(self.fd)

    def suspend(self) -> None:
        # piped input has no line discipline to save or switch
        if self.is_tty:
            self._saved_attrs = termios.tcgetattr(self.fd)
        self._detached = self.listeners.detach_all()
        if self._saved_attrs is not None:
            try:
                tty.setraw(self.fd)
                attrs = termios.tcgetattr(self.fd)
                # keep "\n" returning the carriage when the renderer prints
                attrs[1] |= termios.OPOST | termios.ONLCR
                termios.tcsetattr(self.fd, termios.TCSANOW, attrs)
            except termios.error:
                self.resume()
                raise
        self._decoder.reset()

    def resume(self) -> None:
        self._stop_reader()
        if self._saved_attrs is not None:
            try:
                termios.tcsetattr(self.fd, termios.TCSADRAIN, self._saved_attrs)
            except (termios.error, OSError) as exc:
                _log_restore_failure("terminal_mode", exc)
            self._saved_attrs = None
        detached, self._detached = self._detached, []
        try:
            self.listeners.attach_all(detached)
        except Exception as exc:
            _log_restore_failure("listeners", exc)

    async def read(self) -> str:
        if self._queue is None:
            self._start_reader()
        assert self._queue is not None
        return await self._queue.get()

    def _start_reader(self) -> None:
        self._loop = asyncio.get_running_loop()
        self._queue = asyncio.Queue()
        self._loop.add_reader(self.fd, self._on_readable)

    def _stop_reader(self) -> None:
        if self._loop is not None:
            self._loop.remove_reader(self.fd)
        self._loop = None
        self._queue = None

    def _on_readable(self) -> None:
        assert self._queue is not None
        data = os.read(self.fd, self.read_size)
        if not data:
            assert self._loop is not None
            self._loop.remove_reader(self.fd)
            self._queue.put_nowait("")
            return
        text = self._decoder.feed_bytes(data)
        if text:
            self._queue.put_nowait(text)


class QueueInputSource:
    """In-memory source fed with ``push``; used by embedding hosts and tests."""

    def __init__(
        self,
        chunks: Sequence[str] = (),
        *,
        listeners: Optional[InputListeners] = None,
    ) -> None:
        self.listeners = listeners or InputListeners()
        self._queue: asyncio.Queue[str] = asyncio.Queue()
        self._detached: List[Listener] = []
        self.suspended = False
        for chunk in chunks:
            self.push(chunk)

    def push(self, chunk: str) -> None:
        self._queue.put_nowait(chunk)

    def close(self) -> None:
        self._queue.put_nowait("")

    def suspend(self) -> None:
        self._detached = self.listeners.detach_all()
        self.suspended = True

    def resume(self) -> None:
        detached, self._detached = self._detached, []
        self.suspended = False
        try:
            self.listeners.attach_all(detached)
        except Exception as exc:
            _log_restore_failure("listeners", exc)

    async def read(self) -> str:
        return await self._queue.get()


__all__ = [
    "InputListeners",
    "InputSource",
    "QueueInputSource",
    "TerminalInputSource",
]
