"""Decode raw terminal text into tagged key events.

A raw-mode terminal delivers printable text, C0 control codes and ANSI escape
sequences through the same stream. ``decode`` splits one chunk into:

``Printable(text)``  a run of printable characters, kept whole so multi-byte
                     and pasted text reaches the editor as one unit
``Arrow(direction)`` ``ESC [ A`` .. ``ESC [ D`` (and the ``ESC O`` variants)
``Control(code)``    a control code such as ESC, Enter, Backspace or Ctrl+C
"""

from __future__ import annotations

import codecs
import re
from dataclasses import dataclass
from typing import List, Literal, Optional, Union

ESC = 0x1B
ENTER = 0x0D
LINE_FEED = 0x0A
BACKSPACE = 0x7F
CTRL_H = 0x08
CTRL_C = 0x03
TAB = "\t"

Direction = Literal["up", "down", "left", "right"]

_ARROW_FINALS: dict[str, Direction] = {
    "A": "up",
    "B": "down",
    "C": "right",
    "D": "left",
}
_CONTROL_NAMES = {
    ESC: "ESC",
    ENTER: "ENTER",
    LINE_FEED: "ENTER",
    BACKSPACE: "BACKSPACE",
    CTRL_H: "BACKSPACE",
}
_CSI = re.compile(r"\x1b\[[0-9;?]*[ -/]*[@-~]")
_SS3 = re.compile(r"\x1bO[A-D]")


@dataclass(frozen=True, slots=True)
class Printable:
    text: str

    @property
    def token(self) -> str:
        return self.text


@dataclass(frozen=True, slots=True)
class Arrow:
    direction: Direction

    @property
    def token(self) -> str:
        return self.direction.upper()


@dataclass(frozen=True, slots=True)
class Control:
    code: int

    @property
    def token(self) -> str:
        name = _CONTROL_NAMES.get(self.code)
        if name is not None:
            return name
        if self.code < 0x20:
            return f"CTRL+{chr(self.code + 0x40)}"
        return f"0x{self.code:02X}"


KeyEvent = Union[Printable, Arrow, Control]


def _is_control(char: str) -> bool:
    code = ord(char)
    return (code < 0x20 and char != TAB) or code == BACKSPACE


def _match_escape(chunk: str, index: int) -> Optional[re.Match[str]]:
    return _CSI.match(chunk, index) or _SS3.match(chunk, index)


def decode(chunk: str) -> List[KeyEvent]:
    """Split ``chunk`` into key events, dropping unrecognised escape sequences."""

    events: List[KeyEvent] = []
    index = 0
    length = len(chunk)
    while index < length:
        char = chunk[index]
        if char == "\x1b":
            match = _match_escape(chunk, index)
            if match is None:
                events.append(Control(ESC))
                index += 1
                continue
            final = match.group()[-1]
            sequence_body = match.group()[2:-1]
            if final in _ARROW_FINALS and sequence_body in {"", "1"}:
                events.append(Arrow(_ARROW_FINALS[final]))
            index = match.end()
            continue

        if _is_control(char):
            if char == "\r" and chunk.startswith("\n", index + 1):
                index += 1
            events.append(Control(ord(char)))
            index += 1
            continue

        start = index
        while index < length and chunk[index] != "\x1b" and not _is_control(chunk[index]):
            index += 1
        events.append(Printable(chunk[start:index]))
    return events


class KeyDecoder:
    """Incremental bytes → key events decoder for a raw terminal stream.

    Multi-byte UTF-8 characters split across reads are held back until they
    are complete.
    """

    def __init__(self, encoding: str = "utf-8") -> None:
        self._decoder = codecs.getincrementaldecoder(encoding)(errors="replace")

    def feed_bytes(self, data: bytes) -> str:
        return self._decoder.decode(data, final=False)

    def feed(self, data: bytes) -> List[KeyEvent]:
        return decode(self.feed_bytes(data))

    def reset(self) -> None:
        self._decoder.reset()


__all__ = [
    "Arrow",
    "Control",
    "KeyDecoder",
    "KeyEvent",
    "Printable",
    "decode",
    "CTRL_C",
    "ESC",
]
