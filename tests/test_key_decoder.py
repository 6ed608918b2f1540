from __future__ import annotations

from vim_prompt.keys import Arrow, Control, KeyDecoder, Printable, decode
from vim_prompt.keys.decoder import BACKSPACE, CTRL_C, ENTER, ESC


def test_printable_run_stays_whole() -> None:
    assert decode("hello 世界") == [Printable("hello 世界")]


def test_arrow_sequences() -> None:
    assert decode("\x1b[A\x1b[B\x1b[C\x1b[D") == [
        Arrow("up"),
        Arrow("down"),
        Arrow("right"),
        Arrow("left"),
    ]
    assert decode("\x1bOA") == [Arrow("up")]


def test_lone_escape_and_controls() -> None:
    events = decode("\x1bab\r\x7f\x03")

    assert events == [
        Control(ESC),
        Printable("ab"),
        Control(ENTER),
        Control(BACKSPACE),
        Control(CTRL_C),
    ]


def test_crlf_collapses_to_one_enter() -> None:
    assert decode("a\r\nb") == [Printable("a"), Control(ENTER), Printable("b")]


def test_unknown_csi_sequences_are_dropped() -> None:
    assert decode("x\x1b[3~y\x1b[1;5Cz") == [
        Printable("x"),
        Printable("y"),
        Printable("z"),
    ]


def test_tab_is_printable() -> None:
    assert decode("\tx") == [Printable("\tx")]


def test_tokens() -> None:
    assert Printable("a").token == "a"
    assert Arrow("left").token == "LEFT"
    assert Control(ESC).token == "ESC"
    assert Control(ENTER).token == "ENTER"
    assert Control(0x0A).token == "ENTER"
    assert Control(BACKSPACE).token == "BACKSPACE"
    assert Control(0x08).token == "BACKSPACE"
    assert Control(0x12).token == "CTRL+R"


def test_incremental_decoder_holds_partial_utf8() -> None:
    decoder = KeyDecoder()
    encoded = "é".encode("utf-8")

    assert decoder.feed(encoded[:1]) == []
    assert decoder.feed(encoded[1:]) == [Printable("é")]


def test_escape_then_capital_o_is_not_swallowed() -> None:
    assert decode("\x1bOa") == [Control(ESC), Printable("Oa")]
    assert decode("\x1bOAx") == [Arrow("up"), Printable("x")]
