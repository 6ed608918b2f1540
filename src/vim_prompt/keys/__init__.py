"""Terminal key decoding."""

from .decoder import Arrow, Control, KeyDecoder, KeyEvent, Printable, decode

__all__ = ["Arrow", "Control", "KeyDecoder", "KeyEvent", "Printable", "decode"]
