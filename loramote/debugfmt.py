"""Debug output helpers: integer formatting, hex dumps and a writer for a text stream."""

from __future__ import annotations

from typing import TextIO

__all__ = [
    "BANNER",
    "DebugWriter",
    "format_int",
    "hex_byte",
    "hex_uint",
    "hex_dump",
]

BANNER = "\r\n============== DEBUG STARTED ==============\r\n"
NEWLINE = "\r\n"

_DIGITS = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ"
_HEX = "0123456789ABCDEF"
_INT_BUFFER = 10


def _to_s32(val: int) -> int:
    val &= 0xFFFFFFFF
    return val - 0x100000000 if val & 0x80000000 else val


def format_int(
    val: int,
    base: int = 10,
    width: int = 0,
    pad: str = " ",
    max_len: int | None = None,
) -> str:
    """Format a 32-bit integer in ``base`` (2..36), left-padded to ``width``.

    Negative values get a leading ``-`` in base 10 and are shown as their unsigned
    32-bit two's complement in other bases. At most ``max_len`` characters are
    produced; padding always leaves room for at least one digit, and truncation
    keeps the leading characters.
    """
    if not 2 <= base <= 36:
        raise ValueError(f"base must be between 2 and 36, got {base}")
    if len(pad) != 1:
        raise ValueError("pad must be a single character")
    if max_len is not None and max_len < 1:
        raise ValueError("max_len must be at least 1")

    val = _to_s32(val)
    negative = base == 10 and val < 0
    v = -val if negative else val & 0xFFFFFFFF

    reversed_digits = []
    while True:
        v, m = divmod(v, base)
        reversed_digits.append(_DIGITS[m])
        if v == 0:
            break
    if negative:
        reversed_digits.append("-")
    body = "".join(reversed(reversed_digits))

    limit = max_len if max_len is not None else len(body) + max(width, 0) + 1
    pad_count = max(0, min(limit - 1, width - len(body)))
    out = pad * pad_count
    room = max(1, limit - len(out))
    return out + body[:room]


def hex_byte(b: int) -> str:
    """Two upper-case hex digits for the low byte of ``b``."""
    b &= 0xFF
    return _HEX[b >> 4] + _HEX[b & 0xF]


def hex_uint(v: int) -> str:
    """Eight upper-case hex digits for a 32-bit value."""
    return "".join(hex_byte(v >> shift) for shift in (24, 16, 8, 0))


def hex_dump(buf: bytes) -> str:
    """Each byte as two hex digits followed by a space, then CR LF."""
    return "".join(hex_byte(b) + " " for b in bytes(buf)) + NEWLINE


class DebugWriter:
    """Writes debug output to a text stream."""

    def __init__(self, stream: TextIO) -> None:
        self.stream = stream

    def char(self, c: str) -> None:
        """Write a single character."""
        if len(c) != 1:
            raise ValueError("expected a single character")
        self.stream.write(c)

    def hex(self, b: int) -> None:
        """Write a byte as two hex digits."""
        self.stream.write(hex_byte(b))

    def buf(self, data: bytes) -> None:
        """Write a hex dump of ``data`` followed by CR LF."""
        self.stream.write(hex_dump(data))

    def uint(self, v: int) -> None:
        """Write a 32-bit value as eight hex digits."""
        self.stream.write(hex_uint(v))

    def val(self, label: str, val: int) -> None:
        """Write a label, a 32-bit hex value and CR LF."""
        self.stream.write(label + hex_uint(val) + NEWLINE)

    def valdec(self, label: str, val: int) -> None:
        """Write a label, a signed decimal value and CR LF."""
        self.stream.write(label + format_int(val, 10, 0, " ", _INT_BUFFER) + NEWLINE)

    def int(self, v: int) -> None:
        """Write a signed decimal value (at most ten characters)."""
        self.stream.write(format_int(v, 10, 0, " ", _INT_BUFFER))

    def str(self, text: str) -> None:
        """Write a string as is."""
        self.stream.write(text)