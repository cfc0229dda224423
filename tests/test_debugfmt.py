import io

import pytest

from loramote.debugfmt import (
    BANNER,
    DebugWriter,
    format_int,
    hex_byte,
    hex_dump,
    hex_uint,
)


@pytest.mark.parametrize("n", [0, 1, 9, 10, 12345, -1, -987654, 2147483647])
def test_format_int_decimal_matches_str(n):
    assert format_int(n) == str(n)


@pytest.mark.parametrize("base", [2, 8, 16])
@pytest.mark.parametrize("n", [0, 7, 255, 4096, 123456])
def test_format_int_other_bases(base, n):
    spec = {2: "b", 8: "o", 16: "X"}[base]
    assert format_int(n, base) == format(n, spec)


def test_format_int_base36_roundtrip():
    assert int(format_int(987654321, 36), 36) == 987654321


def test_format_int_negative_hex_is_twos_complement():
    assert format_int(-1, 16) == "FFFFFFFF"


def test_format_int_width_padding():
    assert format_int(5, 10, 4, "0") == str(5).rjust(4, "0")
    assert format_int(-42, 10, 6, " ") == str(-42).rjust(6)


def test_format_int_truncation_keeps_leading_chars():
    out = format_int(123456, 10, 0, " ", 3)
    assert len(out) == 3
    assert "123456".startswith(out)


def test_format_int_padding_leaves_room_for_a_digit():
    out = format_int(7, 10, 10, "0", 4)
    assert len(out) == 4
    assert out.endswith("7")


@pytest.mark.parametrize("base", [0, 1, 37])
def test_format_int_rejects_bad_base(base):
    with pytest.raises(ValueError):
        format_int(1, base)


def test_format_int_rejects_bad_pad_and_max():
    with pytest.raises(ValueError):
        format_int(1, 10, 2, "ab")
    with pytest.raises(ValueError):
        format_int(1, 10, 0, " ", 0)


def test_hex_helpers():
    assert hex_byte(0xAB) == "AB"
    assert hex_byte(0x1FF) == "FF"
    assert hex_uint(0x12345678) == "12345678"
    assert hex_dump(b"\x01\xab") == "01 AB \r\n"
    assert hex_dump(b"") == "\r\n"


def test_writer_outputs():
    stream = io.StringIO()
    w = DebugWriter(stream)
    w.str(BANNER)
    w.char("x")
    w.hex(0x0F)
    w.uint(0xDEADBEEF)
    w.int(-25)
    w.buf(b"\x00\x10")
    assert stream.getvalue() == BANNER + "x" + "0F" + "DEADBEEF" + "-25" + "00 10 \r\n"


def test_writer_val_and_valdec():
    stream = io.StringIO()
    w = DebugWriter(stream)
    w.val("addr=", 0x26011234)
    w.valdec("rssi=", -110)
    assert stream.getvalue() == "addr=26011234\r\nrssi=-110\r\n"


def test_writer_int_limited_to_ten_chars():
    stream = io.StringIO()
    DebugWriter(stream).int(-2147483648)
    assert stream.getvalue() == "-214748364"


def test_writer_char_rejects_strings():
    with pytest.raises(ValueError):
        DebugWriter(io.StringIO()).char("ab")