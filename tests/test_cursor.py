"""Tests for the byte cursors."""

import pytest

from ifdkg.core.errors import InvariantViolation, MalformedResponse
from ifdkg.core.ironfish.cursor import Reader, Writer


def test_writer_big_endian():
    w = Writer().u8(0x01).u16(0x0203).raw(b"\x04")
    assert w.to_bytes() == b"\x01\x02\x03\x04"
    assert len(w) == 4


def test_writer_prefixed():
    assert Writer().prefixed(b"abc").to_bytes() == b"\x00\x03abc"


@pytest.mark.parametrize("value", [-1, 256])
def test_writer_u8_range(value):
    with pytest.raises(InvariantViolation):
        Writer().u8(value)


def test_writer_u16_range():
    with pytest.raises(InvariantViolation):
        Writer().u16(0x10000)


def test_writer_prefixed_too_long():
    with pytest.raises(InvariantViolation):
        Writer().prefixed(bytes(0x10000))


def test_writer_fixed_width():
    with pytest.raises(InvariantViolation, match="must be 4 bytes"):
        Writer().fixed(b"abc", 4, "tag")


def test_reader_fields():
    r = Reader(b"\x01\x00\x02\x00\x00\x00\x03\x00\x02hi!")
    assert r.u8() == 1
    assert r.u16() == 2
    assert r.u32() == 3
    assert r.prefixed() == b"hi"
    assert r.remaining == 1
    assert r.rest() == b"!"
    assert r.position == 12


def test_reader_truncated():
    r = Reader(b"\x00\x05abc")
    with pytest.raises(MalformedResponse, match="needs 5 bytes"):
        r.prefixed()
