"""Tests for command and reply frames."""

import pytest

from ifdkg.core.smartcard import APDU, Response


def test_apdu_always_has_lc():
    assert APDU(0x63, 0x1B, 0x01, 0x00).to_bytes() == b"\x63\x1B\x01\x00\x00"


def test_apdu_with_data():
    assert APDU(0x59, 0x01, 0x00, 0x02, b"\xAB\xCD").to_bytes() == b"\x59\x01\x00\x02\x02\xAB\xCD"


def test_apdu_data_too_long():
    with pytest.raises(ValueError):
        APDU(0x59, 0x02, 0x00, 0x00, bytes(256)).to_bytes()


def test_response_from_bytes():
    resp = Response.from_bytes(b"\x01\x02\x90\x00")
    assert resp.data == b"\x01\x02"
    assert resp.sw == 0x9000
    assert resp.success
    assert len(resp) == 4
    assert resp.to_bytes() == b"\x01\x02\x90\x00"


def test_response_error():
    resp = Response.from_bytes(b"\xB0\x04")
    assert resp.sw == 0xB004
    assert not resp.success
    assert repr(resp) == "SW=B004"


def test_response_too_short():
    with pytest.raises(ValueError):
        Response.from_bytes(b"\x90")
