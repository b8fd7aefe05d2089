"""Tests for payload chunking and frame sequencing."""

import pytest

from ifdkg.core.errors import InvariantViolation
from ifdkg.core.ironfish.consts import CHUNK_SIZE, DUMMY_PATH, PayloadType
from ifdkg.core.ironfish.framing import (
    HARDENED,
    chunk,
    frames,
    payload_type,
    reassemble,
    serialize_path,
)


def test_chunk_sizes():
    """A 600-byte payload splits into 250 + 250 + 100."""
    parts = chunk(bytes(range(256)) * 2 + bytes(88), CHUNK_SIZE)
    assert [len(p) for p in parts] == [250, 250, 100]


def test_chunk_exact_multiple():
    parts = chunk(b"\xAA" * 500, 250)
    assert [len(p) for p in parts] == [250, 250]


def test_chunk_reassembles_in_order():
    payload = bytes(i % 251 for i in range(1234))
    parts = chunk(payload, 100)
    assert all(len(p) <= 100 for p in parts)
    assert reassemble(parts) == payload


def test_chunk_is_deterministic():
    payload = bytes(range(200)) * 3
    assert chunk(payload, 64) == chunk(payload, 64)


def test_chunk_empty_payload():
    """An empty payload still produces one (empty) chunk."""
    assert chunk(b"", 250) == [b""]


@pytest.mark.parametrize("size", [0, -1])
def test_chunk_rejects_non_positive_size(size):
    with pytest.raises(InvariantViolation):
        chunk(b"abc", size)


def test_payload_type_markers():
    assert payload_type(1, 1) is PayloadType.LAST
    assert payload_type(1, 3) is PayloadType.INIT
    assert payload_type(2, 3) is PayloadType.ADD
    assert payload_type(3, 3) is PayloadType.LAST


@pytest.mark.parametrize("index,count", [(0, 3), (4, 3)])
def test_payload_type_out_of_range(index, count):
    with pytest.raises(InvariantViolation):
        payload_type(index, count)


def test_frames_context_leads():
    """The context frame is INIT, payload chunks follow, the final one is LAST."""
    context = serialize_path(DUMMY_PATH)
    seq = frames(b"\x01" * 300, 250, context)
    assert [t for t, _ in seq] == [PayloadType.INIT, PayloadType.ADD, PayloadType.LAST]
    assert seq[0][1] == context
    assert reassemble([part for _, part in seq[1:]]) == b"\x01" * 300


def test_frames_empty_payload_keeps_init_and_last_apart():
    seq = frames(b"", 250, b"ctx")
    assert seq == [(PayloadType.INIT, b"ctx"), (PayloadType.LAST, b"")]


def test_serialize_path_dummy():
    """Three little-endian uint32 values with the hardened bit where marked."""
    expected = (
        (44 | HARDENED).to_bytes(4, "little")
        + (1338 | HARDENED).to_bytes(4, "little")
        + (0).to_bytes(4, "little")
    )
    assert serialize_path("m/44'/1338'/0") == expected


def test_serialize_path_h_suffix():
    assert serialize_path("m/44h/1338h/0h") == serialize_path("m/44'/1338'/0'")


@pytest.mark.parametrize(
    "path",
    ["44'/1338'/0", "m/44'/1338'", "m/44'/1338'/0/1", "m/44'/x/0", "m/44'/1338'/2147483648"],
)
def test_serialize_path_rejects(path):
    with pytest.raises(InvariantViolation):
        serialize_path(path)
