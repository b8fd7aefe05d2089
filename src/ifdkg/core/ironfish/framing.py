"""Chunked framing for payloads larger than one APDU.

A payload is sent as a context frame (a serialized BIP32 path) followed by
the payload itself cut into ``chunk_size`` slices. Each frame carries a
position marker in P1: INIT for the first, LAST for the final one and ADD
in between. Because the context frame always leads, INIT and LAST never
land on the same frame.
"""

from __future__ import annotations

from ifdkg.core.errors import InvariantViolation
from ifdkg.core.ironfish.consts import PayloadType

HARDENED = 0x80000000
PATH_COMPONENTS = 3


def chunk(payload: bytes, max_chunk_size: int) -> list[bytes]:
    """Split *payload* into ordered slices of at most *max_chunk_size* bytes.

    An empty payload yields one empty chunk so the device still sees a
    complete INIT/LAST sequence.
    """
    if max_chunk_size <= 0:
        raise InvariantViolation(f"chunk size must be positive, got {max_chunk_size}")
    chunks = [
        payload[i : i + max_chunk_size]
        for i in range(0, len(payload), max_chunk_size)
    ]
    return chunks or [b""]


def reassemble(chunks: list[bytes]) -> bytes:
    return b"".join(chunks)


def payload_type(index: int, count: int) -> PayloadType:
    """Position marker for the 1-based frame *index* of *count*."""
    if not 1 <= index <= count:
        raise InvariantViolation(f"frame index {index} outside 1..{count}")
    if index == count:
        return PayloadType.LAST
    if index == 1:
        return PayloadType.INIT
    return PayloadType.ADD


def serialize_path(path: str) -> bytes:
    """Serialize ``m/44'/1338'/0'`` as three little-endian uint32 values.

    ``h`` is accepted as a hardened marker in place of ``'``.
    """
    parts = path.split("/")
    if not parts or parts[0] != "m":
        raise InvariantViolation(f"path must start with 'm': {path!r}")
    components = parts[1:]
    if len(components) != PATH_COMPONENTS:
        raise InvariantViolation(
            f"path must have {PATH_COMPONENTS} components, got {len(components)}"
        )
    buf = bytearray()
    for item in components:
        hardened = item.endswith(("'", "h"))
        digits = item[:-1] if hardened else item
        if not digits.isdigit():
            raise InvariantViolation(f"invalid path component {item!r}")
        value = int(digits)
        if value >= HARDENED:
            raise InvariantViolation(f"path component {item!r} out of range")
        if hardened:
            value |= HARDENED
        buf.extend(value.to_bytes(4, "little"))
    return bytes(buf)


def frames(payload: bytes, chunk_size: int, context: bytes) -> list[tuple[PayloadType, bytes]]:
    """Full frame sequence for *payload*: context frame, then payload chunks."""
    parts = [context, *chunk(payload, chunk_size)]
    count = len(parts)
    return [(payload_type(i, count), part) for i, part in enumerate(parts, 1)]
