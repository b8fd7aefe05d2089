"""Reply layouts for the DKG and regular commands."""

from __future__ import annotations

from ifdkg.core.errors import MalformedResponse
from ifdkg.core.ironfish.consts import (
    IDENTITY_LEN,
    KEY_LENGTH,
    REDJUBJUB_SIGNATURE_LEN,
    TX_HASH_LEN,
    KeyType,
)
from ifdkg.core.ironfish.cursor import Reader
from ifdkg.core.ironfish.types import Identity, Keys, RoundPackages, Version

_SHORT_VERSION_LEN = 9
_LONG_VERSION_LEN = 12


def _require(data: bytes | None, what: str) -> bytes:
    if data is None:
        raise MalformedResponse(f"missing {what} response")
    return data


def deserialize_round_packages(data: bytes | None) -> RoundPackages:
    """``[len:2][secret][len:2][public]``"""
    r = Reader(_require(data, "round"))
    secret = r.prefixed("secret package")
    public = r.prefixed("public package")
    return RoundPackages(secret_package=secret, public_package=public)


deserialize_round1 = deserialize_round_packages
deserialize_round2 = deserialize_round_packages


def deserialize_identity(data: bytes | None) -> bytes:
    data = _require(data, "identity")
    if len(data) != IDENTITY_LEN:
        raise MalformedResponse(f"identity must be {IDENTITY_LEN} bytes, got {len(data)}")
    return bytes(data)


def deserialize_identities(data: bytes | None) -> list[bytes]:
    """Split a concatenation of fixed-width identities."""
    data = _require(data, "identities")
    if len(data) % IDENTITY_LEN:
        raise MalformedResponse(
            f"identity list of {len(data)} bytes is not a multiple of {IDENTITY_LEN}"
        )
    return [
        bytes(data[i : i + IDENTITY_LEN]) for i in range(0, len(data), IDENTITY_LEN)
    ]


def parse_identities(data: bytes | None) -> list[Identity]:
    return [Identity.from_bytes(item) for item in deserialize_identities(data)]


def deserialize_signature(data: bytes | None) -> bytes:
    """Bare 64-byte signature, or one wrapped as ``[len:2][signature]``."""
    data = _require(data, "signature")
    if len(data) == REDJUBJUB_SIGNATURE_LEN:
        return bytes(data)
    r = Reader(data)
    signature = r.prefixed("signature")
    if r.remaining:
        raise MalformedResponse(f"{r.remaining} trailing bytes after signature")
    return signature


def deserialize_opaque(data: bytes | None, what: str) -> bytes:
    return bytes(_require(data, what))


def deserialize_review_tx(data: bytes | None) -> bytes:
    """Transaction hash echoed after review."""
    return Reader(_require(data, "review")).take(TX_HASH_LEN, "tx hash")


def deserialize_version(data: bytes | None) -> Version:
    data = _require(data, "version")
    r = Reader(data)
    test_mode = r.u8("test mode") != 0
    if len(data) >= _LONG_VERSION_LEN:
        major, minor, patch = r.u16("major"), r.u16("minor"), r.u16("patch")
    elif len(data) == _SHORT_VERSION_LEN:
        major, minor, patch = r.u8("major"), r.u8("minor"), r.u8("patch")
    else:
        raise MalformedResponse(f"version response of {len(data)} bytes")
    locked = r.u8("device locked") == 1
    target_id = r.u32("target id")
    return Version(test_mode, major, minor, patch, locked, target_id)


def deserialize_keys(data: bytes | None, key_type: KeyType) -> Keys:
    try:
        key_type = KeyType(key_type)
    except ValueError:
        raise MalformedResponse(f"unknown key type {key_type}") from None
    r = Reader(_require(data, "keys"))
    if key_type == KeyType.PUBLIC_ADDRESS:
        return Keys(key_type, public_address=r.take(KEY_LENGTH, "public address"))
    if key_type == KeyType.VIEW_KEY:
        return Keys(
            key_type,
            view_key=r.take(2 * KEY_LENGTH, "view key"),
            ivk=r.take(KEY_LENGTH, "ivk"),
            ovk=r.take(KEY_LENGTH, "ovk"),
        )
    return Keys(
        key_type,
        ak=r.take(KEY_LENGTH, "ak"),
        nsk=r.take(KEY_LENGTH, "nsk"),
    )
