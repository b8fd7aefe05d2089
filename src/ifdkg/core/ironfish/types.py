"""Ceremony artifacts exchanged with the device."""

from __future__ import annotations

from dataclasses import dataclass, field

from ifdkg.core.errors import MalformedResponse
from ifdkg.core.ironfish.consts import (
    ED25519_SIGNATURE_LEN,
    IDENTITY_LEN,
    KEY_LENGTH,
    VERSION_LEN,
    KeyType,
)


@dataclass(frozen=True)
class Identity:
    """A participant's public ceremony credential (129 bytes)."""

    version: int
    verification_key: bytes
    encryption_key: bytes
    signature: bytes

    @classmethod
    def from_bytes(cls, data: bytes) -> Identity:
        if len(data) != IDENTITY_LEN:
            raise MalformedResponse(
                f"identity must be {IDENTITY_LEN} bytes, got {len(data)}"
            )
        pos = VERSION_LEN
        verification_key = data[pos : pos + KEY_LENGTH]
        pos += KEY_LENGTH
        encryption_key = data[pos : pos + KEY_LENGTH]
        pos += KEY_LENGTH
        signature = data[pos : pos + ED25519_SIGNATURE_LEN]
        return cls(data[0], bytes(verification_key), bytes(encryption_key), bytes(signature))

    def to_bytes(self) -> bytes:
        return (
            bytes([self.version])
            + self.verification_key
            + self.encryption_key
            + self.signature
        )

    def __repr__(self) -> str:
        return f"Identity(v{self.version}, {self.verification_key.hex()[:16]}...)"


@dataclass
class RoundPackages:
    """Secret and public halves of a round 1 or round 2 output."""

    secret_package: bytes
    public_package: bytes


@dataclass
class Round3Inputs:
    """Index-aligned round 3 material for one signer.

    Position ``i`` of every sequence belongs to the same participant.
    ``positions`` records where each kept entry sat in the caller's arrays.
    """

    index: int
    participants: list[bytes]
    round1_public_packages: list[bytes]
    round2_public_packages: list[bytes]
    gsk_bytes: list[bytes]
    positions: list[int] = field(default_factory=list)


@dataclass
class Version:
    test_mode: bool
    major: int
    minor: int
    patch: int
    device_locked: bool
    target_id: int

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"


@dataclass
class Keys:
    """Keys returned by GET_KEYS / DKG_GET_KEYS; fields depend on the key type."""

    key_type: KeyType
    public_address: bytes | None = None
    view_key: bytes | None = None
    ivk: bytes | None = None
    ovk: bytes | None = None
    ak: bytes | None = None
    nsk: bytes | None = None
