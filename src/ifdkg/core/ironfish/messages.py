"""Ironfish messages and results.

Each operation has a Message/Result pair. The Message carries the input
parameters; the Result carries the decoded output. Device failures are
raised, not returned, so results only describe the success case.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field

from ifdkg.core.base import Message, Result
from ifdkg.core.ironfish.consts import KeyType
from ifdkg.core.ironfish.types import Keys, RoundPackages, Version


@dataclass
class GetVersionMessage(Message):
    """Request the application version."""


@dataclass
class GetVersionResult(Result):
    version: Version


@dataclass
class RetrieveKeysMessage(Message):
    """Single-signer keys derived at *path*."""

    path: str
    key_type: KeyType = KeyType.PUBLIC_ADDRESS
    show: bool = False


@dataclass
class RetrieveKeysResult(Result):
    keys: Keys


@dataclass
class SignMessage(Message):
    """Sign a transaction blob with the single-signer key at *path*."""

    path: str
    blob: bytes


@dataclass
class SignResult(Result):
    signature: bytes


@dataclass
class IdentityMessage(Message):
    """Fetch the device identity for participant slot *index*."""

    index: int
    show: bool = False


@dataclass
class IdentityResult(Result):
    identity: bytes


@dataclass
class IdentitiesMessage(Message):
    """Fetch the identities stored by a finished ceremony."""


@dataclass
class IdentitiesResult(Result):
    identities: list[bytes]


@dataclass
class Round1Message(Message):
    index: int
    identities: list[bytes]
    min_signers: int


@dataclass
class Round1Result(Result):
    packages: RoundPackages


@dataclass
class Round2Message(Message):
    index: int
    round1_public_packages: list[bytes]
    round1_secret_package: bytes


@dataclass
class Round2Result(Result):
    packages: RoundPackages


@dataclass
class Round3Message(Message):
    index: int
    participants: list[bytes]
    round1_public_packages: list[bytes]
    round2_public_packages: list[bytes]
    round2_secret_package: bytes
    gsk_bytes: list[bytes]
    relevant: Callable[[int], bool] | None = field(default=None, repr=False)


@dataclass
class Round3Result(Result):
    data: bytes


@dataclass
class CommitmentsMessage(Message):
    identities: list[bytes]
    tx_hash: bytes


@dataclass
class CommitmentsResult(Result):
    commitments: bytes


@dataclass
class NoncesMessage(Message):
    identities: list[bytes]
    tx_hash: bytes


@dataclass
class NoncesResult(Result):
    nonces: bytes


@dataclass
class DkgSignMessage(Message):
    pk_randomness: bytes
    signing_package: bytes
    nonces: bytes


@dataclass
class DkgSignResult(Result):
    signature: bytes


@dataclass
class DkgKeysMessage(Message):
    """Keys of the group account created by the ceremony."""

    key_type: KeyType = KeyType.PUBLIC_ADDRESS
    show: bool = False


@dataclass
class DkgKeysResult(Result):
    keys: Keys


@dataclass
class PublicPackageMessage(Message):
    """Fetch the group public key package."""


@dataclass
class PublicPackageResult(Result):
    public_package: bytes


@dataclass
class BackupKeysMessage(Message):
    """Export the encrypted ceremony keys."""


@dataclass
class BackupKeysResult(Result):
    encrypted_keys: bytes


@dataclass
class RestoreKeysMessage(Message):
    encrypted_keys: bytes


@dataclass
class RestoreKeysResult(Result):
    pass


@dataclass
class ReviewTxMessage(Message):
    tx: bytes


@dataclass
class ReviewTxResult(Result):
    hash: bytes


@dataclass
class RawAPDUMessage(Message):
    """Send one unframed command; the status word is returned, not raised."""

    cla: int
    ins: int
    p1: int = 0x00
    p2: int = 0x00
    data: bytes = b""


@dataclass
class RawAPDUResult(Result):
    data: bytes
    sw: int
