"""Request layouts for the DKG commands.

Every builder returns one flat buffer; framing into APDUs happens later.
Integers are big-endian. Identities travel as fixed 129-byte slots,
variable blobs as ``[len:2][bytes]``.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence

from ifdkg.core.errors import InvariantViolation
from ifdkg.core.ironfish.consts import IDENTITY_LEN, TX_HASH_LEN
from ifdkg.core.ironfish.cursor import Writer
from ifdkg.core.ironfish.types import Identity, Round3Inputs

IdentityLike = bytes | Identity


def _identity_bytes(identity: IdentityLike) -> bytes:
    if isinstance(identity, Identity):
        return identity.to_bytes()
    return bytes(identity)


def _write_identities(w: Writer, identities: Sequence[IdentityLike]) -> None:
    w.u8(len(identities), "identity count")
    for i, identity in enumerate(identities):
        w.fixed(_identity_bytes(identity), IDENTITY_LEN, f"identity {i}")


def _write_prefixed_list(w: Writer, items: Sequence[bytes], what: str) -> None:
    w.u8(len(items), f"{what} count")
    for i, item in enumerate(items):
        w.prefixed(item, f"{what} {i}")


def uniform_width(packages: Sequence[bytes], what: str = "package") -> int:
    """Common byte width of *packages*, taken from the first element."""
    if not packages:
        raise InvariantViolation(f"at least one {what} is required")
    width = len(packages[0])
    for i, pkg in enumerate(packages):
        if len(pkg) != width:
            raise InvariantViolation(
                f"{what} {i} is {len(pkg)} bytes, expected {width} like {what} 0"
            )
    return width


def serialize_identity_request(index: int) -> bytes:
    return Writer().u8(index, "identity index").to_bytes()


def serialize_round1(
    index: int, identities: Sequence[IdentityLike], min_signers: int
) -> bytes:
    """``[index:1][count:1][identity:129]*count[min_signers:1]``"""
    w = Writer()
    w.u8(index, "participant index")
    _write_identities(w, identities)
    w.u8(min_signers, "min signers")
    return w.to_bytes()


def serialize_round2(
    index: int,
    round1_public_packages: Sequence[bytes],
    round1_secret_package: bytes,
) -> bytes:
    """``[index:1][count:1][width:2][pkg:width]*count[len:2][secret]``"""
    width = uniform_width(round1_public_packages, "round 1 public package")
    w = Writer()
    w.u8(index, "participant index")
    w.u8(len(round1_public_packages), "package count")
    w.u16(width, "package width")
    for pkg in round1_public_packages:
        w.raw(pkg)
    w.prefixed(round1_secret_package, "round 1 secret package")
    return w.to_bytes()


def keep_contributors(round2_public_packages: Sequence[bytes], index: int) -> Callable[[int], bool]:
    """Default round 3 filter: the signer plus every participant that sent it round 2 data."""

    def relevant(position: int) -> bool:
        return position == index or bool(round2_public_packages[position])

    return relevant


def minimize_round3_inputs(
    index: int,
    participants: Sequence[IdentityLike],
    round1_public_packages: Sequence[bytes],
    round2_public_packages: Sequence[bytes],
    gsk_bytes: Sequence[bytes],
    relevant: Callable[[int], bool] | None = None,
) -> Round3Inputs:
    """Reduce the round 3 arrays to the entries the signer needs.

    The four input arrays are positionally aligned, one entry per
    participant; the output keeps that alignment. ``index`` is the signer's
    position in the input arrays and is remapped to its position in the
    reduced arrays.
    """
    count = len(participants)
    lengths = {
        "round 1 public packages": len(round1_public_packages),
        "round 2 public packages": len(round2_public_packages),
        "gsk shares": len(gsk_bytes),
    }
    for what, n in lengths.items():
        if n != count:
            raise InvariantViolation(
                f"{what} has {n} entries, expected {count} (one per participant)"
            )
    if not 0 <= index < count:
        raise InvariantViolation(f"signer index {index} outside 0..{count - 1}")

    if relevant is None:
        relevant = keep_contributors(round2_public_packages, index)
    positions = [pos for pos in range(count) if relevant(pos)]
    if index not in positions:
        raise InvariantViolation(f"round 3 filter dropped the signer at {index}")

    return Round3Inputs(
        index=positions.index(index),
        participants=[_identity_bytes(participants[p]) for p in positions],
        round1_public_packages=[bytes(round1_public_packages[p]) for p in positions],
        round2_public_packages=[bytes(round2_public_packages[p]) for p in positions],
        gsk_bytes=[bytes(gsk_bytes[p]) for p in positions],
        positions=positions,
    )


def serialize_round3_min(inputs: Round3Inputs, round2_secret_package: bytes) -> bytes:
    """Round 3 request built from an already minimized input set."""
    w = Writer()
    w.u8(inputs.index, "participant index")
    _write_identities(w, inputs.participants)
    _write_prefixed_list(w, inputs.round1_public_packages, "round 1 public package")
    _write_prefixed_list(w, inputs.round2_public_packages, "round 2 public package")
    w.prefixed(round2_secret_package, "round 2 secret package")
    _write_prefixed_list(w, inputs.gsk_bytes, "gsk share")
    return w.to_bytes()


def serialize_commitments(identities: Sequence[IdentityLike], tx_hash: bytes) -> bytes:
    """``[count:1][identity:129]*count[tx_hash:32]``, also used for nonces."""
    w = Writer()
    _write_identities(w, identities)
    w.fixed(tx_hash, TX_HASH_LEN, "tx hash")
    return w.to_bytes()


serialize_nonces = serialize_commitments


def serialize_dkg_sign(pk_randomness: bytes, signing_package: bytes, nonces: bytes) -> bytes:
    """``[len:2][pk_randomness][len:2][signing_package][len:2][nonces]``"""
    w = Writer()
    w.prefixed(pk_randomness, "pk randomness")
    w.prefixed(signing_package, "signing package")
    w.prefixed(nonces, "nonces")
    return w.to_bytes()


def gsk_from_hex(values: Sequence[str]) -> list[bytes]:
    """Decode hex gsk shares; each share is half its hex length in bytes."""
    try:
        return [bytes.fromhex(v) for v in values]
    except ValueError as exc:
        raise InvariantViolation(f"invalid gsk hex: {exc}") from exc


def serialize_round_packages(secret_package: bytes, public_package: bytes) -> bytes:
    """``[len:2][secret][len:2][public]``, the layout round 1 and 2 replies use."""
    w = Writer()
    w.prefixed(secret_package, "secret package")
    w.prefixed(public_package, "public package")
    return w.to_bytes()
