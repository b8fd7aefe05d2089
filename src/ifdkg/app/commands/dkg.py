"""Ceremony commands.

Each command sends one message and stores what the device returned in
``runner.info``. Byte arguments are hex; lists are comma-separated hex,
where an empty element stands for an empty entry (``aa,,bb``). Arguments
left out default to what earlier commands stored.
"""

from __future__ import annotations

import logging

from ifdkg.core.base import Message, Result, SecureElementError
from ifdkg.core.ironfish import (
    BackupKeysMessage,
    CommitmentsMessage,
    DkgKeysMessage,
    DkgSignMessage,
    GetVersionMessage,
    IdentitiesMessage,
    IdentityMessage,
    KeyType,
    NoncesMessage,
    PublicPackageMessage,
    RestoreKeysMessage,
    RetrieveKeysMessage,
    ReviewTxMessage,
    Round1Message,
    Round2Message,
    Round3Message,
    SignMessage,
)
from ifdkg.core.ironfish.serialize import gsk_from_hex
from ifdkg.app.display import format_keys

lg = logging.getLogger(__name__)


def _hex(data: bytes | None) -> str:
    return data.hex().upper() if data else "(empty)"


def _hex_list(value: str) -> list[bytes]:
    return [bytes.fromhex(item) for item in value.split(",")]


def _flag(value: str) -> bool:
    return value.lower() in ("true", "yes", "1")


def _call(runner, label: str, message: Message) -> Result | None:
    """Send *message*; log and return None when the device refuses it."""
    try:
        return runner.call(message)
    except SecureElementError as exc:
        lg.error("%s failed: %s", label, exc)
        return None


def _key_type(value: str) -> KeyType | None:
    try:
        return KeyType[value.upper()]
    except KeyError:
        lg.error(
            "unknown key type '%s' (one of %s)",
            value, ", ".join(k.name.lower() for k in KeyType),
        )
        return None


def _index(runner, value: str) -> int | None:
    if value:
        return int(value, 0)
    if runner.info.index is None:
        lg.error("no participant index: pass index= or run 'identity' first")
    return runner.info.index


# --- Regular application ---


def cmd_version(runner) -> bool:
    """Read the application version."""
    result = _call(runner, "GET_VERSION", GetVersionMessage())
    if result is None:
        return False
    runner.info.version = result.version
    lg.info(
        "version: %s%s%s",
        result.version,
        " (test mode)" if result.version.test_mode else "",
        " (locked)" if result.version.device_locked else "",
    )
    return True


def cmd_keys(runner, *, kind: str = "public_address", show: str = "false", path: str = "") -> bool:
    """Retrieve single-signer keys (kind=public_address|view_key|proof_generation_key)."""
    key_type = _key_type(kind)
    if key_type is None:
        return False
    msg = RetrieveKeysMessage(path=path or runner.path, key_type=key_type, show=_flag(show))
    result = _call(runner, "GET_KEYS", msg)
    if result is None:
        return False
    runner.info.keys[key_type.name.lower()] = result.keys
    lg.info("keys:\n%s", format_keys(result.keys))
    return True


def cmd_sign(runner, *, blob: str, path: str = "") -> bool:
    """Sign a transaction blob with the single-signer key."""
    result = _call(runner, "SIGN", SignMessage(path=path or runner.path, blob=bytes.fromhex(blob)))
    if result is None:
        return False
    runner.info.signature = result.signature
    lg.info("signature: %s", _hex(result.signature))
    return True


# --- Identities ---


def cmd_identity(runner, *, index: str = "0", show: str = "false") -> bool:
    """Fetch this device's identity for participant slot *index*."""
    index = int(index, 0)
    result = _call(runner, "DKG_IDENTITY", IdentityMessage(index=index, show=_flag(show)))
    if result is None:
        return False
    runner.info.index = index
    runner.info.identity = result.identity
    lg.info("identity[%d]: %s", index, _hex(result.identity))
    return True


def cmd_add_identity(runner, *, identity: str = "") -> bool:
    """Append a participant identity (defaults to this device's own)."""
    value = bytes.fromhex(identity) if identity else runner.info.identity
    if not value:
        lg.error("no identity to add: pass identity= or run 'identity' first")
        return False
    runner.info.identities.append(value)
    lg.info("participants: %d", len(runner.info.identities))
    return True


def cmd_identities(runner) -> bool:
    """Fetch the participant identities stored by a finished ceremony."""
    result = _call(runner, "DKG_IDENTITIES", IdentitiesMessage())
    if result is None:
        return False
    runner.info.identities = list(result.identities)
    for i, identity in enumerate(result.identities):
        lg.info("identity[%d]: %s", i, _hex(identity))
    return True


# --- Rounds ---


def cmd_round1(runner, *, index: str = "", identities: str = "", min_signers: str = "2") -> bool:
    """Run DKG round 1 over the participant identities."""
    idx = _index(runner, index)
    if idx is None:
        return False
    ids = _hex_list(identities) if identities else runner.info.identities
    msg = Round1Message(index=idx, identities=ids, min_signers=int(min_signers, 0))
    result = _call(runner, "DKG_ROUND_1", msg)
    if result is None:
        return False
    runner.info.round1 = result.packages
    runner.info.identities = list(ids)
    lg.info("round1 secret: %s", _hex(result.packages.secret_package))
    lg.info("round1 public: %s", _hex(result.packages.public_package))
    return True


def cmd_round2(runner, *, index: str = "", packages: str = "", secret: str = "") -> bool:
    """Run DKG round 2 over every participant's round 1 public package."""
    idx = _index(runner, index)
    if idx is None:
        return False
    if packages:
        runner.info.round1_public_packages = _hex_list(packages)
    if secret:
        secret_package = bytes.fromhex(secret)
    elif runner.info.round1 is not None:
        secret_package = runner.info.round1.secret_package
    else:
        lg.error("no round 1 secret package: pass secret= or run 'round1' first")
        return False
    msg = Round2Message(
        index=idx,
        round1_public_packages=runner.info.round1_public_packages,
        round1_secret_package=secret_package,
    )
    result = _call(runner, "DKG_ROUND_2", msg)
    if result is None:
        return False
    runner.info.round2 = result.packages
    lg.info("round2 secret: %s", _hex(result.packages.secret_package))
    lg.info("round2 public: %s", _hex(result.packages.public_package))
    return True


def cmd_round3(
    runner,
    *,
    gsk: str,
    index: str = "",
    participants: str = "",
    round1: str = "",
    round2: str = "",
    secret: str = "",
) -> bool:
    """Run DKG round 3 and create the group account on the device."""
    idx = _index(runner, index)
    if idx is None:
        return False
    info = runner.info
    if round1:
        info.round1_public_packages = _hex_list(round1)
    if round2:
        info.round2_public_packages = _hex_list(round2)
    if secret:
        secret_package = bytes.fromhex(secret)
    elif info.round2 is not None:
        secret_package = info.round2.secret_package
    else:
        lg.error("no round 2 secret package: pass secret= or run 'round2' first")
        return False
    msg = Round3Message(
        index=idx,
        participants=_hex_list(participants) if participants else info.identities,
        round1_public_packages=info.round1_public_packages,
        round2_public_packages=info.round2_public_packages,
        round2_secret_package=secret_package,
        gsk_bytes=gsk_from_hex(gsk.split(",")),
    )
    result = _call(runner, "DKG_ROUND_3_MIN", msg)
    if result is None:
        return False
    info.round3 = result.data
    lg.info("round3 complete")
    return True


# --- Signing ---


def cmd_commitments(runner, *, tx_hash: str = "", identities: str = "") -> bool:
    """Get this device's signing commitment for a transaction hash."""
    if tx_hash:
        runner.info.tx_hash = bytes.fromhex(tx_hash)
    if runner.info.tx_hash is None:
        lg.error("no transaction hash: pass tx_hash= or run 'review_tx' first")
        return False
    ids = _hex_list(identities) if identities else runner.info.identities
    result = _call(runner, "DKG_GET_COMMITMENTS", CommitmentsMessage(ids, runner.info.tx_hash))
    if result is None:
        return False
    runner.info.commitments = result.commitments
    lg.info("commitments: %s", _hex(result.commitments))
    return True


def cmd_nonces(runner, *, tx_hash: str = "", identities: str = "") -> bool:
    """Get this device's signing nonces for a transaction hash."""
    if tx_hash:
        runner.info.tx_hash = bytes.fromhex(tx_hash)
    if runner.info.tx_hash is None:
        lg.error("no transaction hash: pass tx_hash= or run 'review_tx' first")
        return False
    ids = _hex_list(identities) if identities else runner.info.identities
    result = _call(runner, "DKG_GET_NONCES", NoncesMessage(ids, runner.info.tx_hash))
    if result is None:
        return False
    runner.info.nonces = result.nonces
    lg.info("nonces: %s", _hex(result.nonces))
    return True


def cmd_dkg_sign(runner, *, randomness: str, signing_package: str, nonces: str = "") -> bool:
    """Produce this device's signature share."""
    if nonces:
        nonce_bytes = bytes.fromhex(nonces)
    elif runner.info.nonces is not None:
        nonce_bytes = runner.info.nonces
    else:
        lg.error("no nonces: pass nonces= or run 'nonces' first")
        return False
    msg = DkgSignMessage(
        pk_randomness=bytes.fromhex(randomness),
        signing_package=bytes.fromhex(signing_package),
        nonces=nonce_bytes,
    )
    result = _call(runner, "DKG_SIGN", msg)
    if result is None:
        return False
    runner.info.signature = result.signature
    lg.info("signature share: %s", _hex(result.signature))
    return True


def cmd_review_tx(runner, *, tx: str) -> bool:
    """Show a transaction on the device for approval."""
    result = _call(runner, "REVIEW_TX", ReviewTxMessage(tx=bytes.fromhex(tx)))
    if result is None:
        return False
    runner.info.tx_hash = result.hash
    lg.info("tx hash: %s", _hex(result.hash))
    return True


# --- Group account ---


def cmd_dkg_keys(runner, *, kind: str = "public_address", show: str = "false") -> bool:
    """Retrieve the group account keys created by the ceremony (kind= as for keys)."""
    key_type = _key_type(kind)
    if key_type is None:
        return False
    result = _call(runner, "DKG_GET_KEYS", DkgKeysMessage(key_type=key_type, show=_flag(show)))
    if result is None:
        return False
    runner.info.keys[f"dkg_{key_type.name.lower()}"] = result.keys
    lg.info("group keys:\n%s", format_keys(result.keys))
    return True


def cmd_public_package(runner) -> bool:
    """Fetch the group public key package."""
    result = _call(runner, "DKG_GET_PUBLIC_PACKAGE", PublicPackageMessage())
    if result is None:
        return False
    runner.info.public_package = result.public_package
    lg.info("public package: %s", _hex(result.public_package))
    return True


def cmd_backup(runner) -> bool:
    """Export the encrypted ceremony keys."""
    result = _call(runner, "DKG_BACKUP_KEYS", BackupKeysMessage())
    if result is None:
        return False
    runner.info.backup = result.encrypted_keys
    lg.info("backup (%d bytes): %s", len(result.encrypted_keys), _hex(result.encrypted_keys))
    return True


def cmd_restore(runner, *, data: str = "") -> bool:
    """Restore encrypted ceremony keys (defaults to the last backup)."""
    blob = bytes.fromhex(data) if data else runner.info.backup
    if not blob:
        lg.error("nothing to restore: pass data= or run 'backup' first")
        return False
    if _call(runner, "DKG_RESTORE_KEYS", RestoreKeysMessage(encrypted_keys=blob)) is None:
        return False
    lg.info("restored %d bytes", len(blob))
    return True
