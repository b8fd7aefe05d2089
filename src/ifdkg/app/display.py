"""Human-readable ceremony formatting."""

from __future__ import annotations

from ifdkg.app.ceremony import CeremonyInfo
from ifdkg.core.ironfish import Keys, Version

# Long packages are cut to this many bytes when printed.
_PREVIEW = 32


def _hex(data: bytes | None) -> str:
    if not data:
        return ""
    if len(data) > _PREVIEW:
        return f"{data[:_PREVIEW].hex().upper()}... ({len(data)} bytes)"
    return data.hex().upper()


def format_version(version: Version) -> str:
    flags = []
    if version.test_mode:
        flags.append("test mode")
    if version.device_locked:
        flags.append("locked")
    suffix = f"  [{', '.join(flags)}]" if flags else ""
    return f"  {version}  target {version.target_id:08X}{suffix}"


def format_keys(keys: Keys) -> str:
    lines = [f"  type           {keys.key_type.name.lower()}"]
    for name in ("public_address", "view_key", "ivk", "ovk", "ak", "nsk"):
        value = getattr(keys, name)
        if value is not None:
            lines.append(f"  {name:<14s} {value.hex().upper()}")
    return "\n".join(lines)


def _format_list(items: list[bytes]) -> str:
    return "\n".join(f"  [{i}] {_hex(item) or '(empty)'}" for i, item in enumerate(items))


def format_ceremony_info(info: CeremonyInfo) -> str:
    """Format everything the session has collected so far."""
    sections: list[str] = []
    if info.version is not None:
        sections.append(f"--- Version ---\n{format_version(info.version)}")
    if info.identity:
        index = "" if info.index is None else f" (slot {info.index})"
        sections.append(f"--- Identity{index} ---\n  {_hex(info.identity)}")
    if info.identities:
        sections.append(
            f"--- Participants ({len(info.identities)}) ---\n{_format_list(info.identities)}"
        )
    for label, packages in (("Round 1", info.round1), ("Round 2", info.round2)):
        if packages is not None:
            sections.append(
                f"--- {label} ---\n"
                f"  secret  {_hex(packages.secret_package)}\n"
                f"  public  {_hex(packages.public_package)}"
            )
    if info.round1_public_packages:
        sections.append(
            f"--- Round 1 public packages ---\n{_format_list(info.round1_public_packages)}"
        )
    if info.round2_public_packages:
        sections.append(
            f"--- Round 2 public packages ---\n{_format_list(info.round2_public_packages)}"
        )
    if info.public_package:
        sections.append(f"--- Public package ---\n  {_hex(info.public_package)}")
    for name, keys in info.keys.items():
        sections.append(f"--- Keys ({name}) ---\n{format_keys(keys)}")
    if info.tx_hash:
        sections.append(f"  TX HASH     {_hex(info.tx_hash)}")
    if info.commitments:
        sections.append(f"  COMMITMENTS {_hex(info.commitments)}")
    if info.nonces:
        sections.append(f"  NONCES      {_hex(info.nonces)}")
    if info.signature:
        sections.append(f"  SIGNATURE   {_hex(info.signature)}")
    if info.backup:
        sections.append(f"  BACKUP      {_hex(info.backup)}")
    return "\n\n".join(sections)
