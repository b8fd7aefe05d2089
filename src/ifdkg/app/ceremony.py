"""Ceremony scratchpad: everything a participant has produced so far."""

from __future__ import annotations

from dataclasses import dataclass, field

from ifdkg.core.ironfish import Keys, RoundPackages, Version


@dataclass
class CeremonyInfo:
    """Outputs of the commands run in this session.

    Later rounds default to what earlier rounds stored here, so a script
    only has to supply what comes from the other participants.
    """

    version: Version | None = None
    index: int | None = None
    identity: bytes | None = None
    identities: list[bytes] = field(default_factory=list)
    round1: RoundPackages | None = None
    round2: RoundPackages | None = None
    round1_public_packages: list[bytes] = field(default_factory=list)
    round2_public_packages: list[bytes] = field(default_factory=list)
    round3: bytes | None = None
    commitments: bytes | None = None
    nonces: bytes | None = None
    signature: bytes | None = None
    public_package: bytes | None = None
    backup: bytes | None = None
    tx_hash: bytes | None = None
    keys: dict[str, Keys] = field(default_factory=dict)

    @property
    def stage(self) -> str | None:
        """Furthest ceremony step reached, shown in the interactive prompt."""
        for name in ("round3", "round2", "round1", "identity"):
            if getattr(self, name) is not None:
                return name
        return None
