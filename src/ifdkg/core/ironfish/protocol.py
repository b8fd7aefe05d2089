"""Ironfish application operations.

Each method is one ceremony step: it serializes its inputs, runs a single
exchange through the session, and decodes the reply. The protocol class
is standalone: it receives ``agent.transmit`` as a coroutine function and
has no other dependency on the framework.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence

from ifdkg.core.base.agent import Transmit
from ifdkg.core.errors import MalformedResponse
from ifdkg.core.ironfish import deserialize as de
from ifdkg.core.ironfish import serialize as ser
from ifdkg.core.ironfish.consts import (
    P1_ONLY_RETRIEVE,
    P1_SHOW_IN_DEVICE,
    REDJUBJUB_SIGNATURE_LEN,
    KeyType,
)
from ifdkg.core.ironfish.framing import serialize_path
from ifdkg.core.ironfish.generation import CURRENT, Generation
from ifdkg.core.ironfish.session import Session
from ifdkg.core.ironfish.types import Keys, RoundPackages, Version

lg = logging.getLogger(__name__)


def _show(show: bool) -> int:
    return P1_SHOW_IN_DEVICE if show else P1_ONLY_RETRIEVE


class IronfishProtocol:
    """Protocol operations for the Ironfish secure element application."""

    def __init__(self, transmit: Transmit, generation: Generation = CURRENT) -> None:
        self.session = Session(transmit, generation)

    @property
    def generation(self) -> Generation:
        return self.session.generation

    def _context(self, path: str | None) -> bytes:
        return serialize_path(path or self.generation.context_path)

    async def _dkg(self, ins: int, payload: bytes, path: str | None = None) -> bytes:
        return await self.session.exchange(
            self.generation.dkg_cla, ins, payload, context=self._context(path)
        )

    async def _dkg_paged(self, ins: int) -> bytes:
        return await self.session.command(self.generation.dkg_cla, ins, paged=True)

    # -- regular application --

    async def get_version(self) -> Version:
        data = await self.session.command(self.generation.cla, self.generation.ins.GET_VERSION)
        return de.deserialize_version(data)

    async def retrieve_keys(self, path: str, key_type: KeyType, show: bool = False) -> Keys:
        data = await self.session.command(
            self.generation.cla,
            self.generation.ins.GET_KEYS,
            _show(show),
            int(key_type),
            serialize_path(path),
        )
        return de.deserialize_keys(data, key_type)

    async def sign(self, path: str, blob: bytes) -> bytes:
        """Sign a transaction blob with the single-signer key at *path*."""
        data = await self.session.exchange(
            self.generation.cla,
            self.generation.ins.SIGN,
            blob,
            context=serialize_path(path),
            paged=False,
        )
        if len(data) != REDJUBJUB_SIGNATURE_LEN:
            raise MalformedResponse(
                f"signature must be {REDJUBJUB_SIGNATURE_LEN} bytes, got {len(data)}"
            )
        return data

    # -- DKG ceremony --

    async def dkg_get_identity(self, index: int, show: bool = False) -> bytes:
        data = await self.session.command(
            self.generation.dkg_cla,
            self.generation.ins.DKG_IDENTITY,
            _show(show),
            data=ser.serialize_identity_request(index),
        )
        return de.deserialize_identity(data)

    async def dkg_get_identities(self) -> list[bytes]:
        data = await self._dkg_paged(self.generation.ins.DKG_IDENTITIES)
        return de.deserialize_identities(data)

    async def dkg_round1(
        self,
        index: int,
        identities: Sequence[ser.IdentityLike],
        min_signers: int,
        path: str | None = None,
    ) -> RoundPackages:
        payload = ser.serialize_round1(index, identities, min_signers)
        data = await self._dkg(self.generation.ins.DKG_ROUND_1, payload, path)
        return de.deserialize_round1(data)

    async def dkg_round2(
        self,
        index: int,
        round1_public_packages: Sequence[bytes],
        round1_secret_package: bytes,
    ) -> RoundPackages:
        payload = ser.serialize_round2(index, round1_public_packages, round1_secret_package)
        data = await self._dkg(self.generation.ins.DKG_ROUND_2, payload)
        return de.deserialize_round2(data)

    async def dkg_round3_min(
        self,
        index: int,
        participants: Sequence[ser.IdentityLike],
        round1_public_packages: Sequence[bytes],
        round2_public_packages: Sequence[bytes],
        round2_secret_package: bytes,
        gsk_bytes: Sequence[bytes],
        relevant: Callable[[int], bool] | None = None,
    ) -> bytes:
        inputs = ser.minimize_round3_inputs(
            index,
            participants,
            round1_public_packages,
            round2_public_packages,
            gsk_bytes,
            relevant,
        )
        lg.debug(
            "round 3 keeps participants %s of %d", inputs.positions, len(participants)
        )
        payload = ser.serialize_round3_min(inputs, round2_secret_package)
        return await self._dkg(self.generation.ins.DKG_ROUND_3_MIN, payload)

    async def dkg_get_commitments(
        self, identities: Sequence[ser.IdentityLike], tx_hash: bytes
    ) -> bytes:
        payload = ser.serialize_commitments(identities, tx_hash)
        data = await self._dkg(self.generation.ins.DKG_GET_COMMITMENTS, payload)
        return de.deserialize_opaque(data, "commitments")

    async def dkg_get_nonces(
        self, identities: Sequence[ser.IdentityLike], tx_hash: bytes
    ) -> bytes:
        payload = ser.serialize_nonces(identities, tx_hash)
        data = await self._dkg(self.generation.ins.DKG_GET_NONCES, payload)
        return de.deserialize_opaque(data, "nonces")

    async def dkg_sign(
        self, pk_randomness: bytes, signing_package: bytes, nonces: bytes
    ) -> bytes:
        payload = ser.serialize_dkg_sign(pk_randomness, signing_package, nonces)
        data = await self._dkg(self.generation.ins.DKG_SIGN, payload)
        return de.deserialize_signature(data)

    async def dkg_retrieve_keys(self, key_type: KeyType, show: bool = False) -> Keys:
        data = await self.session.command(
            self.generation.dkg_cla,
            self.generation.ins.DKG_GET_KEYS,
            _show(show),
            int(key_type),
        )
        return de.deserialize_keys(data, key_type)

    async def dkg_get_public_package(self) -> bytes:
        data = await self._dkg_paged(self.generation.ins.DKG_GET_PUBLIC_PACKAGE)
        return de.deserialize_opaque(data, "public package")

    async def dkg_backup_keys(self) -> bytes:
        data = await self._dkg_paged(self.generation.ins.DKG_BACKUP_KEYS)
        return de.deserialize_opaque(data, "backup")

    async def dkg_restore_keys(self, encrypted_keys: bytes) -> None:
        await self._dkg(self.generation.ins.DKG_RESTORE_KEYS, encrypted_keys)

    async def review_transaction(self, tx: bytes) -> bytes:
        """Show a transaction for approval; returns its hash."""
        data = await self._dkg(self.generation.ins.REVIEW_TX, tx)
        return de.deserialize_review_tx(data)
