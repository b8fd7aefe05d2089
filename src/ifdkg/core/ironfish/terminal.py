"""Ironfish terminal.

Extends the base Terminal directly: the secure element has a fully
proprietary command set, so there is no ISO 7816 SELECT/READ support.
Each @handles coroutine receives a typed Message and returns a typed
Result, translating between the app-layer vocabulary and the protocol
operations.
"""

from __future__ import annotations

from ifdkg.core.base import Agent, Terminal
from ifdkg.core.base.terminal import handles
from ifdkg.core.ironfish.generation import CURRENT, Generation
from ifdkg.core.ironfish.messages import (
    BackupKeysMessage,
    BackupKeysResult,
    CommitmentsMessage,
    CommitmentsResult,
    DkgKeysMessage,
    DkgKeysResult,
    DkgSignMessage,
    DkgSignResult,
    GetVersionMessage,
    GetVersionResult,
    IdentitiesMessage,
    IdentitiesResult,
    IdentityMessage,
    IdentityResult,
    NoncesMessage,
    NoncesResult,
    PublicPackageMessage,
    PublicPackageResult,
    RawAPDUMessage,
    RawAPDUResult,
    RestoreKeysMessage,
    RestoreKeysResult,
    RetrieveKeysMessage,
    RetrieveKeysResult,
    ReviewTxMessage,
    ReviewTxResult,
    Round1Message,
    Round1Result,
    Round2Message,
    Round2Result,
    Round3Message,
    Round3Result,
    SignMessage,
    SignResult,
)
from ifdkg.core.ironfish.protocol import IronfishProtocol
from ifdkg.core.smartcard import APDU


class IronfishTerminal(Terminal):
    """Terminal for the Ironfish application."""

    def __init__(self, agent: Agent, generation: Generation = CURRENT) -> None:
        super().__init__(agent)
        self._proto = IronfishProtocol(agent.transmit, generation)

    @property
    def protocol(self) -> IronfishProtocol:
        return self._proto

    @handles(GetVersionMessage)
    async def _get_version(self, message: GetVersionMessage) -> GetVersionResult:
        return GetVersionResult(version=await self._proto.get_version())

    @handles(RetrieveKeysMessage)
    async def _retrieve_keys(self, message: RetrieveKeysMessage) -> RetrieveKeysResult:
        keys = await self._proto.retrieve_keys(message.path, message.key_type, message.show)
        return RetrieveKeysResult(keys=keys)

    @handles(SignMessage)
    async def _sign(self, message: SignMessage) -> SignResult:
        return SignResult(signature=await self._proto.sign(message.path, message.blob))

    @handles(IdentityMessage)
    async def _identity(self, message: IdentityMessage) -> IdentityResult:
        identity = await self._proto.dkg_get_identity(message.index, message.show)
        return IdentityResult(identity=identity)

    @handles(IdentitiesMessage)
    async def _identities(self, message: IdentitiesMessage) -> IdentitiesResult:
        return IdentitiesResult(identities=await self._proto.dkg_get_identities())

    @handles(Round1Message)
    async def _round1(self, message: Round1Message) -> Round1Result:
        packages = await self._proto.dkg_round1(
            message.index, message.identities, message.min_signers
        )
        return Round1Result(packages=packages)

    @handles(Round2Message)
    async def _round2(self, message: Round2Message) -> Round2Result:
        packages = await self._proto.dkg_round2(
            message.index, message.round1_public_packages, message.round1_secret_package
        )
        return Round2Result(packages=packages)

    @handles(Round3Message)
    async def _round3(self, message: Round3Message) -> Round3Result:
        data = await self._proto.dkg_round3_min(
            message.index,
            message.participants,
            message.round1_public_packages,
            message.round2_public_packages,
            message.round2_secret_package,
            message.gsk_bytes,
            message.relevant,
        )
        return Round3Result(data=data)

    @handles(CommitmentsMessage)
    async def _commitments(self, message: CommitmentsMessage) -> CommitmentsResult:
        commitments = await self._proto.dkg_get_commitments(message.identities, message.tx_hash)
        return CommitmentsResult(commitments=commitments)

    @handles(NoncesMessage)
    async def _nonces(self, message: NoncesMessage) -> NoncesResult:
        nonces = await self._proto.dkg_get_nonces(message.identities, message.tx_hash)
        return NoncesResult(nonces=nonces)

    @handles(DkgSignMessage)
    async def _dkg_sign(self, message: DkgSignMessage) -> DkgSignResult:
        signature = await self._proto.dkg_sign(
            message.pk_randomness, message.signing_package, message.nonces
        )
        return DkgSignResult(signature=signature)

    @handles(DkgKeysMessage)
    async def _dkg_keys(self, message: DkgKeysMessage) -> DkgKeysResult:
        keys = await self._proto.dkg_retrieve_keys(message.key_type, message.show)
        return DkgKeysResult(keys=keys)

    @handles(PublicPackageMessage)
    async def _public_package(self, message: PublicPackageMessage) -> PublicPackageResult:
        return PublicPackageResult(public_package=await self._proto.dkg_get_public_package())

    @handles(BackupKeysMessage)
    async def _backup_keys(self, message: BackupKeysMessage) -> BackupKeysResult:
        return BackupKeysResult(encrypted_keys=await self._proto.dkg_backup_keys())

    @handles(RestoreKeysMessage)
    async def _restore_keys(self, message: RestoreKeysMessage) -> RestoreKeysResult:
        await self._proto.dkg_restore_keys(message.encrypted_keys)
        return RestoreKeysResult()

    @handles(ReviewTxMessage)
    async def _review_tx(self, message: ReviewTxMessage) -> ReviewTxResult:
        return ReviewTxResult(hash=await self._proto.review_transaction(message.tx))

    @handles(RawAPDUMessage)
    async def _raw_apdu(self, message: RawAPDUMessage) -> RawAPDUResult:
        resp = await self._agent.transmit(
            APDU(message.cla, message.ins, message.p1, message.p2, message.data)
        )
        return RawAPDUResult(data=resp.data, sw=resp.sw)
