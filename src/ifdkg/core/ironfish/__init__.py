from ifdkg.core.ironfish.consts import IDENTITY_LEN, TX_HASH_LEN, KeyType, PayloadType
from ifdkg.core.ironfish.errors import StatusCode, describe, status_error
from ifdkg.core.ironfish.generation import CURRENT, GENERATIONS, LEGACY, Generation, Paging
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
from ifdkg.core.ironfish.session import Session, SessionState
from ifdkg.core.ironfish.terminal import IronfishTerminal
from ifdkg.core.ironfish.types import Identity, Keys, Round3Inputs, RoundPackages, Version

__all__ = [
    "BackupKeysMessage",
    "BackupKeysResult",
    "CURRENT",
    "CommitmentsMessage",
    "CommitmentsResult",
    "DkgKeysMessage",
    "DkgKeysResult",
    "DkgSignMessage",
    "DkgSignResult",
    "GENERATIONS",
    "Generation",
    "GetVersionMessage",
    "GetVersionResult",
    "IDENTITY_LEN",
    "IdentitiesMessage",
    "IdentitiesResult",
    "Identity",
    "IdentityMessage",
    "IdentityResult",
    "IronfishProtocol",
    "IronfishTerminal",
    "KeyType",
    "Keys",
    "LEGACY",
    "NoncesMessage",
    "NoncesResult",
    "Paging",
    "PayloadType",
    "PublicPackageMessage",
    "PublicPackageResult",
    "RawAPDUMessage",
    "RawAPDUResult",
    "RestoreKeysMessage",
    "RestoreKeysResult",
    "RetrieveKeysMessage",
    "RetrieveKeysResult",
    "ReviewTxMessage",
    "ReviewTxResult",
    "Round1Message",
    "Round1Result",
    "Round2Message",
    "Round2Result",
    "Round3Inputs",
    "Round3Message",
    "Round3Result",
    "RoundPackages",
    "Session",
    "SessionState",
    "SignMessage",
    "SignResult",
    "StatusCode",
    "TX_HASH_LEN",
    "Version",
    "describe",
    "status_error",
]
