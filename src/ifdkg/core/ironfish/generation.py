"""Protocol generations of the Ironfish application.

Both generations share the APDU command set; they differ in where DKG
commands are addressed, what leads a chunked payload, and how a result
larger than one frame comes back.

LEGACY
    DKG commands on the regular CLA, the caller's key path (or the dummy
    path when none is given) as context frame, payload-validation statuses
    passed back by the transport instead of raised, and results paged by
    re-sending an empty LAST frame while the previous reply filled a
    whole frame.
CURRENT
    DKG commands on their own CLA, a fixed dummy path as context frame,
    and the final reply announcing how many GET_RESULT pages to fetch.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from ifdkg.core.ironfish.consts import CHUNK_SIZE, CLA, CLA_DKG, DUMMY_PATH, MAX_FRAME
from ifdkg.core.ironfish.errors import SIGN_ACCEPTED, SUCCESS


class Paging(Enum):
    HEURISTIC = "heuristic"
    COUNTED = "counted"


@dataclass(frozen=True)
class Instructions:
    GET_VERSION: int = 0x00
    GET_KEYS: int = 0x01
    SIGN: int = 0x02
    DKG_IDENTITY: int = 0x10
    DKG_ROUND_1: int = 0x11
    DKG_ROUND_2: int = 0x12
    DKG_ROUND_3_MIN: int = 0x13
    DKG_GET_COMMITMENTS: int = 0x14
    DKG_SIGN: int = 0x15
    DKG_GET_KEYS: int = 0x16
    DKG_GET_NONCES: int = 0x17
    DKG_GET_PUBLIC_PACKAGE: int = 0x18
    DKG_BACKUP_KEYS: int = 0x19
    DKG_RESTORE_KEYS: int = 0x1A
    GET_RESULT: int = 0x1B
    REVIEW_TX: int = 0x1C
    DKG_IDENTITIES: int = 0x1D

    def name_of(self, ins: int) -> str:
        for name, value in vars(self).items():
            if value == ins:
                return name
        return f"INS {ins:02X}"


@dataclass(frozen=True)
class Generation:
    name: str
    cla: int
    dkg_cla: int
    paging: Paging
    context_path: str
    accepted: tuple[int, ...]
    chunk_size: int = CHUNK_SIZE
    max_frame: int = MAX_FRAME
    ins: Instructions = field(default_factory=Instructions)


LEGACY = Generation(
    name="legacy",
    cla=CLA,
    dkg_cla=CLA,
    paging=Paging.HEURISTIC,
    context_path=DUMMY_PATH,
    accepted=SIGN_ACCEPTED,
)

CURRENT = Generation(
    name="current",
    cla=CLA,
    dkg_cla=CLA_DKG,
    paging=Paging.COUNTED,
    context_path=DUMMY_PATH,
    accepted=SUCCESS,
)

GENERATIONS: dict[str, Generation] = {g.name: g for g in (LEGACY, CURRENT)}
