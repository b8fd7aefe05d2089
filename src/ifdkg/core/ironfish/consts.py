"""Ironfish secure element command constants."""

from __future__ import annotations

from enum import IntEnum


CLA = 0x59
CLA_DKG = 0x63

# P1 payload position markers for chunked sends
P1_INIT = 0x00
P1_ADD = 0x01
P1_LAST = 0x02

# P1 display flag for key and identity commands
P1_ONLY_RETRIEVE = 0x00
P1_SHOW_IN_DEVICE = 0x01

P2_DEFAULT = 0x00

VERSION_LEN = 1
KEY_LENGTH = 32
ED25519_SIGNATURE_LEN = 64
REDJUBJUB_SIGNATURE_LEN = 64
IDENTITY_LEN = VERSION_LEN + KEY_LENGTH + KEY_LENGTH + ED25519_SIGNATURE_LEN
TX_HASH_LEN = 32

MAX_FRAME = 255
CHUNK_SIZE = 250

# Coin type 1338 path used when a command needs a context frame but no key path
DUMMY_PATH = "m/44'/1338'/0"


class PayloadType(IntEnum):
    INIT = P1_INIT
    ADD = P1_ADD
    LAST = P1_LAST


class KeyType(IntEnum):
    PUBLIC_ADDRESS = 0x00
    VIEW_KEY = 0x01
    PROOF_GENERATION_KEY = 0x02
