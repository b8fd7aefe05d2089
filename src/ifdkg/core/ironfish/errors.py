"""Device status words and their descriptions."""

from __future__ import annotations

from enum import IntEnum

from ifdkg.core.errors import DeviceStatusError
from ifdkg.core.smartcard import Response

UNKNOWN_DESCRIPTION = "Unknown device error"


class StatusCode(IntEnum):
    # generic
    NO_ERRORS = 0x9000
    GP_AUTH_FAILED = 0x6300
    EXECUTION_ERROR = 0x6400
    WRONG_LENGTH = 0x6700
    EMPTY_BUFFER = 0x6982
    OUTPUT_BUFFER_TOO_SMALL = 0x6983
    DATA_IS_INVALID = 0x6984
    CONDITIONS_NOT_SATISFIED = 0x6985
    TRANSACTION_REJECTED = 0x6986
    BAD_KEY_HANDLE = 0x6A80
    INVALID_P1P2 = 0x6B00
    INSTRUCTION_NOT_SUPPORTED = 0x6D00
    APP_DOES_NOT_SEEM_TO_BE_OPEN = 0x6E00
    UNKNOWN_ERROR = 0x6F00
    SIGN_VERIFY_ERROR = 0x6F01
    DEVICE_LOCKED = 0x5515
    # application
    ADDR_DISPLAY_FAIL = 0xB002
    TX_WRONG_LENGTH = 0xB004
    TX_PARSING_FAIL = 0xB005
    TX_SIGN_FAIL = 0xB008
    KEY_DERIVE_FAIL = 0xB009
    VERSION_PARSING_FAIL = 0xB00A
    DKG_ROUND2_FAIL = 0xB00B
    DKG_ROUND3_FAIL = 0xB00C
    INVALID_KEY_TYPE = 0xB00D
    INVALID_IDENTITY = 0xB00E
    INVALID_PAYLOAD = 0xB00F
    BUFFER_OUT_OF_BOUNDS = 0xB010
    INVALID_SIGNING_PACKAGE = 0xB011
    INVALID_RANDOMIZER = 0xB012
    INVALID_SIGNING_NONCES = 0xB013
    INVALID_IDENTITY_INDEX = 0xB014
    INVALID_KEY_PACKAGE = 0xB015
    INVALID_PUBLIC_PACKAGE = 0xB016
    INVALID_GROUP_SECRET_KEY = 0xB017
    INVALID_SCALAR = 0xB018
    DECRYPTION_FAIL = 0xB019
    ENCRYPTION_FAIL = 0xB020
    INVALID_NVM_WRITE = 0xB021
    INVALID_DKG_STATUS = 0xB022
    INVALID_DKG_KEYS_VERSION = 0xB023
    TOO_MANY_PARTICIPANTS = 0xB024
    INVALID_TX_HASH = 0xB025
    INVALID_TOKEN = 0xB026
    EXPERT_MODE_REQUIRED = 0xB027


DESCRIPTIONS: dict[int, str] = {
    StatusCode.NO_ERRORS: "No errors",
    StatusCode.GP_AUTH_FAILED: "GP Authentication failed",
    StatusCode.EXECUTION_ERROR: "Execution Error",
    StatusCode.WRONG_LENGTH: "Wrong Length",
    StatusCode.EMPTY_BUFFER: "Empty Buffer",
    StatusCode.OUTPUT_BUFFER_TOO_SMALL: "Output buffer too small",
    StatusCode.DATA_IS_INVALID: "Data is invalid",
    StatusCode.CONDITIONS_NOT_SATISFIED: "Conditions not satisfied",
    StatusCode.TRANSACTION_REJECTED: "Transaction rejected",
    StatusCode.BAD_KEY_HANDLE: "Bad key handle",
    StatusCode.INVALID_P1P2: "Invalid P1/P2",
    StatusCode.INSTRUCTION_NOT_SUPPORTED: "Instruction not supported",
    StatusCode.APP_DOES_NOT_SEEM_TO_BE_OPEN: "App does not seem to be open",
    StatusCode.UNKNOWN_ERROR: "Unknown error",
    StatusCode.SIGN_VERIFY_ERROR: "Sign/verify error",
    StatusCode.DEVICE_LOCKED: "Device is locked",
    StatusCode.ADDR_DISPLAY_FAIL: "Invalid address",
    StatusCode.TX_WRONG_LENGTH: "Tx too long",
    StatusCode.TX_PARSING_FAIL: "Tx parsing failed",
    StatusCode.TX_SIGN_FAIL: "Tx signing failed",
    StatusCode.KEY_DERIVE_FAIL: "Invalid signing key",
    StatusCode.VERSION_PARSING_FAIL: "Invalid tx version",
    StatusCode.DKG_ROUND2_FAIL: "Round 2 has failed",
    StatusCode.DKG_ROUND3_FAIL: "Round 3 has failed",
    StatusCode.INVALID_KEY_TYPE: "Invalid key type",
    StatusCode.INVALID_IDENTITY: "Invalid identity",
    StatusCode.INVALID_PAYLOAD: "Invalid payload",
    StatusCode.BUFFER_OUT_OF_BOUNDS: "Buffer out of bounds",
    StatusCode.INVALID_SIGNING_PACKAGE: "Invalid signing package",
    StatusCode.INVALID_RANDOMIZER: "Invalid tx randomizer",
    StatusCode.INVALID_SIGNING_NONCES: "Invalid signing nonces",
    StatusCode.INVALID_IDENTITY_INDEX: "Invalid identity index",
    StatusCode.INVALID_KEY_PACKAGE: "Invalid key package",
    StatusCode.INVALID_PUBLIC_PACKAGE: "Invalid public package",
    StatusCode.INVALID_GROUP_SECRET_KEY: "Invalid group secret key",
    StatusCode.INVALID_SCALAR: "Invalid scalar",
    StatusCode.DECRYPTION_FAIL: "Keys decryption failed",
    StatusCode.ENCRYPTION_FAIL: "Keys encryption failed",
    StatusCode.INVALID_NVM_WRITE: "Invalid flash write",
    StatusCode.INVALID_DKG_STATUS: "Invalid dkg process status",
    StatusCode.INVALID_DKG_KEYS_VERSION: "Invalid keys version",
    StatusCode.TOO_MANY_PARTICIPANTS: "Too many participants for DKG",
    StatusCode.INVALID_TX_HASH: "Invalid tx hash",
    StatusCode.INVALID_TOKEN: "Invalid asset",
    StatusCode.EXPERT_MODE_REQUIRED: "Expert mode is required",
}

# Codes whose response body carries an ASCII explanation from the device
DIAGNOSTIC_CODES = frozenset({
    StatusCode.DATA_IS_INVALID,
    StatusCode.BAD_KEY_HANDLE,
    StatusCode.SIGN_VERIFY_ERROR,
})

SUCCESS = (StatusCode.NO_ERRORS,)

# Statuses the chunked sign exchange hands back instead of raising
SIGN_ACCEPTED = (
    StatusCode.NO_ERRORS,
    StatusCode.DATA_IS_INVALID,
    StatusCode.BAD_KEY_HANDLE,
    StatusCode.SIGN_VERIFY_ERROR,
)


def describe(code: int) -> str:
    """Return the description for a status code, never raising."""
    return DESCRIPTIONS.get(code, UNKNOWN_DESCRIPTION)


def diagnostic_text(response: Response) -> str:
    """ASCII diagnostic carried by a payload-validation failure, if any."""
    if response.sw not in DIAGNOSTIC_CODES or not response.data:
        return ""
    return response.data.decode("ascii", errors="replace")


def error_message(response: Response) -> str:
    """Description of a response's status, annotated with device text."""
    text = diagnostic_text(response)
    desc = describe(response.sw)
    return f"{desc} : {text}" if text else desc


def status_error(response: Response) -> DeviceStatusError:
    """Build the typed failure for a non-success response."""
    return DeviceStatusError(
        response.sw, describe(response.sw), diagnostic_text(response)
    )
