from ifdkg.core.base.agent import Agent, Transmit
from ifdkg.core.errors import (
    DeviceStatusError,
    InvariantViolation,
    MalformedResponse,
    SecureElementError,
    TransportFailure,
)
from ifdkg.core.base.message import Message, Result
from ifdkg.core.base.terminal import Terminal

__all__ = [
    "Agent",
    "DeviceStatusError",
    "InvariantViolation",
    "MalformedResponse",
    "Message",
    "Result",
    "SecureElementError",
    "Terminal",
    "Transmit",
    "TransportFailure",
]
