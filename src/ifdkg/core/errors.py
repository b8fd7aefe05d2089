"""Error taxonomy shared by the transport and protocol layers."""

from __future__ import annotations


class SecureElementError(Exception):
    """Base class for every failure raised by ifdkg."""


class TransportFailure(SecureElementError):
    """The transport could not deliver a frame or return a reply."""


class DeviceStatusError(SecureElementError):
    """The device answered with a status word outside the accepted set."""

    def __init__(self, code: int, description: str, diagnostic: str = "") -> None:
        self.code = code
        self.description = description
        self.diagnostic = diagnostic
        text = f"{description} : {diagnostic}" if diagnostic else description
        super().__init__(f"SW={code:04X} {text}")

    @property
    def message(self) -> str:
        if self.diagnostic:
            return f"{self.description} : {self.diagnostic}"
        return self.description


class MalformedResponse(SecureElementError):
    """A device reply does not fit the layout it is decoded against."""


class InvariantViolation(SecureElementError, ValueError):
    """Caller-supplied input or a session transition breaks a protocol invariant."""
