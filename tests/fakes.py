"""In-memory device doubles for driving sessions without a reader."""

from __future__ import annotations

from ifdkg.core.smartcard import APDU, Response


def ok(data: bytes = b"") -> Response:
    return Response(data, 0x90, 0x00)


def status(sw: int, data: bytes = b"") -> Response:
    return Response(data, sw >> 8, sw & 0xFF)


class ScriptedTransport:
    """Replays canned replies and records every command it was sent."""

    def __init__(self, replies: list[Response | Exception]) -> None:
        self.replies = list(replies)
        self.sent: list[APDU] = []

    async def __call__(self, apdu: APDU) -> Response:
        self.sent.append(apdu)
        if not self.replies:
            raise AssertionError(f"unexpected command {apdu!r}")
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply


class FakeAgent:
    def __init__(self, transport: ScriptedTransport) -> None:
        self.transmit = transport
        self.connected = False

    def connect(self) -> None:
        self.connected = True

    def disconnect(self) -> None:
        self.connected = False


