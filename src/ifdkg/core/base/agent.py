from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable

from ifdkg.core.errors import TransportFailure
from ifdkg.core.smartcard import APDU, Card, Response

lg = logging.getLogger(__name__)

Transmit = Callable[[APDU], Awaitable[Response]]


class Agent:
    """Agent that manages device connectivity and APDU transmission.

    Protocol-specific operations live in standalone protocol classes that
    receive agent.transmit as a coroutine function. Terminals construct
    the protocol objects they need.
    """

    def __init__(self, card: Card) -> None:
        self._card = card

    def connect(self) -> None:
        """Connect to the first reader with a device present."""
        available = Card.list_readers()
        if not available:
            raise TransportFailure("no readers found")
        for reader in available:
            try:
                self._card.connect(reader)
                lg.info("connected to %s (ATR %s)", reader, self.get_atr().hex(" ").upper())
                return
            except Exception:
                lg.debug("no device on %s", reader)
        raise TransportFailure("no device found on any reader")

    def disconnect(self) -> None:
        self._card.disconnect()

    def get_atr(self) -> bytes:
        return self._card.get_atr()

    async def transmit(self, apdu: APDU) -> Response:
        """Send one APDU and wait for its reply.

        pyscard blocks, so the exchange runs in a worker thread and the
        caller's event loop stays free while the device computes.
        """
        return await asyncio.to_thread(self._card.transmit, apdu)
