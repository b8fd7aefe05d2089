from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from smartcard.CardConnection import CardConnection
from smartcard.Exceptions import CardConnectionException
from smartcard.System import readers

from ifdkg.core.errors import TransportFailure
from ifdkg.core.smartcard.observer import LoggingCardObserver
from ifdkg.core.smartcard.types import APDU, Response

if TYPE_CHECKING:
    from smartcard.reader.Reader import Reader

lg = logging.getLogger(__name__)


class Card:
    """Wrapper around pyscard for secure element communication."""

    def __init__(self) -> None:
        self._connection: CardConnection | None = None
        self._observer = LoggingCardObserver()

    @property
    def connected(self) -> bool:
        return self._connection is not None

    @staticmethod
    def list_readers() -> list[Reader]:
        return readers()

    def connect(self, reader: Reader) -> None:
        self._connection = reader.createConnection()
        self._connection.addObserver(self._observer)
        self._connection.connect()

    def disconnect(self) -> None:
        if self._connection is not None:
            self._connection.disconnect()
            self._connection.deleteObserver(self._observer)
            self._connection = None

    def get_atr(self) -> bytes:
        if self._connection is None:
            raise TransportFailure("not connected to a device")
        return bytes(self._connection.getATR())

    def transmit(self, apdu: APDU) -> Response:
        if self._connection is None:
            raise TransportFailure("not connected to a device")
        try:
            data, sw1, sw2 = self._connection.transmit(list(apdu.to_bytes()))
        except CardConnectionException as exc:
            raise TransportFailure(str(exc)) from exc
        return Response(data=bytes(data), sw1=sw1, sw2=sw2)
