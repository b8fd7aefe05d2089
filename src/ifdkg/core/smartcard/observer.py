from __future__ import annotations

import logging

from smartcard.CardConnectionObserver import CardConnectionObserver

from ifdkg.core.smartcard.logging import PROTOCOL, TRACE, color_sw

lg = logging.getLogger(__name__)


LINE_BYTES = 16


def log_hex(prefix: str, data: bytes) -> None:
    """Log hex data at TRACE, wrapping at LINE_BYTES bytes per line."""
    pad = " " * len(prefix)
    for i in range(0, len(data), LINE_BYTES):
        chunk = data[i : i + LINE_BYTES].hex(" ").upper()
        lg.log(TRACE, "%s%s", prefix if i == 0 else pad, chunk)


class LoggingCardObserver(CardConnectionObserver):
    """CardConnectionObserver that logs APDU traffic via Python logging."""

    def update(self, observable, event):
        if event.type == "connect":
            lg.log(PROTOCOL, "connect")

        elif event.type == "reconnect":
            lg.log(PROTOCOL, "reconnect")

        elif event.type == "disconnect":
            lg.log(PROTOCOL, "disconnect")

        elif event.type == "command":
            log_hex(">> ", bytes(event.args[0]))

        elif event.type == "response":
            data, sw1, sw2 = event.args[0], event.args[1], event.args[2]
            if data:
                log_hex("<< ", bytes(data))
            lg.log(TRACE, "<< %s", color_sw((sw1 << 8) | sw2))
