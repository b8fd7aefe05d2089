"""Session management and raw APDU commands."""

from __future__ import annotations

import logging

from ifdkg.core.ironfish import RawAPDUMessage

lg = logging.getLogger(__name__)


def cmd_connect(runner) -> bool:
    """Connect to the device."""
    runner.terminal.connect()
    return True


def cmd_disconnect(runner) -> bool:
    """Disconnect from the device."""
    runner.terminal.disconnect()
    return True


def cmd_reconnect(runner) -> bool:
    """Disconnect and reconnect the device."""
    runner.terminal.disconnect()
    runner.terminal.connect()
    return True


def cmd_apdu(runner, *, apdu: str = "", cla: str = "", ins: str = "", p1: str = "0", p2: str = "0", data: str = "") -> bool:
    """Send one raw command (apdu=HEX or cla/ins/p1/p2/data, all hex)."""
    if apdu:
        raw = bytes.fromhex(apdu)
        if len(raw) < 4:
            lg.error("APDU too short: need at least 4 bytes (CLA INS P1 P2)")
            return False
        msg = RawAPDUMessage(
            cla=raw[0], ins=raw[1], p1=raw[2], p2=raw[3],
            data=raw[5:] if len(raw) > 5 else b"",
        )
    else:
        msg = RawAPDUMessage(
            cla=int(cla, 16), ins=int(ins, 16),
            p1=int(p1, 16), p2=int(p2, 16),
            data=bytes.fromhex(data) if data else b"",
        )
    result = runner.call(msg)
    lg.info("<< %s SW=%04X", result.data.hex(" ").upper() if result.data else "", result.sw)
    return result.sw == 0x9000
