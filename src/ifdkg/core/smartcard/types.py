from __future__ import annotations

from dataclasses import dataclass

MAX_DATA = 255


@dataclass
class APDU:
    """Short command APDU: CLA INS P1 P2 Lc [data].

    The secure element always expects an Lc byte, even for an empty body,
    and never an Le byte.
    """

    cla: int
    ins: int
    p1: int
    p2: int
    data: bytes = b""

    def to_bytes(self) -> bytes:
        if len(self.data) > MAX_DATA:
            raise ValueError(f"APDU data too long: {len(self.data)} > {MAX_DATA}")
        buf = bytearray([self.cla, self.ins, self.p1, self.p2, len(self.data)])
        buf.extend(self.data)
        return bytes(buf)

    def __repr__(self) -> str:
        return self.to_bytes().hex(" ").upper()


@dataclass
class Response:
    """Response APDU: data followed by SW1 SW2."""

    data: bytes
    sw1: int
    sw2: int

    @classmethod
    def from_bytes(cls, raw: bytes) -> Response:
        if len(raw) < 2:
            raise ValueError(f"response too short: {len(raw)} bytes")
        return cls(data=bytes(raw[:-2]), sw1=raw[-2], sw2=raw[-1])

    def to_bytes(self) -> bytes:
        return self.data + bytes([self.sw1, self.sw2])

    @property
    def sw(self) -> int:
        return (self.sw1 << 8) | self.sw2

    @property
    def success(self) -> bool:
        return self.sw1 == 0x90 and self.sw2 == 0x00

    def __len__(self) -> int:
        """Raw frame length, status word included."""
        return len(self.data) + 2

    def __repr__(self) -> str:
        sw = f"SW={self.sw:04X}"
        if self.data:
            return f"{self.data.hex(' ').upper()} {sw}"
        return sw
