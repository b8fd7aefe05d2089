"""Big-endian byte cursors for the fixed-width and length-prefixed layouts.

``Writer`` appends fields to a growing buffer and checks that each value
fits its field. ``Reader`` walks a device reply and refuses to read past
its end, so a truncated frame raises ``MalformedResponse`` instead of
yielding a short slice.
"""

from __future__ import annotations

from ifdkg.core.errors import InvariantViolation, MalformedResponse

U8_MAX = 0xFF
U16_MAX = 0xFFFF


class Writer:
    """Append-only buffer builder."""

    def __init__(self) -> None:
        self._buf = bytearray()

    def __len__(self) -> int:
        return len(self._buf)

    def u8(self, value: int, what: str = "value") -> Writer:
        if not 0 <= value <= U8_MAX:
            raise InvariantViolation(f"{what} {value} does not fit in one byte")
        self._buf.append(value)
        return self

    def u16(self, value: int, what: str = "value") -> Writer:
        if not 0 <= value <= U16_MAX:
            raise InvariantViolation(f"{what} {value} does not fit in two bytes")
        self._buf.extend(value.to_bytes(2, "big"))
        return self

    def fixed(self, data: bytes, width: int, what: str = "field") -> Writer:
        """Write *data* that must be exactly *width* bytes."""
        if len(data) != width:
            raise InvariantViolation(
                f"{what} must be {width} bytes, got {len(data)}"
            )
        self._buf.extend(data)
        return self

    def raw(self, data: bytes) -> Writer:
        self._buf.extend(data)
        return self

    def prefixed(self, data: bytes, what: str = "field") -> Writer:
        """Write ``[len:2][data]``."""
        self.u16(len(data), f"{what} length")
        self._buf.extend(data)
        return self

    def to_bytes(self) -> bytes:
        return bytes(self._buf)


class Reader:
    """Bounds-checked cursor over a device reply."""

    def __init__(self, data: bytes) -> None:
        self._data = bytes(data)
        self._pos = 0

    @property
    def position(self) -> int:
        return self._pos

    @property
    def remaining(self) -> int:
        return len(self._data) - self._pos

    def take(self, n: int, what: str = "field") -> bytes:
        if n > self.remaining:
            raise MalformedResponse(
                f"{what} needs {n} bytes at offset {self._pos}, "
                f"only {self.remaining} left"
            )
        out = self._data[self._pos : self._pos + n]
        self._pos += n
        return out

    def u8(self, what: str = "value") -> int:
        return self.take(1, what)[0]

    def u16(self, what: str = "value") -> int:
        return int.from_bytes(self.take(2, what), "big")

    def u32(self, what: str = "value") -> int:
        return int.from_bytes(self.take(4, what), "big")

    def prefixed(self, what: str = "field") -> bytes:
        """Read ``[len:2][data]``."""
        length = self.u16(f"{what} length")
        return self.take(length, what)

    def rest(self) -> bytes:
        return self.take(self.remaining)
