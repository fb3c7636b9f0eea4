"""Bounds-checked sequential reader over a handshake buffer."""

from __future__ import annotations

import struct

from .errors import MalformedLength, TruncatedMessage

_U16 = struct.Struct("!H")
_U32 = struct.Struct("!I")


class ByteCursor:
    """Big-endian reader that never reads past its end.

    A root cursor covers the whole buffer supplied by the caller. Child
    cursors, created from length fields with :meth:`sub_cursor` or
    :meth:`read_vector`, cover only the declared block and share the
    underlying buffer without copying it.

    Running past the end of any cursor raises :class:`TruncatedMessage`.
    A length field read from the root cursor that overruns the caller's
    buffer also raises :class:`TruncatedMessage`. A length field read from
    a child cursor that overruns its declared block raises
    :class:`MalformedLength`, whether or not the buffer itself is also
    overrun.

    Example:
        >>> cur = ByteCursor(b"\\x00\\x02\\xab\\xcd")
        >>> cur.read_vector(2).read_u16()
        43981
    """

    __slots__ = ("_data", "_pos", "_end", "_is_root")

    def __init__(self, data: bytes | bytearray | memoryview, start: int = 0, end: int | None = None) -> None:
        if not isinstance(data, bytes):
            data = bytes(data)
        self._data = data
        self._end = len(data) if end is None else end
        if not 0 <= start <= self._end <= len(data):
            raise ValueError("cursor bounds outside buffer")
        self._pos = start
        self._is_root = end is None

    @property
    def offset(self) -> int:
        """Absolute position in the underlying buffer."""
        return self._pos

    @property
    def remaining(self) -> int:
        return self._end - self._pos

    @property
    def at_end(self) -> bool:
        return self._pos >= self._end

    def _need(self, n: int) -> int:
        pos = self._pos
        if n < 0 or pos + n > self._end:
            raise TruncatedMessage(pos, n, self._end - pos)
        self._pos = pos + n
        return pos

    def peek_u8(self) -> int:
        if self._pos >= self._end:
            raise TruncatedMessage(self._pos, 1, 0)
        return self._data[self._pos]

    def read_u8(self) -> int:
        return self._data[self._need(1)]

    def read_u16(self) -> int:
        return _U16.unpack_from(self._data, self._need(2))[0]

    def read_u24(self) -> int:
        pos = self._need(3)
        return int.from_bytes(self._data[pos : pos + 3], "big")

    def read_u32(self) -> int:
        return _U32.unpack_from(self._data, self._need(4))[0]

    def read_bytes(self, n: int) -> bytes:
        pos = self._need(n)
        return self._data[pos : pos + n]

    def skip(self, n: int) -> None:
        self._need(n)

    def sub_cursor(self, n: int) -> ByteCursor:
        """Return a cursor over the next ``n`` bytes and advance past them."""
        if n > self.remaining:
            if self._is_root:
                raise TruncatedMessage(self._pos, n, self.remaining)
            raise MalformedLength(self._pos, n, self.remaining)
        start = self._need(n)
        return ByteCursor(self._data, start, start + n)

    def read_vector(self, length_width: int) -> ByteCursor:
        """Read a length prefix of ``length_width`` bytes and return its block."""
        if length_width == 1:
            n = self.read_u8()
        elif length_width == 2:
            n = self.read_u16()
        elif length_width == 3:
            n = self.read_u24()
        else:
            raise ValueError(f"unsupported length width: {length_width}")
        return self.sub_cursor(n)

    def peek_rest(self) -> bytes:
        """Return everything up to the end of the cursor without consuming it."""
        return self._data[self._pos : self._end]

    def rest(self) -> bytes:
        """Consume and return everything up to the end of the cursor."""
        return self.read_bytes(self.remaining)
