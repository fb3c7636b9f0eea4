"""Tests for the bounds-checked byte cursor."""

from __future__ import annotations

import pytest

from helloprint.core.cursor import ByteCursor
from helloprint.core.errors import MalformedLength, TruncatedMessage


class TestFixedReads:
    """Tests for fixed-width integer reads."""

    def test_big_endian_integers(self) -> None:
        cur = ByteCursor(bytes(range(1, 11)))
        assert cur.read_u8() == 0x01
        assert cur.read_u16() == 0x0203
        assert cur.read_u24() == 0x040506
        assert cur.read_u32() == 0x0708090A
        assert cur.at_end

    def test_read_bytes_and_skip(self) -> None:
        cur = ByteCursor(b"abcdef")
        cur.skip(2)
        assert cur.read_bytes(3) == b"cde"
        assert cur.offset == 5
        assert cur.remaining == 1

    def test_accepts_bytearray_and_memoryview(self) -> None:
        assert ByteCursor(bytearray(b"\x12\x34")).read_u16() == 0x1234
        assert ByteCursor(memoryview(b"\x12\x34")).read_u16() == 0x1234

    @pytest.mark.parametrize("method", ["read_u8", "read_u16", "read_u24", "read_u32"])
    def test_read_past_end_is_truncated(self, method: str) -> None:
        with pytest.raises(TruncatedMessage):
            getattr(ByteCursor(b""), method)()

    def test_truncated_reports_position(self) -> None:
        cur = ByteCursor(b"\x00\x01\x02")
        cur.skip(2)
        with pytest.raises(TruncatedMessage) as exc_info:
            cur.read_u16()
        assert exc_info.value.offset == 2
        assert exc_info.value.needed == 2
        assert exc_info.value.available == 1

    def test_peek_does_not_advance(self) -> None:
        cur = ByteCursor(b"\x16\x03")
        assert cur.peek_u8() == 0x16
        assert cur.offset == 0
        assert cur.peek_rest() == b"\x16\x03"
        assert cur.remaining == 2


class TestNestedBlocks:
    """Tests for length-prefixed child cursors."""

    def test_read_vector(self) -> None:
        cur = ByteCursor(b"\x00\x02\xab\xcd\xff")
        child = cur.read_vector(2)
        assert child.read_u16() == 0xABCD
        assert child.at_end
        assert cur.read_u8() == 0xFF

    def test_child_cannot_read_past_its_block(self) -> None:
        cur = ByteCursor(b"\x01\xaa\xbb\xcc")
        child = cur.read_vector(1)
        assert child.read_u8() == 0xAA
        with pytest.raises(TruncatedMessage):
            child.read_u8()

    def test_root_length_overrun_is_truncated(self) -> None:
        cur = ByteCursor(b"\x00\x10\x00")
        with pytest.raises(TruncatedMessage):
            cur.read_vector(2)

    def test_nested_length_overrun_is_malformed(self) -> None:
        # Outer block holds 3 bytes; inner length claims 5 even though the buffer has them
        cur = ByteCursor(b"\x03\x05\x00\x00\x00\x00\x00\x00")
        outer = cur.read_vector(1)
        with pytest.raises(MalformedLength) as exc_info:
            outer.read_vector(1)
        assert exc_info.value.declared == 5
        assert exc_info.value.bound == 2

    def test_nested_length_past_buffer_is_malformed(self) -> None:
        # Inner length also runs past the end of the whole buffer
        cur = ByteCursor(b"\x02\x40\x00")
        outer = cur.read_vector(1)
        with pytest.raises(MalformedLength):
            outer.read_vector(1)

    def test_three_byte_length(self) -> None:
        cur = ByteCursor(b"\x00\x00\x02hi")
        assert cur.read_vector(3).rest() == b"hi"

    def test_invalid_length_width(self) -> None:
        with pytest.raises(ValueError):
            ByteCursor(b"\x00" * 8).read_vector(4)
