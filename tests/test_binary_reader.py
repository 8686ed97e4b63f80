"""Tests for BinaryReader."""

import struct

import pytest

from tsip.exceptions import TruncationError
from tsip.parsers.binary_reader import BinaryReader
from tsip.protocol.layout import FieldType


class TestBinaryReader:
    """Tests for BinaryReader class."""

    def test_read_uint8(self):
        """Test reading single bytes."""
        reader = BinaryReader(bytes([0xFF, 0x00, 0xAB]))
        assert reader.read_uint8() == 0xFF
        assert reader.read_uint8() == 0x00
        assert reader.read_uint8() == 0xAB

    def test_read_int8_negative(self):
        assert BinaryReader(b"\xfe").read_int8() == -2

    def test_read_uint16_big_endian(self):
        """Test the high byte comes first."""
        assert BinaryReader(b"\x12\x34").read_uint16() == 0x1234

    def test_read_int16_negative(self):
        """Test two's complement decoding."""
        assert BinaryReader(b"\xfc\x18").read_int16() == -1000

    def test_read_uint32(self):
        assert BinaryReader(b"\x12\x34\x56\x78").read_uint32() == 0x12345678

    def test_read_int32_negative(self):
        assert BinaryReader(b"\xff\xff\xff\xff").read_int32() == -1

    def test_read_int64(self):
        assert BinaryReader(struct.pack(">q", -(2**40))).read_int64() == -(2**40)

    def test_read_float32(self):
        """Test IEEE-754 single precision."""
        assert BinaryReader(bytes.fromhex("3f800000")).read_float32() == 1.0
        assert BinaryReader(bytes.fromhex("c0200000")).read_float32() == -2.5

    def test_read_float64(self):
        assert BinaryReader(struct.pack(">d", 0.7853981633974483)).read_float64() == 0.7853981633974483

    def test_offset(self):
        """Test starting past a packet id."""
        reader = BinaryReader(b"\x8f\xab\x07", offset=2)
        assert reader.position == 2
        assert reader.read_uint8() == 7

    def test_invalid_offset(self):
        with pytest.raises(ValueError):
            BinaryReader(b"\x01", offset=2)

    def test_remaining_and_end(self):
        """Test position tracking."""
        reader = BinaryReader(b"\x00\x11\x22\x33")
        assert reader.remaining == 4
        reader.skip(3)
        assert reader.remaining == 1
        assert not reader.is_at_end()
        reader.read_uint8()
        assert reader.is_at_end()

    def test_has_bytes(self):
        reader = BinaryReader(b"\x00\x01")
        assert reader.has_bytes(2)
        assert not reader.has_bytes(3)

    def test_peek_does_not_advance(self):
        reader = BinaryReader(b"\x05\x06")
        assert reader.peek_uint8() == 5
        assert reader.peek_uint8(1) == 6
        assert reader.position == 0

    def test_read_remaining(self):
        reader = BinaryReader(b"\x01\x02\x03", offset=1)
        assert reader.read_remaining() == b"\x02\x03"
        assert reader.is_at_end()

    def test_reset(self):
        reader = BinaryReader(b"\x01\x02")
        reader.read_uint16()
        reader.reset()
        assert reader.read_uint8() == 1

    def test_read_field_dispatch(self):
        """Test read_field uses the reader for each wire type."""
        reader = BinaryReader(bytes.fromhex("ff ffff 3f800000"))
        assert reader.read_field(FieldType.INT8) == -1
        assert reader.read_field(FieldType.UINT16) == 0xFFFF
        assert reader.read_field(FieldType.FLOAT32) == 1.0


class TestTruncation:
    """Tests for bounds checking."""

    def test_read_past_end_raises(self):
        """Test a short read raises instead of zero-filling."""
        reader = BinaryReader(b"\x01\x02\x03")
        with pytest.raises(TruncationError) as exc_info:
            reader.read_uint32()
        assert exc_info.value.required == 4
        assert exc_info.value.available == 3

    def test_failed_read_does_not_advance(self):
        reader = BinaryReader(b"\x01")
        with pytest.raises(TruncationError):
            reader.read_uint16()
        assert reader.position == 0

    def test_context_in_error(self):
        """Test the packet name is reported."""
        reader = BinaryReader(b"", context="SoftwareVersionPacket")
        with pytest.raises(TruncationError) as exc_info:
            reader.read_uint8()
        assert exc_info.value.packet_name == "SoftwareVersionPacket"
        assert "SoftwareVersionPacket" in str(exc_info.value)

    def test_skip_past_end(self):
        with pytest.raises(TruncationError):
            BinaryReader(b"\x01").skip(2)

    def test_peek_out_of_bounds(self):
        with pytest.raises(TruncationError):
            BinaryReader(b"\x01").peek_uint8(1)
