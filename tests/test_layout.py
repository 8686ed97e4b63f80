"""Tests for PacketLayout."""

import pytest

from tsip.exceptions import EncodeError, TruncationError
from tsip.parsers.binary_reader import BinaryReader
from tsip.protocol.layout import EMPTY_LAYOUT, FieldSpec, FieldType, PacketLayout


class TestFieldType:
    """Tests for FieldType widths."""

    @pytest.mark.parametrize(
        ("field_type", "size"),
        [
            (FieldType.UINT8, 1),
            (FieldType.INT16, 2),
            (FieldType.UINT32, 4),
            (FieldType.INT64, 8),
            (FieldType.FLOAT32, 4),
            (FieldType.FLOAT64, 8),
        ],
    )
    def test_size(self, field_type, size):
        assert field_type.size == size


class TestPacketLayout:
    """Tests for PacketLayout class."""

    @pytest.fixture
    def layout(self):
        return PacketLayout.of(("prn", FieldType.UINT8), ("level", FieldType.FLOAT32))

    def test_size_has_no_padding(self, layout):
        """Test a u8 followed by an f32 occupies five bytes."""
        assert layout.size == 5

    def test_names_in_order(self, layout):
        assert layout.names == ("prn", "level")
        assert layout.fields[0] == FieldSpec("prn", FieldType.UINT8)
        assert len(layout) == 2

    def test_pack_big_endian(self, layout):
        assert layout.pack({"prn": 5, "level": 1.0}) == bytes.fromhex("05 3f800000")

    def test_read(self, layout):
        values = layout.read(BinaryReader(bytes.fromhex("07 40000000")))
        assert values == {"prn": 7, "level": 2.0}

    def test_read_short(self, layout):
        with pytest.raises(TruncationError):
            layout.read(BinaryReader(bytes.fromhex("07 4000")))

    def test_pack_missing_field(self, layout):
        with pytest.raises(EncodeError, match="level"):
            layout.pack({"prn": 5})

    def test_pack_out_of_range(self, layout):
        with pytest.raises(EncodeError):
            layout.pack({"prn": 256, "level": 1.0})

    def test_duplicate_names(self):
        with pytest.raises(ValueError):
            PacketLayout.of(("a", FieldType.UINT8), ("a", FieldType.UINT16))

    def test_empty_layout(self):
        assert EMPTY_LAYOUT.size == 0
        assert EMPTY_LAYOUT.pack({}) == b""
