"""
BinaryReader - Bounds-checked big-endian reader for TSIP packet bodies.

TSIP transmits all multi-byte values big-endian: integers in two's
complement, reals as IEEE-754 single or double precision. The reader
tracks position over a de-stuffed body and raises TruncationError instead
of reading past its end.

Example:
    >>> reader = BinaryReader(bytes.fromhex("05 3f800000"))
    >>> reader.read_uint8()
    5
    >>> reader.read_float32()
    1.0
    >>> reader.is_at_end()
    True
"""

from __future__ import annotations

import struct

from tsip.exceptions import TruncationError
from tsip.protocol.layout import FieldType

_UINT16 = struct.Struct(">H")
_INT16 = struct.Struct(">h")
_UINT32 = struct.Struct(">I")
_INT32 = struct.Struct(">i")
_INT64 = struct.Struct(">q")
_FLOAT32 = struct.Struct(">f")
_FLOAT64 = struct.Struct(">d")


class BinaryReader:
    """
    Reader for big-endian binary packet bodies.

    Attributes:
        position: Current read position in bytes.
        remaining: Number of bytes remaining.
        data: The underlying body.
    """

    __slots__ = ("_data", "_position", "_context")

    def __init__(
        self,
        data: bytes | bytearray | memoryview,
        offset: int = 0,
        context: str | None = None,
    ) -> None:
        """
        Initialize the reader.

        Args:
            data: Body bytes.
            offset: Initial position (e.g. just past the packet id).
            context: Packet name reported in TruncationError.
        """
        self._data = bytes(data)
        if not 0 <= offset <= len(self._data):
            raise ValueError(f"Offset {offset} outside body of {len(self._data)} bytes")
        self._position = offset
        self._context = context

    @property
    def position(self) -> int:
        """Current position in bytes (0-indexed)."""
        return self._position

    @property
    def remaining(self) -> int:
        """Number of bytes remaining to read."""
        return len(self._data) - self._position

    @property
    def data(self) -> bytes:
        return self._data

    def is_at_end(self) -> bool:
        """Check if reader has reached the end of data."""
        return self._position >= len(self._data)

    def has_bytes(self, count: int) -> bool:
        """Check if at least `count` bytes are available to read."""
        return self.remaining >= count

    def require(self, count: int) -> None:
        """
        Verify that `count` bytes are available without reading them.

        Raises:
            TruncationError: If fewer bytes remain.
        """
        if self._position + count > len(self._data):
            raise TruncationError(
                f"Body truncated at offset {self._position}",
                packet_name=self._context,
                required=self._position + count,
                available=len(self._data),
            )

    # ===== Position Control =====

    def skip(self, count: int) -> None:
        """
        Skip forward by the specified number of bytes.

        Raises:
            TruncationError: If skip would exceed data bounds.
        """
        self.require(count)
        self._position += count

    def reset(self) -> None:
        """Reset position to beginning of data."""
        self._position = 0

    # ===== Reading =====

    def read_bytes(self, count: int) -> bytes:
        """
        Read `count` raw bytes and advance position.

        Raises:
            TruncationError: If insufficient data available.
        """
        self.require(count)
        start = self._position
        self._position += count
        return self._data[start : self._position]

    def read_uint8(self) -> int:
        self.require(1)
        value = self._data[self._position]
        self._position += 1
        return value

    def read_int8(self) -> int:
        value = self.read_uint8()
        return value if value < 128 else value - 256

    def read_uint16(self) -> int:
        return self._unpack(_UINT16)

    def read_int16(self) -> int:
        return self._unpack(_INT16)

    def read_uint32(self) -> int:
        return self._unpack(_UINT32)

    def read_int32(self) -> int:
        return self._unpack(_INT32)

    def read_int64(self) -> int:
        return self._unpack(_INT64)

    def read_float32(self) -> float:
        """Read an IEEE-754 single precision value."""
        return self._unpack(_FLOAT32)

    def read_float64(self) -> float:
        """Read an IEEE-754 double precision value."""
        return self._unpack(_FLOAT64)

    def read_field(self, field_type: FieldType) -> int | float:
        """
        Read one value of the given wire type.

        Args:
            field_type: Field type from a PacketLayout.

        Returns:
            Decoded int or float.
        """
        return self._readers[field_type](self)

    def peek_uint8(self, offset: int = 0) -> int:
        """
        Read a byte at the specified offset without advancing position.

        Raises:
            TruncationError: If offset is out of bounds.
        """
        index = self._position + offset
        if index < 0 or index >= len(self._data):
            raise TruncationError(
                f"Peek offset {offset} out of bounds",
                packet_name=self._context,
                required=index + 1,
                available=len(self._data),
            )
        return self._data[index]

    def read_remaining(self) -> bytes:
        """Read all remaining data and advance to end."""
        return self.read_bytes(self.remaining)

    def _unpack(self, fmt: struct.Struct) -> int | float:
        self.require(fmt.size)
        (value,) = fmt.unpack_from(self._data, self._position)
        self._position += fmt.size
        return value

    _readers = {
        FieldType.UINT8: read_uint8,
        FieldType.INT8: read_int8,
        FieldType.UINT16: read_uint16,
        FieldType.INT16: read_int16,
        FieldType.UINT32: read_uint32,
        FieldType.INT32: read_int32,
        FieldType.INT64: read_int64,
        FieldType.FLOAT32: read_float32,
        FieldType.FLOAT64: read_float64,
    }

    def __repr__(self) -> str:
        return (
            f"BinaryReader(pos={self._position}, "
            f"remaining={self.remaining}, "
            f"total={len(self._data)})"
        )

    def __len__(self) -> int:
        """Return total length in bytes."""
        return len(self._data)
