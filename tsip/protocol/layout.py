"""
Fixed binary layouts for TSIP packet bodies.

Every fixed-format TSIP packet is a flat sequence of big-endian fields with
no padding or alignment. A PacketLayout is the ordered list of those fields;
it knows its total size and how to pack values, and reads values through a
BinaryReader so that short bodies fail with TruncationError.
"""

from __future__ import annotations

import struct
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any

from tsip.exceptions import EncodeError

if TYPE_CHECKING:
    from tsip.parsers.binary_reader import BinaryReader


class FieldType(Enum):
    """
    Wire field types.

    Each value is (struct format character, width in bytes).
    """

    UINT8 = ("B", 1)
    INT8 = ("b", 1)
    UINT16 = ("H", 2)
    INT16 = ("h", 2)
    UINT32 = ("I", 4)
    INT32 = ("i", 4)
    INT64 = ("q", 8)
    FLOAT32 = ("f", 4)
    FLOAT64 = ("d", 8)

    @property
    def format_char(self) -> str:
        return self.value[0]

    @property
    def size(self) -> int:
        return self.value[1]


@dataclass(frozen=True)
class FieldSpec:
    """One named field of a layout."""

    name: str
    type: FieldType


@dataclass(frozen=True)
class PacketLayout:
    """
    Ordered field layout of a packet body.

    Example:
        >>> layout = PacketLayout.of(("prn", FieldType.UINT8), ("level", FieldType.FLOAT32))
        >>> layout.size
        5
        >>> layout.pack({"prn": 5, "level": 1.0}).hex()
        '053f800000'
    """

    fields: tuple[FieldSpec, ...]
    _struct: struct.Struct = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        names = [spec.name for spec in self.fields]
        if len(set(names)) != len(names):
            raise ValueError(f"Duplicate field names in layout: {names}")
        fmt = ">" + "".join(spec.type.format_char for spec in self.fields)
        object.__setattr__(self, "_struct", struct.Struct(fmt))

    @classmethod
    def of(cls, *fields: tuple[str, FieldType]) -> PacketLayout:
        """Build a layout from (name, type) pairs."""
        return cls(tuple(FieldSpec(name, field_type) for name, field_type in fields))

    @property
    def size(self) -> int:
        """Total body size in bytes."""
        return self._struct.size

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(spec.name for spec in self.fields)

    def read(self, reader: BinaryReader) -> dict[str, Any]:
        """
        Read all fields in declared order.

        Raises:
            TruncationError: If the reader runs out of bytes.
        """
        return {spec.name: reader.read_field(spec.type) for spec in self.fields}

    def pack(self, values: Mapping[str, Any]) -> bytes:
        """
        Pack field values in declared order.

        Raises:
            EncodeError: If a field is missing or does not fit its width.
        """
        try:
            ordered = [values[name] for name in self.names]
        except KeyError as e:
            raise EncodeError(f"Missing field {e.args[0]!r}") from e

        try:
            return self._struct.pack(*ordered)
        except (struct.error, OverflowError) as e:
            raise EncodeError(f"Cannot encode fields {self.names}: {e}") from e

    def __len__(self) -> int:
        return len(self.fields)


EMPTY_LAYOUT: PacketLayout = PacketLayout(())
"""Layout of bodiless commands."""
