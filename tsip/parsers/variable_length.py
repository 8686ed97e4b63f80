"""
Variable-length (repeated-record) packet handling.

Some reports carry a list instead of a fixed struct:

    <type byte> <count n> <record 1> ... <record n>

Records are fixed-size and laid out back to back. These packets are tried
only after the fixed-layout registry found no match, keyed by the type byte
alone.

Supported:
- 0x47 Signal levels: records of (PRN u8, signal level f32)
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Final

from tsip.exceptions import EncodeError
from tsip.models.packets import SatelliteSignalReport, SignalLevel
from tsip.parsers.binary_reader import BinaryReader
from tsip.protocol.constants import PacketKind, ReportId
from tsip.protocol.layout import FieldType, PacketLayout

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RecordListCodec:
    """
    Codec for a count-prefixed list of fixed-size records.

    Attributes:
        type_byte: Report id.
        record_layout: Layout of each record.
    """

    type_byte: int
    record_layout: PacketLayout

    def decode_records(self, body: bytes | bytearray | memoryview) -> list[dict]:
        """
        Decode the records of a report.

        Args:
            body: De-stuffed frame starting with the type byte.

        Returns:
            Field dicts in wire order, exactly `count` of them.

        Raises:
            TruncationError: If the body holds fewer records than its count.
        """
        reader = BinaryReader(body, context=f"0x{self.type_byte:02X} record list")
        reader.skip(1)
        count = reader.read_uint8()
        reader.require(count * self.record_layout.size)
        records = [self.record_layout.read(reader) for _ in range(count)]
        if not reader.is_at_end():
            logger.debug(
                "0x%02X: ignoring %d trailing bytes after %d records",
                self.type_byte,
                reader.remaining,
                count,
            )
        return records

    def encode_records(self, records: Iterable[dict]) -> bytes:
        """
        Encode records into a de-stuffed frame (type byte and count included).

        Raises:
            EncodeError: If there are more than 255 records or a field
                does not fit.
        """
        packed = [self.record_layout.pack(record) for record in records]
        if len(packed) > 0xFF:
            raise EncodeError(f"Too many records for one-byte count: {len(packed)}")
        return bytes([self.type_byte, len(packed)]) + b"".join(packed)


SIGNAL_LEVELS_CODEC: Final[RecordListCodec] = RecordListCodec(
    type_byte=ReportId.SIGNAL_LEVELS,
    record_layout=PacketLayout.of(
        ("prn", FieldType.UINT8),
        ("signal_level", FieldType.FLOAT32),
    ),
)


def decode_signal_report(body: bytes | bytearray | memoryview) -> SatelliteSignalReport:
    """Decode a 0x47 signal levels report."""
    records = SIGNAL_LEVELS_CODEC.decode_records(body)
    return SatelliteSignalReport(records=tuple(SignalLevel(**record) for record in records))


def encode_signal_report(report: SatelliteSignalReport) -> bytes:
    """Encode a 0x47 signal levels report into its de-stuffed frame."""
    return SIGNAL_LEVELS_CODEC.encode_records(record.model_dump() for record in report.records)


class VariableLengthHandler:
    """
    Dispatch for variable-length reports, keyed by type byte.

    Example:
        >>> handler = VariableLengthHandler()
        >>> handler.recognizes(0x47)
        True
        >>> report = handler.decode(bytes.fromhex("47 01 05 3f800000"))
        >>> report.records[0].prn
        5
    """

    def __init__(self) -> None:
        self._decoders = {
            SIGNAL_LEVELS_CODEC.type_byte: (PacketKind.SATELLITE_SIGNAL_REPORT, decode_signal_report),
        }

    def recognizes(self, type_byte: int) -> bool:
        return type_byte in self._decoders

    def kind_for(self, type_byte: int) -> PacketKind | None:
        entry = self._decoders.get(type_byte)
        return entry[0] if entry else None

    def decode(self, body: bytes | bytearray | memoryview) -> SatelliteSignalReport | None:
        """
        Decode a variable-length report.

        Args:
            body: De-stuffed frame starting with the type byte.

        Returns:
            Decoded report, or None if the type byte is not recognized.

        Raises:
            TruncationError: If the body is shorter than its count requires.
        """
        if not body:
            return None
        entry = self._decoders.get(body[0])
        if entry is None:
            return None
        return entry[1](body)


DEFAULT_VARIABLE_HANDLER: VariableLengthHandler = VariableLengthHandler()
"""Default handler instance for convenience."""
