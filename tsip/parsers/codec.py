"""
Fixed-layout packet codecs.

Each fixed-format report kind pairs a model class with the PacketLayout of
the fields that follow its packet id. Decoding reads the fields in order
from just past the id; encoding writes them back in the same order.

Layouts (all big-endian, no padding):

- 8F-AB Primary timing: 16 bytes
- 8F-AC Supplemental timing: 67 bytes
- 8F-4A PPS characteristics: 15 bytes
- 5C Satellite tracking status: 24 bytes
- 45 Software version: 10 bytes
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Final

from tsip.exceptions import EncodeError
from tsip.models.packets import (
    Packet,
    PPSCharacteristicsPacket,
    PrimaryTimingPacket,
    SatelliteTrackingStatusPacket,
    SecondaryTimingPacket,
    SoftwareVersionPacket,
)
from tsip.parsers.binary_reader import BinaryReader
from tsip.protocol.constants import PacketKind, ReportId, Subcode
from tsip.protocol.layout import FieldType, PacketLayout

logger = logging.getLogger(__name__)

U8 = FieldType.UINT8
U16 = FieldType.UINT16
I16 = FieldType.INT16
U32 = FieldType.UINT32
I64 = FieldType.INT64
F32 = FieldType.FLOAT32
F64 = FieldType.FLOAT64


@dataclass(frozen=True)
class PacketCodec:
    """
    Decoder/encoder for one fixed-layout packet kind.

    Attributes:
        packet_id: Leading bytes identifying the packet on the wire.
        model: Pydantic model class produced by decode().
        layout: Fields following the packet id.
    """

    packet_id: bytes
    model: type[Packet]
    layout: PacketLayout

    def __post_init__(self) -> None:
        model_fields = tuple(self.model.model_fields)
        if model_fields != self.layout.names:
            raise ValueError(
                f"{self.model.__name__} fields {model_fields} do not match layout {self.layout.names}"
            )

    @property
    def kind(self) -> PacketKind:
        return self.model.kind

    def decode(self, frame: bytes | bytearray | memoryview, offset: int | None = None) -> Packet:
        """
        Decode a frame into a packet model.

        Args:
            frame: De-stuffed frame.
            offset: Index of the first field. Defaults to the packet id length.

        Returns:
            Decoded packet.

        Raises:
            TruncationError: If the frame is shorter than the layout.
        """
        start = len(self.packet_id) if offset is None else offset
        reader = BinaryReader(frame, start, context=self.model.__name__)
        reader.require(self.layout.size)
        values = self.layout.read(reader)
        if not reader.is_at_end():
            logger.debug(
                "%s: ignoring %d trailing bytes",
                self.model.__name__,
                reader.remaining,
            )
        return self.model(**values)

    def encode(self, packet: Packet) -> bytes:
        """
        Encode a packet into its de-stuffed frame (packet id included).

        Raises:
            EncodeError: If the packet is not of this codec's model.
        """
        if not isinstance(packet, self.model):
            raise EncodeError(
                f"{self.model.__name__} codec cannot encode {type(packet).__name__}"
            )
        return self.packet_id + self.layout.pack(packet.model_dump())


def _superpacket(subcode: Subcode) -> bytes:
    return bytes([ReportId.SUPERPACKET, subcode])


PRIMARY_TIMING_CODEC: Final[PacketCodec] = PacketCodec(
    packet_id=_superpacket(Subcode.PRIMARY_TIMING),
    model=PrimaryTimingPacket,
    layout=PacketLayout.of(
        ("time_of_week", U32),
        ("week_number", U16),
        ("utc_offset", I16),
        ("timing_flag", U8),
        ("seconds", U8),
        ("minutes", U8),
        ("hours", U8),
        ("day_of_month", U8),
        ("month", U8),
        ("year", U16),
    ),
)

SECONDARY_TIMING_CODEC: Final[PacketCodec] = PacketCodec(
    packet_id=_superpacket(Subcode.SECONDARY_TIMING),
    model=SecondaryTimingPacket,
    layout=PacketLayout.of(
        ("receiver_mode", U8),
        ("disciplining_mode", U8),
        ("self_survey_progress", U8),
        ("holdover_duration", U32),
        ("critical_alarms", U16),
        ("minor_alarms", U16),
        ("gps_decode_status", U8),
        ("disciplining_activity", U8),
        ("spare_status1", U8),
        ("spare_status2", U8),
        ("pps_offset", F32),
        ("ten_mhz_offset", F32),
        ("dac_value", U32),
        ("dac_voltage", F32),
        ("temperature", F32),
        ("latitude", F64),
        ("longitude", F64),
        ("altitude", F64),
        ("spare", I64),
    ),
)

PPS_CHARACTERISTICS_CODEC: Final[PacketCodec] = PacketCodec(
    packet_id=_superpacket(Subcode.PPS_CHARACTERISTICS),
    model=PPSCharacteristicsPacket,
    layout=PacketLayout.of(
        ("pps_output_enable", U8),
        ("reserved", U8),
        ("pps_polarity", U8),
        ("pps_offset", F64),
        ("bias_threshold", F32),
    ),
)

SATELLITE_TRACKING_STATUS_CODEC: Final[PacketCodec] = PacketCodec(
    packet_id=bytes([ReportId.SATELLITE_TRACKING_STATUS]),
    model=SatelliteTrackingStatusPacket,
    layout=PacketLayout.of(
        ("prn", U8),
        ("slot_and_channel", U8),
        ("acquisition", U8),
        ("ephemeris", U8),
        ("signal_level", F32),
        ("last_measurement_time", F32),
        ("elevation", F32),
        ("azimuth", F32),
        ("old_measurement", U8),
        ("integer_msec", U8),
        ("bad_data", U8),
        ("data_collection", U8),
    ),
)

SOFTWARE_VERSION_CODEC: Final[PacketCodec] = PacketCodec(
    packet_id=bytes([ReportId.SOFTWARE_VERSION]),
    model=SoftwareVersionPacket,
    layout=PacketLayout.of(
        ("app_major", U8),
        ("app_minor", U8),
        ("app_month", U8),
        ("app_day", U8),
        ("app_year_offset", U8),
        ("gps_major", U8),
        ("gps_minor", U8),
        ("gps_month", U8),
        ("gps_day", U8),
        ("gps_year_offset", U8),
    ),
)

FIXED_CODECS: Final[tuple[PacketCodec, ...]] = (
    PRIMARY_TIMING_CODEC,
    SECONDARY_TIMING_CODEC,
    PPS_CHARACTERISTICS_CODEC,
    SATELLITE_TRACKING_STATUS_CODEC,
    SOFTWARE_VERSION_CODEC,
)
"""Fixed-layout codecs in match priority order (longest ids first)."""

CODECS_BY_KIND: Final[dict[PacketKind, PacketCodec]] = {codec.kind: codec for codec in FIXED_CODECS}
"""Codec lookup by packet kind."""


def get_codec(kind: PacketKind) -> PacketCodec:
    """
    Get the fixed-layout codec for a kind.

    Raises:
        KeyError: If the kind is not fixed-layout (e.g. the signal report).
    """
    return CODECS_BY_KIND[kind]
