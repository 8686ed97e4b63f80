"""
Pydantic models for host-to-receiver commands.

A command knows its packet id and the layout of its body. The observed
command set carries at most one byte of data, but layouts of any fixed
width are supported.
"""

from __future__ import annotations

from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field

from tsip.protocol.constants import CommandId, ProtocolConstants
from tsip.protocol.layout import EMPTY_LAYOUT, FieldType, PacketLayout


class Command(BaseModel):
    """Base class for commands."""

    model_config = ConfigDict(frozen=True)

    packet_id: ClassVar[bytes]
    layout: ClassVar[PacketLayout] = EMPTY_LAYOUT

    def encode_body(self) -> bytes:
        """
        Pack the command's fields (unstuffed, without packet id).

        Raises:
            EncodeError: If a field does not fit its wire width.
        """
        return self.layout.pack(self.model_dump())

    def __str__(self) -> str:
        return f"{type(self).__name__}(0x{self.packet_id.hex()})"


class GetSoftwareVersionCommand(Command):
    """Request software version (0x1F); answered with a 0x45 report."""

    packet_id: ClassVar[bytes] = bytes([CommandId.GET_SOFTWARE_VERSION])


class GetSignalLevelsCommand(Command):
    """Request signal levels (0x27); answered with a 0x47 report."""

    packet_id: ClassVar[bytes] = bytes([CommandId.GET_SIGNAL_LEVELS])


class GetSatelliteTrackingStatusCommand(Command):
    """
    Request satellite tracking status (0x3C).

    Answered with one 0x5C report per satellite; satellite_number 0
    requests all satellites.
    """

    packet_id: ClassVar[bytes] = bytes([CommandId.GET_SATELLITE_TRACKING_STATUS])
    layout: ClassVar[PacketLayout] = PacketLayout.of(("satellite_number", FieldType.UINT8))

    satellite_number: int = Field(default=ProtocolConstants.ALL_SATELLITES, ge=0, le=0xFF)
