"""
Protocol layer for TSIP communication.

This module contains the low-level protocol handling:
- Packet ids and protocol constants
- Frame assembly (DLE de-stuffing and DLE/ETX boundary detection)
- Frame construction for outgoing commands
- Fixed binary field layouts
"""

from tsip.protocol.constants import (
    DLE,
    ETX,
    CommandId,
    OverflowPolicy,
    PacketKind,
    ProtocolConstants,
    ReportId,
    Subcode,
)
from tsip.protocol.frame_reader import (
    BoundedBuffer,
    FrameAssembler,
    FrameAssemblerState,
    FrameReader,
    iter_frames,
)
from tsip.protocol.frame_writer import encode_command, frame_command, stuff
from tsip.protocol.layout import EMPTY_LAYOUT, FieldSpec, FieldType, PacketLayout

__all__ = [
    # Constants
    "DLE",
    "ETX",
    "CommandId",
    "ReportId",
    "Subcode",
    "PacketKind",
    "OverflowPolicy",
    "ProtocolConstants",
    # Frame Assembly
    "BoundedBuffer",
    "FrameAssembler",
    "FrameAssemblerState",
    "FrameReader",
    "iter_frames",
    # Frame Construction
    "stuff",
    "frame_command",
    "encode_command",
    # Layouts
    "FieldType",
    "FieldSpec",
    "PacketLayout",
    "EMPTY_LAYOUT",
]
