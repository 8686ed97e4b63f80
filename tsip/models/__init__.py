"""
Data models for TSIP packets.

This module contains Pydantic models representing:

- Decoded receiver reports (timing, tracking status, version, signal levels)
- Host-to-receiver commands
"""

from tsip.models.commands import (
    Command,
    GetSatelliteTrackingStatusCommand,
    GetSignalLevelsCommand,
    GetSoftwareVersionCommand,
)
from tsip.models.packets import (
    DecodedPacket,
    Packet,
    PPSCharacteristicsPacket,
    PrimaryTimingPacket,
    SatelliteSignalReport,
    SatelliteTrackingStatusPacket,
    SecondaryTimingPacket,
    SignalLevel,
    SoftwareVersionPacket,
)

__all__ = [
    # Reports
    "Packet",
    "DecodedPacket",
    "PrimaryTimingPacket",
    "SecondaryTimingPacket",
    "PPSCharacteristicsPacket",
    "SatelliteTrackingStatusPacket",
    "SoftwareVersionPacket",
    "SatelliteSignalReport",
    "SignalLevel",
    # Commands
    "Command",
    "GetSoftwareVersionCommand",
    "GetSignalLevelsCommand",
    "GetSatelliteTrackingStatusCommand",
]
