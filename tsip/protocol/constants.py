"""
TSIP packet identifiers and protocol constants.

Based on the Trimble Thunderbolt / Thunderbolt E TSIP reference and the
reports observed from those receivers.
"""

from __future__ import annotations

from enum import Enum, IntEnum
from typing import Final


class ReportId(IntEnum):
    """
    Leading type byte of receiver-to-host reports.

    Reports in the 0x8F family are "superpackets": the second byte is a
    subcode selecting the actual report (see Subcode).
    """

    SOFTWARE_VERSION = 0x45
    """Software version information (response to 0x1F)."""

    SIGNAL_LEVELS = 0x47
    """Signal levels for all tracked satellites (response to 0x27)."""

    SATELLITE_TRACKING_STATUS = 0x5C
    """Satellite tracking status (response to 0x3C)."""

    SUPERPACKET = 0x8F
    """Timing superpacket family."""


class Subcode(IntEnum):
    """Second byte of 0x8F superpackets."""

    PPS_CHARACTERISTICS = 0x4A
    """PPS characteristics report."""

    PRIMARY_TIMING = 0xAB
    """Primary timing packet, broadcast once per second."""

    SECONDARY_TIMING = 0xAC
    """Supplemental timing packet, broadcast once per second."""


class CommandId(IntEnum):
    """Type byte of host-to-receiver commands."""

    GET_SOFTWARE_VERSION = 0x1F
    """Request software version (no data)."""

    GET_SIGNAL_LEVELS = 0x27
    """Request signal levels (no data)."""

    GET_SATELLITE_TRACKING_STATUS = 0x3C
    """Request satellite tracking status (1 byte: satellite number, 0 = all)."""


class PacketKind(Enum):
    """
    Closed set of decoded packet kinds.

    Every kind has exactly one model class and one codec (fixed layout or
    repeated-record layout).
    """

    PRIMARY_TIMING = "primary_timing"
    SECONDARY_TIMING = "secondary_timing"
    PPS_CHARACTERISTICS = "pps_characteristics"
    SATELLITE_TRACKING_STATUS = "satellite_tracking_status"
    SOFTWARE_VERSION = "software_version"
    SATELLITE_SIGNAL_REPORT = "satellite_signal_report"


class OverflowPolicy(Enum):
    """What the frame assembler does when a frame exceeds the length bound."""

    TRUNCATE = "truncate"
    """Drop bytes beyond the bound; the frame still completes (reference behavior)."""

    FAIL = "fail"
    """Abandon the frame with FrameOverflowError and wait for the next start."""


class ProtocolConstants:
    """
    TSIP protocol constants.

    Contains frame delimiters, buffer sizes, and default connection
    settings used throughout the protocol implementation.
    """

    # ===== Frame Delimiters =====

    DLE: Final[int] = 0x10
    """Data Link Escape: frame start/end marker and escape byte."""

    ETX: Final[int] = 0x03
    """End of Text: terminates a frame after an unescaped DLE."""

    # ===== Buffer Sizes =====

    MAX_FRAME_LENGTH: Final[int] = 256
    """Maximum de-stuffed frame length in bytes."""

    # ===== Special Values =====

    BASE_YEAR: Final[int] = 2000
    """Software version years are reported as an offset from this year."""

    ALL_SATELLITES: Final[int] = 0
    """Satellite number meaning "all satellites" in 0x3C requests."""

    # ===== Connection Defaults =====

    DEFAULT_TCP_PORT: Final[int] = 4001
    """Default TCP port of common serial-to-network bridges."""

    DEFAULT_BAUD_RATE: Final[int] = 9600
    """Thunderbolt default baud rate (8 data bits, no parity, 1 stop bit)."""


DLE: Final[int] = ProtocolConstants.DLE
ETX: Final[int] = ProtocolConstants.ETX
