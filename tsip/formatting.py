"""
Human-readable rendering of decoded packets.

This is the presentation layer: it converts radians to degrees, adds the
base year to software version dates and filters unusable satellites. The
packet models themselves always hold the raw wire values.

Each formatter returns one line of text, or None when the packet should
not be shown (a tracking status report for a satellite with no signal).

Example:
    >>> from tsip.formatting import format_packet
    >>> line = format_packet(packet)
    >>> if line is not None:
    ...     print(line)
"""

from __future__ import annotations

import math
from typing import Callable

from tsip.models.packets import (
    DecodedPacket,
    PPSCharacteristicsPacket,
    PrimaryTimingPacket,
    SatelliteSignalReport,
    SatelliteTrackingStatusPacket,
    SecondaryTimingPacket,
    SoftwareVersionPacket,
)
from tsip.parsers.decoder import DecodeFailure
from tsip.protocol.constants import PacketKind


def rad_to_deg(radians: float) -> float:
    """Convert radians to degrees."""
    return radians * 180.0 / math.pi


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves rounding toward +infinity."""
    return math.floor(value + 0.5)


def format_primary_timing(packet: PrimaryTimingPacket) -> str:
    return (
        f"Primary Timing Packet:  {packet.year:04d}/{packet.month:02d}/{packet.day_of_month:02d} "
        f"{packet.hours:02d}:{packet.minutes:02d}:{packet.seconds:02d}  "
        f"(GPS offset {packet.utc_offset})"
    )


def format_secondary_timing(packet: SecondaryTimingPacket) -> str:
    return (
        f"Secondary packet:  RCV {packet.receiver_mode}, DIS {packet.disciplining_mode}, "
        f"SUR {packet.self_survey_progress} PPS-OFFSET: {packet.pps_offset:f} "
        f"CriticalAlarm: {packet.critical_alarms:x} MinorAlarm: {packet.minor_alarms:x} "
        f"DecodeStatus: {packet.gps_decode_status:x} Temp: {packet.temperature:f} "
        f"Lat: {rad_to_deg(packet.latitude):f} Long: {rad_to_deg(packet.longitude):f} "
        f"Alt: {packet.altitude:f}"
    )


def format_pps_characteristics(packet: PPSCharacteristicsPacket) -> str:
    return (
        f"PPS Characteristics packet: Output-enable {packet.pps_output_enable}, "
        f"Polarity {packet.pps_polarity}, PPS Offset: {packet.pps_offset:f}, "
        f"Bias Threshold: {packet.bias_threshold:f}"
    )


def format_tracking_status(packet: SatelliteTrackingStatusPacket) -> str | None:
    """
    Format a tracking status report.

    Returns None for satellites whose signal level truncates to zero or
    below; the receiver reports those for every channel it is not using.
    """
    signal = int(packet.signal_level)
    if signal <= 0:
        return None
    return (
        f"Satellite Tracking Status:  PRN: {packet.prn}, Signal: {signal}, "
        f"Elev: {round_half_up(rad_to_deg(packet.elevation))}, "
        f"Azi: {round_half_up(rad_to_deg(packet.azimuth))}"
    )


def format_software_version(packet: SoftwareVersionPacket) -> str:
    return (
        f"Software Version Response:  "
        f"App: {packet.app_major}.{packet.app_minor} "
        f"{packet.app_year:04d}/{packet.app_month:02d}/{packet.app_day:02d}  "
        f"GPS: {packet.gps_major}.{packet.gps_minor} "
        f"{packet.gps_year:04d}/{packet.gps_month:02d}/{packet.gps_day:02d}"
    )


def usable_signal_levels(report: SatelliteSignalReport) -> list[tuple[int, int]]:
    """
    Extract (prn, level) pairs worth showing from a signal report.

    Levels are truncated to integers; records at or below zero are
    dropped and the rest are sorted by PRN.
    """
    levels = [(record.prn, int(record.signal_level)) for record in report.records]
    return sorted(((prn, level) for prn, level in levels if level > 0), key=lambda item: item[0])


def format_signal_report(report: SatelliteSignalReport) -> str:
    pairs = "".join(f"{prn}/{level} " for prn, level in usable_signal_levels(report))
    return f"Satellite Signal Report PRN/Signal: {pairs}".rstrip()


def format_failure(failure: DecodeFailure) -> str:
    """
    Format a frame that could not be decoded.

    Unknown packets show their type byte and the byte after it in hex.
    """
    leading = failure.leading
    if len(leading) >= 2:
        return f"Unknown packet type: {leading[0]:x} ({leading[1]:x})"
    if leading:
        return f"Unknown packet type: {leading[0]:x}"
    return failure.message


_FORMATTERS: dict[PacketKind, Callable[..., str | None]] = {
    PacketKind.PRIMARY_TIMING: format_primary_timing,
    PacketKind.SECONDARY_TIMING: format_secondary_timing,
    PacketKind.PPS_CHARACTERISTICS: format_pps_characteristics,
    PacketKind.SATELLITE_TRACKING_STATUS: format_tracking_status,
    PacketKind.SOFTWARE_VERSION: format_software_version,
    PacketKind.SATELLITE_SIGNAL_REPORT: format_signal_report,
}


def format_packet(packet: DecodedPacket) -> str | None:
    """
    Format any decoded packet.

    Args:
        packet: Decoded packet model.

    Returns:
        One line of text, or None if the packet is not worth showing.
    """
    return _FORMATTERS[packet.kind](packet)
