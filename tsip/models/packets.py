"""
Pydantic models for decoded TSIP reports.

Each model holds the raw field values exactly as transmitted:

- Angles (latitude, longitude, elevation, azimuth) stay in radians
- Software version years stay as the offset from 2000 the receiver sends
- Signal levels stay in the receiver's units (AMU or dBHz)

Unit conversion belongs to the presentation layer (tsip.formatting).
All models are frozen; a packet value lives for one dispatch cycle.
"""

from __future__ import annotations

from typing import ClassVar, Union

from pydantic import BaseModel, ConfigDict, Field

from tsip.protocol.constants import PacketKind, ProtocolConstants


class Packet(BaseModel):
    """Base class for decoded reports."""

    model_config = ConfigDict(frozen=True)

    kind: ClassVar[PacketKind]


class PrimaryTimingPacket(Packet):
    """
    Primary timing packet (0x8F-AB).

    Broadcast once per second; carries GPS time and the UTC calendar date
    and time of the current second.
    """

    kind: ClassVar[PacketKind] = PacketKind.PRIMARY_TIMING

    time_of_week: int = Field(ge=0, le=0xFFFFFFFF, description="GPS seconds of week")
    week_number: int = Field(ge=0, le=0xFFFF, description="GPS week number")
    utc_offset: int = Field(ge=-0x8000, le=0x7FFF, description="UTC offset in seconds")
    timing_flag: int = Field(ge=0, le=0xFF, description="Timing flag bits")
    seconds: int = Field(ge=0, le=0xFF)
    minutes: int = Field(ge=0, le=0xFF)
    hours: int = Field(ge=0, le=0xFF)
    day_of_month: int = Field(ge=0, le=0xFF)
    month: int = Field(ge=0, le=0xFF)
    year: int = Field(ge=0, le=0xFFFF, description="Four-digit year")


class SecondaryTimingPacket(Packet):
    """
    Supplemental timing packet (0x8F-AC).

    Receiver and disciplining status, alarms, oscillator data and the
    current position. Latitude and longitude are in radians, altitude in
    meters.
    """

    kind: ClassVar[PacketKind] = PacketKind.SECONDARY_TIMING

    receiver_mode: int = Field(ge=0, le=0xFF)
    disciplining_mode: int = Field(ge=0, le=0xFF)
    self_survey_progress: int = Field(ge=0, le=0xFF, description="Percent complete")
    holdover_duration: int = Field(ge=0, le=0xFFFFFFFF, description="Seconds")
    critical_alarms: int = Field(ge=0, le=0xFFFF, description="Critical alarm bits")
    minor_alarms: int = Field(ge=0, le=0xFFFF, description="Minor alarm bits")
    gps_decode_status: int = Field(ge=0, le=0xFF)
    disciplining_activity: int = Field(ge=0, le=0xFF)
    spare_status1: int = Field(ge=0, le=0xFF)
    spare_status2: int = Field(ge=0, le=0xFF)
    pps_offset: float = Field(description="PPS offset in nanoseconds")
    ten_mhz_offset: float = Field(description="10 MHz offset in ppb")
    dac_value: int = Field(ge=0, le=0xFFFFFFFF)
    dac_voltage: float = Field(description="DAC voltage in volts")
    temperature: float = Field(description="Degrees Celsius")
    latitude: float = Field(description="Radians")
    longitude: float = Field(description="Radians")
    altitude: float = Field(description="Meters")
    spare: int = Field(ge=-(2**63), le=2**63 - 1)


class PPSCharacteristicsPacket(Packet):
    """PPS characteristics report (0x8F-4A)."""

    kind: ClassVar[PacketKind] = PacketKind.PPS_CHARACTERISTICS

    pps_output_enable: int = Field(ge=0, le=0xFF)
    reserved: int = Field(ge=0, le=0xFF)
    pps_polarity: int = Field(ge=0, le=0xFF)
    pps_offset: float = Field(description="Cable delay in seconds")
    bias_threshold: float = Field(description="Bias uncertainty threshold in meters")


class SatelliteTrackingStatusPacket(Packet):
    """
    Satellite tracking status (0x5C), one report per satellite.

    Elevation and azimuth are in radians.
    """

    kind: ClassVar[PacketKind] = PacketKind.SATELLITE_TRACKING_STATUS

    prn: int = Field(ge=0, le=0xFF, description="Satellite PRN number")
    slot_and_channel: int = Field(ge=0, le=0xFF)
    acquisition: int = Field(ge=0, le=0xFF, description="0 never, 1 acquired, 2 re-opened search")
    ephemeris: int = Field(ge=0, le=0xFF)
    signal_level: float
    last_measurement_time: float = Field(description="GPS seconds of week")
    elevation: float = Field(description="Radians")
    azimuth: float = Field(description="Radians")
    old_measurement: int = Field(ge=0, le=0xFF)
    integer_msec: int = Field(ge=0, le=0xFF)
    bad_data: int = Field(ge=0, le=0xFF)
    data_collection: int = Field(ge=0, le=0xFF)


class SoftwareVersionPacket(Packet):
    """
    Software version information (0x45).

    The Thunderbolt E reports years as an offset from 2000 (not 1900 as
    older documentation says); the offsets are stored unchanged and the
    app_year/gps_year properties add the base year.
    """

    kind: ClassVar[PacketKind] = PacketKind.SOFTWARE_VERSION

    app_major: int = Field(ge=0, le=0xFF)
    app_minor: int = Field(ge=0, le=0xFF)
    app_month: int = Field(ge=0, le=0xFF)
    app_day: int = Field(ge=0, le=0xFF)
    app_year_offset: int = Field(ge=0, le=0xFF)
    gps_major: int = Field(ge=0, le=0xFF)
    gps_minor: int = Field(ge=0, le=0xFF)
    gps_month: int = Field(ge=0, le=0xFF)
    gps_day: int = Field(ge=0, le=0xFF)
    gps_year_offset: int = Field(ge=0, le=0xFF)

    @property
    def app_year(self) -> int:
        return ProtocolConstants.BASE_YEAR + self.app_year_offset

    @property
    def gps_year(self) -> int:
        return ProtocolConstants.BASE_YEAR + self.gps_year_offset


class SignalLevel(BaseModel):
    """One PRN/signal-level record of a 0x47 report."""

    model_config = ConfigDict(frozen=True)

    prn: int = Field(ge=0, le=0xFF)
    signal_level: float


class SatelliteSignalReport(Packet):
    """
    Signal levels for all tracked satellites (0x47).

    Records are kept in wire order and unfiltered; a negative level means
    the satellite is not currently usable.
    """

    kind: ClassVar[PacketKind] = PacketKind.SATELLITE_SIGNAL_REPORT

    records: tuple[SignalLevel, ...] = Field(max_length=0xFF)

    @property
    def count(self) -> int:
        return len(self.records)


DecodedPacket = Union[
    PrimaryTimingPacket,
    SecondaryTimingPacket,
    PPSCharacteristicsPacket,
    SatelliteTrackingStatusPacket,
    SoftwareVersionPacket,
    SatelliteSignalReport,
]
"""Any decoded report."""
