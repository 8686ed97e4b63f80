"""Tests for data models."""

import pytest
from pydantic import ValidationError

from tsip.models.commands import (
    GetSatelliteTrackingStatusCommand,
    GetSignalLevelsCommand,
    GetSoftwareVersionCommand,
)
from tsip.models.packets import (
    SatelliteSignalReport,
    SignalLevel,
    SoftwareVersionPacket,
)
from tsip.protocol.constants import PacketKind


def version(**overrides):
    values = dict(
        app_major=1,
        app_minor=2,
        app_month=3,
        app_day=4,
        app_year_offset=5,
        gps_major=6,
        gps_minor=7,
        gps_month=8,
        gps_day=9,
        gps_year_offset=10,
    )
    values.update(overrides)
    return SoftwareVersionPacket(**values)


class TestSoftwareVersionPacket:
    """Tests for SoftwareVersionPacket model."""

    def test_years_from_offset(self):
        """Test years are the 2000 base plus the raw offset."""
        packet = version(app_year_offset=0, gps_year_offset=2)
        assert packet.app_year == 2000
        assert packet.gps_year == 2002

    def test_offset_kept_raw(self):
        assert version(app_year_offset=19).app_year_offset == 19

    def test_kind(self):
        assert version().kind == PacketKind.SOFTWARE_VERSION

    def test_frozen(self):
        """Test packets are immutable."""
        packet = version()
        with pytest.raises(ValidationError):
            packet.app_major = 9

    def test_byte_range(self):
        with pytest.raises(ValidationError):
            version(app_major=256)

    def test_kind_not_a_field(self):
        """Test the kind tag is class-level, not serialized."""
        assert "kind" not in version().model_dump()


class TestSatelliteSignalReport:
    """Tests for SatelliteSignalReport model."""

    def test_count(self):
        report = SatelliteSignalReport(records=(
            SignalLevel(prn=5, signal_level=1.0),
            SignalLevel(prn=7, signal_level=2.0),
        ))
        assert report.count == 2

    def test_empty(self):
        assert SatelliteSignalReport(records=()).count == 0

    def test_record_limit(self):
        """Test the one-byte count limits reports to 255 records."""
        records = tuple(SignalLevel(prn=1, signal_level=0.0) for _ in range(256))
        with pytest.raises(ValidationError):
            SatelliteSignalReport(records=records)


class TestCommands:
    """Tests for command models."""

    def test_packet_ids(self):
        assert GetSoftwareVersionCommand.packet_id == b"\x1f"
        assert GetSignalLevelsCommand.packet_id == b"\x27"
        assert GetSatelliteTrackingStatusCommand.packet_id == b"\x3c"

    def test_bodiless_commands(self):
        assert GetSoftwareVersionCommand().encode_body() == b""
        assert GetSignalLevelsCommand().encode_body() == b""

    def test_tracking_status_body(self):
        assert GetSatelliteTrackingStatusCommand().encode_body() == b"\x00"
        assert GetSatelliteTrackingStatusCommand(satellite_number=12).encode_body() == b"\x0c"

    def test_satellite_number_range(self):
        with pytest.raises(ValidationError):
            GetSatelliteTrackingStatusCommand(satellite_number=256)

    def test_str(self):
        assert str(GetSatelliteTrackingStatusCommand()) == "GetSatelliteTrackingStatusCommand(0x3c)"
