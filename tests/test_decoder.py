"""Tests for PacketDecoder."""

import pytest

from tsip.exceptions import TruncationError, UnmatchedKindError
from tsip.models.packets import (
    PrimaryTimingPacket,
    SatelliteSignalReport,
    SoftwareVersionPacket,
)
from tsip.parsers.codec import PRIMARY_TIMING_CODEC
from tsip.parsers.decoder import (
    DecodeFailure,
    DecodeResult,
    PacketDecoder,
    decode_packet,
)
from tsip.parsers.registry import MatchEntry, PacketRegistry
from tsip.protocol.constants import PacketKind
from tsip.protocol.frame_reader import iter_frames
from tsip.protocol.frame_writer import frame_command


class TestPacketDecoder:
    """Tests for PacketDecoder.decode()."""

    def test_software_version_from_stream(self):
        """Test the full path from raw stream bytes to a version packet."""
        stream = bytes.fromhex("10 03 10 45 01 02 00 01 0a 01 03 00 02 03 10 03")
        (frame,) = iter_frames(stream)
        packet = decode_packet(frame)

        assert isinstance(packet, SoftwareVersionPacket)
        assert packet.kind == PacketKind.SOFTWARE_VERSION
        assert (packet.app_major, packet.app_minor) == (1, 2)
        assert (packet.gps_major, packet.gps_minor) == (1, 3)
        assert packet.app_year == 2010
        assert packet.gps_year == 2003

    def test_superpacket(self):
        frame = b"\x8f\xab" + bytes(16)
        packet = decode_packet(frame)
        assert isinstance(packet, PrimaryTimingPacket)

    def test_signal_report_falls_through_to_variable_handler(self):
        packet = decode_packet(bytes.fromhex("47 02 05 3f800000 07 40000000"))
        assert isinstance(packet, SatelliteSignalReport)
        assert [r.prn for r in packet.records] == [5, 7]

    def test_unknown_kind(self):
        with pytest.raises(UnmatchedKindError) as exc_info:
            decode_packet(b"\x99\x01\x02")
        assert exc_info.value.leading == b"\x99\x01"
        assert "99 01" in str(exc_info.value)

    def test_unknown_superpacket_subcode(self):
        with pytest.raises(UnmatchedKindError):
            decode_packet(b"\x8f\x41" + bytes(20))

    def test_truncated(self):
        with pytest.raises(TruncationError):
            decode_packet(b"\x45\x01\x02")

    def test_empty_frame(self):
        with pytest.raises(TruncationError):
            decode_packet(b"")

    def test_custom_registry(self):
        """Test a decoder restricted to a custom table."""
        registry = PacketRegistry([MatchEntry(b"\x8f\xab", PacketKind.PRIMARY_TIMING)])
        decoder = PacketDecoder(registry=registry)
        assert decoder.registry is registry
        with pytest.raises(UnmatchedKindError):
            decoder.decode(b"\x45" + bytes(10))

    def test_registry_entry_for_record_list_kind(self):
        """Test a registry naming 0x47 still decodes through the record-list handler."""
        registry = PacketRegistry([MatchEntry(b"\x47", PacketKind.SATELLITE_SIGNAL_REPORT)])
        decoder = PacketDecoder(registry=registry)

        packet = decoder.decode(bytes.fromhex("47 01 05 3f800000"))
        assert isinstance(packet, SatelliteSignalReport)
        assert packet.records[0].prn == 5
        assert packet.records[0].signal_level == 1.0

        result, value = decoder.try_decode(bytes.fromhex("47 02 05 3f800000"))
        assert result == DecodeResult.TRUNCATED
        assert isinstance(value, DecodeFailure)


class TestTryDecode:
    """Tests for PacketDecoder.try_decode()."""

    @pytest.fixture
    def decoder(self):
        return PacketDecoder()

    def test_success(self, decoder):
        result, packet = decoder.try_decode(b"\x45" + bytes(10))
        assert result == DecodeResult.SUCCESS
        assert isinstance(packet, SoftwareVersionPacket)

    def test_unknown(self, decoder):
        result, failure = decoder.try_decode(b"\x99\x01")
        assert result == DecodeResult.UNKNOWN_PACKET
        assert isinstance(failure, DecodeFailure)
        assert failure.leading == b"\x99\x01"

    def test_truncated(self, decoder):
        result, failure = decoder.try_decode(b"\x5c\x01")
        assert result == DecodeResult.TRUNCATED
        assert "SatelliteTrackingStatusPacket" in failure.message

    def test_empty(self, decoder):
        result, failure = decoder.try_decode(b"")
        assert result == DecodeResult.EMPTY_FRAME
        assert failure.frame == b""

    def test_unknown_does_not_disturb_following_frames(self, decoder):
        """Test an unknown frame in the middle of a stream is isolated."""
        timing = PRIMARY_TIMING_CODEC.encode(
            PrimaryTimingPacket(
                time_of_week=1,
                week_number=2,
                utc_offset=18,
                timing_flag=0,
                seconds=0,
                minutes=0,
                hours=0,
                day_of_month=1,
                month=1,
                year=2024,
            )
        )
        stream = (
            frame_command(b"\x99", b"\x01\x02")
            + frame_command(timing[:2], timing[2:])
            + frame_command(b"\x45", bytes(10))
        )
        results = [decoder.try_decode(frame)[0] for frame in iter_frames(stream)]
        assert results == [
            DecodeResult.UNKNOWN_PACKET,
            DecodeResult.SUCCESS,
            DecodeResult.SUCCESS,
        ]
