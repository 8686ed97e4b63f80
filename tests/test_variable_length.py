"""Tests for variable-length report handling."""

import pytest

from tsip.exceptions import EncodeError, TruncationError
from tsip.models.packets import SatelliteSignalReport, SignalLevel
from tsip.parsers.variable_length import (
    DEFAULT_VARIABLE_HANDLER,
    SIGNAL_LEVELS_CODEC,
    VariableLengthHandler,
    decode_signal_report,
    encode_signal_report,
)
from tsip.protocol.constants import PacketKind

SIGNAL_REPORT = bytes.fromhex("47 02 05 3f800000 07 40000000")


class TestRecordListCodec:
    """Tests for RecordListCodec via the 0x47 codec."""

    def test_decode_records(self):
        """Test two records decode in wire order."""
        records = SIGNAL_LEVELS_CODEC.decode_records(SIGNAL_REPORT)
        assert records == [
            {"prn": 5, "signal_level": 1.0},
            {"prn": 7, "signal_level": 2.0},
        ]

    def test_zero_count(self):
        assert SIGNAL_LEVELS_CODEC.decode_records(b"\x47\x00") == []

    def test_missing_count_byte(self):
        with pytest.raises(TruncationError):
            SIGNAL_LEVELS_CODEC.decode_records(b"\x47")

    def test_count_exceeds_body(self):
        """Test a count larger than the records present is rejected."""
        with pytest.raises(TruncationError):
            SIGNAL_LEVELS_CODEC.decode_records(bytes.fromhex("47 03 05 3f800000 07 40000000"))

    def test_partial_record(self):
        with pytest.raises(TruncationError):
            SIGNAL_LEVELS_CODEC.decode_records(bytes.fromhex("47 01 05 3f80"))

    def test_trailing_bytes_ignored(self):
        records = SIGNAL_LEVELS_CODEC.decode_records(bytes.fromhex("47 01 05 3f800000 ff"))
        assert len(records) == 1

    def test_encode_records(self):
        body = SIGNAL_LEVELS_CODEC.encode_records([
            {"prn": 5, "signal_level": 1.0},
            {"prn": 7, "signal_level": 2.0},
        ])
        assert body == SIGNAL_REPORT

    def test_encode_too_many_records(self):
        records = [{"prn": 1, "signal_level": 0.0}] * 256
        with pytest.raises(EncodeError):
            SIGNAL_LEVELS_CODEC.encode_records(records)


class TestSignalReport:
    """Tests for the SatelliteSignalReport helpers."""

    def test_decode(self):
        report = decode_signal_report(SIGNAL_REPORT)
        assert report.count == 2
        assert [r.prn for r in report.records] == [5, 7]
        assert [r.signal_level for r in report.records] == [1.0, 2.0]

    def test_records_unfiltered(self):
        """Test negative levels are kept; filtering is for display only."""
        body = bytes.fromhex("47 02 0c bf800000 03 41200000")
        report = decode_signal_report(body)
        assert [(r.prn, r.signal_level) for r in report.records] == [(12, -1.0), (3, 10.0)]

    def test_encode(self):
        report = SatelliteSignalReport(records=(
            SignalLevel(prn=5, signal_level=1.0),
            SignalLevel(prn=7, signal_level=2.0),
        ))
        assert encode_signal_report(report) == SIGNAL_REPORT


class TestVariableLengthHandler:
    """Tests for VariableLengthHandler dispatch."""

    def test_recognizes(self):
        handler = VariableLengthHandler()
        assert handler.recognizes(0x47)
        assert not handler.recognizes(0x99)

    def test_kind_for(self):
        assert DEFAULT_VARIABLE_HANDLER.kind_for(0x47) == PacketKind.SATELLITE_SIGNAL_REPORT
        assert DEFAULT_VARIABLE_HANDLER.kind_for(0x99) is None

    def test_decode_known(self):
        report = DEFAULT_VARIABLE_HANDLER.decode(SIGNAL_REPORT)
        assert isinstance(report, SatelliteSignalReport)
        assert report.kind == PacketKind.SATELLITE_SIGNAL_REPORT

    def test_decode_unknown_returns_none(self):
        assert DEFAULT_VARIABLE_HANDLER.decode(b"\x99\x01") is None

    def test_decode_empty_returns_none(self):
        assert DEFAULT_VARIABLE_HANDLER.decode(b"") is None
