"""Tests for PacketRegistry."""

import pytest

from tsip.exceptions import RegistryOrderError
from tsip.parsers.registry import (
    DEFAULT_REGISTRY,
    Match,
    MatchEntry,
    PacketRegistry,
    create_default_registry,
)
from tsip.protocol.constants import PacketKind


class TestMatchEntry:
    """Tests for MatchEntry."""

    def test_matches_prefix(self):
        entry = MatchEntry(b"\x8f\xab", PacketKind.PRIMARY_TIMING)
        assert entry.matches(b"\x8f\xab\x00\x01")
        assert not entry.matches(b"\x8f\xac\x00")

    def test_short_frame_does_not_match(self):
        """Test a frame shorter than the prefix never matches."""
        entry = MatchEntry(b"\x8f\xab", PacketKind.PRIMARY_TIMING)
        assert not entry.matches(b"\x8f")

    @pytest.mark.parametrize("prefix", [b"", b"\x8f\xab\x01"])
    def test_invalid_prefix_length(self, prefix):
        with pytest.raises(ValueError):
            MatchEntry(prefix, PacketKind.PRIMARY_TIMING)

    def test_repr_shows_hex(self):
        entry = MatchEntry(b"\x8f\x4a", PacketKind.PPS_CHARACTERISTICS)
        assert repr(entry) == "MatchEntry(8f 4a, PPS_CHARACTERISTICS)"


class TestPacketRegistry:
    """Tests for PacketRegistry class."""

    def test_default_table_order(self):
        """Test the default table lists superpackets before single bytes."""
        prefixes = [entry.prefix for entry in DEFAULT_REGISTRY]
        assert prefixes == [b"\x8f\xab", b"\x8f\xac", b"\x8f\x4a", b"\x5c", b"\x45"]

    def test_classify_each_default_kind(self):
        """Test every default entry classifies its own prefix."""
        registry = create_default_registry()
        assert registry.classify(b"\x8f\xab") == Match(PacketKind.PRIMARY_TIMING, 2)
        assert registry.classify(b"\x8f\xac") == Match(PacketKind.SECONDARY_TIMING, 2)
        assert registry.classify(b"\x8f\x4a") == Match(PacketKind.PPS_CHARACTERISTICS, 2)
        assert registry.classify(b"\x5c\x01") == Match(PacketKind.SATELLITE_TRACKING_STATUS, 1)
        assert registry.classify(b"\x45\x01") == Match(PacketKind.SOFTWARE_VERSION, 1)

    def test_signal_report_not_in_fixed_table(self):
        """Test 0x47 is left to the variable-length handler."""
        assert DEFAULT_REGISTRY.classify(b"\x47\x00") is None

    def test_unknown_prefix(self):
        assert DEFAULT_REGISTRY.classify(b"\x99\x01") is None

    def test_unknown_superpacket_subcode(self):
        assert DEFAULT_REGISTRY.classify(b"\x8f\x41") is None

    def test_empty_frame(self):
        assert DEFAULT_REGISTRY.classify(b"") is None

    def test_longer_prefix_after_shorter_rejected(self):
        """Test a two-byte entry may not follow the one-byte entry it extends."""
        with pytest.raises(RegistryOrderError):
            PacketRegistry([
                MatchEntry(b"\x8f", PacketKind.SECONDARY_TIMING),
                MatchEntry(b"\x8f\xab", PacketKind.PRIMARY_TIMING),
            ])

    def test_shorter_prefix_after_longer_accepted(self):
        """Test a catch-all one-byte entry may follow specific two-byte ones."""
        registry = PacketRegistry([
            MatchEntry(b"\x8f\xab", PacketKind.PRIMARY_TIMING),
            MatchEntry(b"\x8f", PacketKind.SECONDARY_TIMING),
        ])
        assert registry.classify(b"\x8f\xab").kind == PacketKind.PRIMARY_TIMING
        assert registry.classify(b"\x8f\x00") == Match(PacketKind.SECONDARY_TIMING, 1)

    def test_register_enforces_order(self):
        """Test ordering is checked on later registration too."""
        registry = create_default_registry()
        registry.register(MatchEntry(b"\x8f", PacketKind.PPS_CHARACTERISTICS))
        with pytest.raises(RegistryOrderError):
            registry.register(MatchEntry(b"\x8f\x41", PacketKind.PRIMARY_TIMING))

    def test_duplicate_prefix_rejected(self):
        registry = PacketRegistry([MatchEntry(b"\x45", PacketKind.SOFTWARE_VERSION)])
        with pytest.raises(RegistryOrderError, match="already registered"):
            registry.register(MatchEntry(b"\x45", PacketKind.SOFTWARE_VERSION))

    def test_registry_order_error_is_value_error(self):
        assert issubclass(RegistryOrderError, ValueError)

    def test_len_and_entries(self):
        assert len(DEFAULT_REGISTRY) == 5
        assert isinstance(DEFAULT_REGISTRY.entries, tuple)
