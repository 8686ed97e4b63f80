"""
Packet type registry.

Maps the leading bytes of a frame to a PacketKind. TSIP type ids are one
byte, except for superpackets (0x8F) where a second subcode byte selects
the report. Entries are matched in list order, so a two-byte entry such as
8F-AB must come before any one-byte entry for 8F; otherwise every timing
superpacket would be classified by the shorter entry.

The registry enforces that ordering whenever entries are added rather than
relying on the table being written correctly.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from tsip.exceptions import RegistryOrderError
from tsip.parsers.codec import FIXED_CODECS
from tsip.protocol.constants import PacketKind


@dataclass(frozen=True)
class MatchEntry:
    """
    One registry entry.

    Attributes:
        prefix: One or two leading bytes identifying the packet.
        kind: Packet kind decoded from frames with that prefix.
    """

    prefix: bytes
    kind: PacketKind

    def __post_init__(self) -> None:
        if not 1 <= len(self.prefix) <= 2:
            raise ValueError(f"Prefix must be 1 or 2 bytes, got {len(self.prefix)}")

    def matches(self, frame: bytes | bytearray | memoryview) -> bool:
        """Compare the prefix against the frame's leading bytes."""
        n = len(self.prefix)
        return len(frame) >= n and bytes(frame[:n]) == self.prefix

    def __repr__(self) -> str:
        return f"MatchEntry({self.prefix.hex(' ')}, {self.kind.name})"


@dataclass(frozen=True)
class Match:
    """
    Result of a successful classification.

    Attributes:
        kind: Matched packet kind.
        body_offset: Index of the first field byte (the prefix length).
    """

    kind: PacketKind
    body_offset: int


class PacketRegistry:
    """
    Ordered prefix table.

    Example:
        >>> registry = PacketRegistry([
        ...     MatchEntry(b"\\x8f\\xab", PacketKind.PRIMARY_TIMING),
        ...     MatchEntry(b"\\x45", PacketKind.SOFTWARE_VERSION),
        ... ])
        >>> registry.classify(b"\\x8f\\xab\\x00")
        Match(kind=<PacketKind.PRIMARY_TIMING: 'primary_timing'>, body_offset=2)
        >>> registry.classify(b"\\x99") is None
        True
    """

    def __init__(self, entries: Iterable[MatchEntry] = ()) -> None:
        """
        Initialize the registry.

        Args:
            entries: Entries in match priority order.

        Raises:
            RegistryOrderError: If any entry is shadowed by an earlier one.
        """
        self._entries: list[MatchEntry] = []
        for entry in entries:
            self.register(entry)

    @property
    def entries(self) -> tuple[MatchEntry, ...]:
        return tuple(self._entries)

    def register(self, entry: MatchEntry) -> None:
        """
        Append an entry at the lowest priority.

        Raises:
            RegistryOrderError: If the entry's prefix equals or extends the
                prefix of an entry already registered, since it could then
                never match.
        """
        for existing in self._entries:
            if entry.prefix == existing.prefix:
                raise RegistryOrderError(
                    f"Prefix {entry.prefix.hex(' ')} already registered for {existing.kind.name}"
                )
            if entry.prefix.startswith(existing.prefix):
                raise RegistryOrderError(
                    f"{entry!r} is shadowed by earlier {existing!r}; "
                    "longer prefixes must be registered first"
                )
        self._entries.append(entry)

    def classify(self, frame: bytes | bytearray | memoryview) -> Match | None:
        """
        Find the first entry matching the frame's leading bytes.

        Args:
            frame: De-stuffed frame (type byte first).

        Returns:
            Match with kind and body offset, or None if no entry matches.
        """
        for entry in self._entries:
            if entry.matches(frame):
                return Match(entry.kind, len(entry.prefix))
        return None

    def __iter__(self) -> Iterator[MatchEntry]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"PacketRegistry({self._entries!r})"


def create_default_registry() -> PacketRegistry:
    """
    Create the registry of fixed-layout reports.

    Entries come from the codec table in its priority order: 8F-AB, 8F-AC,
    8F-4A, 5C, 45. The 0x47 signal report is variable-length and is
    handled by the VariableLengthHandler instead.
    """
    return PacketRegistry(MatchEntry(codec.packet_id, codec.kind) for codec in FIXED_CODECS)


DEFAULT_REGISTRY: PacketRegistry = create_default_registry()
"""Default registry instance for convenience."""
