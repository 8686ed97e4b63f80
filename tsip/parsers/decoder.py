"""
Frame-to-packet dispatch.

Classification runs in two steps:

1. The PacketRegistry matches the frame's leading bytes against the
   fixed-layout table (longest prefixes first)
2. Frames the registry does not match go to the VariableLengthHandler,
   keyed by the first byte only

A frame neither step recognizes is an unknown packet. decode() raises for
failures; try_decode() reports them as a result code, so a read loop can
log and continue without exception handling on the hot path.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto

from tsip.exceptions import TruncationError, UnmatchedKindError
from tsip.models.packets import DecodedPacket
from tsip.parsers.codec import CODECS_BY_KIND
from tsip.parsers.registry import DEFAULT_REGISTRY, PacketRegistry
from tsip.parsers.variable_length import DEFAULT_VARIABLE_HANDLER, VariableLengthHandler


class DecodeResult(Enum):
    """Outcome of decoding one frame."""

    SUCCESS = auto()
    """Frame decoded into a packet."""

    EMPTY_FRAME = auto()
    """Frame had no bytes."""

    TRUNCATED = auto()
    """Frame shorter than its packet layout."""

    UNKNOWN_PACKET = auto()
    """No registry entry or variable-length handler matched."""


@dataclass(frozen=True)
class DecodeFailure:
    """
    Details about a frame that could not be decoded.

    Attributes:
        result: Failure code.
        message: Human-readable description.
        frame: The offending frame.
    """

    result: DecodeResult
    message: str
    frame: bytes

    @property
    def leading(self) -> bytes:
        """First two bytes of the frame, for unknown packet reports."""
        return self.frame[:2]


class PacketDecoder:
    """
    Decodes de-stuffed frames into packet models.

    Example:
        >>> decoder = PacketDecoder()
        >>> packet = decoder.decode(bytes.fromhex("45 03 02 08 0f 0a 01 04 07 1c 09"))
        >>> packet.app_major, packet.app_year
        (3, 2010)
    """

    def __init__(
        self,
        registry: PacketRegistry = DEFAULT_REGISTRY,
        variable_handler: VariableLengthHandler = DEFAULT_VARIABLE_HANDLER,
    ) -> None:
        self._registry = registry
        self._variable_handler = variable_handler

    @property
    def registry(self) -> PacketRegistry:
        return self._registry

    def decode(self, frame: bytes | bytearray | memoryview) -> DecodedPacket:
        """
        Decode a frame.

        Args:
            frame: De-stuffed frame, packet id first.

        Returns:
            Decoded packet model.

        Raises:
            TruncationError: If the frame is empty or shorter than its layout.
            UnmatchedKindError: If the packet type is not recognized.
        """
        if not frame:
            raise TruncationError("Empty frame", required=1, available=0)

        match = self._registry.classify(frame)
        if match is not None:
            # Record-list kinds have no fixed codec and fall through
            codec = CODECS_BY_KIND.get(match.kind)
            if codec is not None:
                return codec.decode(frame, match.body_offset)

        packet = self._variable_handler.decode(frame)
        if packet is not None:
            return packet

        raise UnmatchedKindError(bytes(frame[:2]))

    def try_decode(
        self,
        frame: bytes | bytearray | memoryview,
    ) -> tuple[DecodeResult, DecodedPacket | DecodeFailure]:
        """
        Decode a frame without raising for protocol failures.

        Returns:
            Tuple of (result, packet_or_failure):
            - On success: (SUCCESS, packet)
            - On failure: (failure code, DecodeFailure)
        """
        raw = bytes(frame)
        if not raw:
            return DecodeResult.EMPTY_FRAME, DecodeFailure(
                result=DecodeResult.EMPTY_FRAME,
                message="Empty frame",
                frame=raw,
            )

        try:
            return DecodeResult.SUCCESS, self.decode(raw)
        except TruncationError as e:
            return DecodeResult.TRUNCATED, DecodeFailure(
                result=DecodeResult.TRUNCATED,
                message=str(e),
                frame=raw,
            )
        except UnmatchedKindError as e:
            return DecodeResult.UNKNOWN_PACKET, DecodeFailure(
                result=DecodeResult.UNKNOWN_PACKET,
                message=str(e),
                frame=raw,
            )


DEFAULT_DECODER: PacketDecoder = PacketDecoder()
"""Default PacketDecoder instance for convenience."""


def decode_packet(frame: bytes | bytearray | memoryview) -> DecodedPacket:
    """
    Decode a frame using the default decoder.

    Raises:
        TruncationError: If the frame is shorter than its layout.
        UnmatchedKindError: If the packet type is not recognized.
    """
    return DEFAULT_DECODER.decode(frame)
