"""
TSIP frame assembly.

This module reassembles the continuous receiver byte stream into frames.
TSIP frames have the wire format:

    DLE <id> <data...> DLE ETX

- DLE is 0x10, ETX is 0x03
- Any literal 0x10 inside <id> or <data> is sent twice (byte-stuffing)
- There is no length field and no checksum; the only structure is the
  delimiter pair

The de-stuffed bytes between the start DLE and the terminating DLE ETX
(type byte included) form one frame. The assembler is a push state machine
fed one byte at a time, so it works equally well over an async transport
(FrameReader) and over an in-memory capture (iter_frames).

State transitions:

    AWAITING_START --DLE x--> IN_MESSAGE (x is the first payload byte)
    IN_MESSAGE --DLE--> AWAITING_TERMINATOR
    AWAITING_TERMINATOR --DLE--> IN_MESSAGE (one literal 0x10 appended)
    AWAITING_TERMINATOR --ETX--> AWAITING_START (frame emitted)
    AWAITING_TERMINATOR --other--> FramingError
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from enum import Enum, auto
from typing import TYPE_CHECKING

from tsip.exceptions import EndOfStreamError, FrameOverflowError, FramingError
from tsip.protocol.constants import DLE, ETX, OverflowPolicy, ProtocolConstants

if TYPE_CHECKING:
    from tsip.transport.abc import AbstractTransport

logger = logging.getLogger(__name__)


class FrameAssemblerState(Enum):
    """Frame assembler states."""

    AWAITING_START = auto()
    """Outside a frame, waiting for a start DLE."""

    IN_MESSAGE = auto()
    """Accumulating payload bytes."""

    AWAITING_TERMINATOR = auto()
    """Saw an unescaped DLE inside a frame; next byte must be DLE or ETX."""


class BoundedBuffer:
    """
    Frame accumulation buffer with an explicit overflow policy.

    Under OverflowPolicy.TRUNCATE bytes past the limit are dropped and the
    buffer reports overflowed=True. Under OverflowPolicy.FAIL the append
    that would exceed the limit raises FrameOverflowError.
    """

    __slots__ = ("_data", "_limit", "_policy", "_dropped")

    def __init__(
        self,
        limit: int = ProtocolConstants.MAX_FRAME_LENGTH,
        policy: OverflowPolicy = OverflowPolicy.TRUNCATE,
    ) -> None:
        if limit <= 0:
            raise ValueError(f"Buffer limit must be positive, got {limit}")
        self._data = bytearray()
        self._limit = limit
        self._policy = policy
        self._dropped = 0

    @property
    def limit(self) -> int:
        return self._limit

    @property
    def policy(self) -> OverflowPolicy:
        return self._policy

    @property
    def dropped(self) -> int:
        """Number of bytes discarded since the last reset."""
        return self._dropped

    @property
    def overflowed(self) -> bool:
        return self._dropped > 0

    def append(self, byte: int) -> None:
        if len(self._data) < self._limit:
            self._data.append(byte)
            return
        if self._policy is OverflowPolicy.FAIL:
            raise FrameOverflowError(self._limit)
        self._dropped += 1

    def reset(self) -> None:
        self._data.clear()
        self._dropped = 0

    def to_bytes(self) -> bytes:
        return bytes(self._data)

    def __len__(self) -> int:
        return len(self._data)


class FrameAssembler:
    """
    Push-driven TSIP frame assembler.

    Feed bytes one at a time with feed_byte(); a completed frame is
    returned when the terminating DLE ETX arrives.

    Example:
        >>> assembler = FrameAssembler()
        >>> frames = [f for b in b"\\x10\\x1f\\x10\\x03" if (f := assembler.feed_byte(b))]
        >>> frames
        [b'\\x1f']
    """

    def __init__(
        self,
        max_length: int = ProtocolConstants.MAX_FRAME_LENGTH,
        overflow_policy: OverflowPolicy = OverflowPolicy.TRUNCATE,
        resynchronize: bool = False,
    ) -> None:
        """
        Initialize the assembler.

        Args:
            max_length: Maximum de-stuffed frame length.
            overflow_policy: Behavior when a frame exceeds max_length.
            resynchronize: If True, a framing error drops the partial frame
                and waits for the next start marker instead of raising.
        """
        self._buffer = BoundedBuffer(max_length, overflow_policy)
        self._resynchronize = resynchronize
        self._state = FrameAssemblerState.AWAITING_START
        # Set when a DLE arrived in AWAITING_START and the next byte decides
        # whether it was a start marker.
        self._start_pending = False

    @property
    def state(self) -> FrameAssemblerState:
        return self._state

    @property
    def resynchronize(self) -> bool:
        return self._resynchronize

    @property
    def buffered(self) -> int:
        """Number of payload bytes accumulated for the current frame."""
        return len(self._buffer)

    def reset(self) -> None:
        """Discard any partial frame and wait for the next start marker."""
        self._buffer.reset()
        self._state = FrameAssemblerState.AWAITING_START
        self._start_pending = False

    def feed_byte(self, byte: int) -> bytes | None:
        """
        Consume one byte from the stream.

        Args:
            byte: Byte value (0-255).

        Returns:
            The completed, de-stuffed frame if this byte terminated one,
            otherwise None.

        Raises:
            FramingError: Unescaped DLE followed by a byte other than DLE
                or ETX (only when not resynchronizing).
            FrameOverflowError: Frame exceeded the bound under
                OverflowPolicy.FAIL. The assembler has already reset.
        """
        if self._state is FrameAssemblerState.AWAITING_START:
            self._feed_outside_frame(byte)
            return None

        if self._state is FrameAssemblerState.IN_MESSAGE:
            if byte == DLE:
                self._state = FrameAssemblerState.AWAITING_TERMINATOR
            else:
                self._append(byte)
            return None

        # AWAITING_TERMINATOR
        if byte == DLE:
            self._state = FrameAssemblerState.IN_MESSAGE
            self._append(DLE)
            return None

        if byte == ETX:
            frame = self._buffer.to_bytes()
            if self._buffer.overflowed:
                logger.debug(
                    "Frame truncated to %d bytes (%d dropped)",
                    len(frame),
                    self._buffer.dropped,
                )
            self.reset()
            return frame

        error = FramingError(received=byte, partial_frame=self._buffer.to_bytes())
        self.reset()
        if not self._resynchronize:
            raise error
        logger.warning("%s; resynchronizing", error)
        return None

    def feed(self, data: Iterable[int]) -> Iterator[bytes]:
        """
        Consume a sequence of bytes, yielding each completed frame.

        Errors propagate from the byte that caused them; bytes after it are
        not consumed.
        """
        for byte in data:
            frame = self.feed_byte(byte)
            if frame is not None:
                yield frame

    def _feed_outside_frame(self, byte: int) -> None:
        if not self._start_pending:
            if byte == DLE:
                self._start_pending = True
            return

        self._start_pending = False
        if byte == DLE:
            # Stuffed literal seen before we synchronized
            return
        if byte == ETX:
            # Tail of a frame we joined part way through
            return

        self._buffer.reset()
        self._state = FrameAssemblerState.IN_MESSAGE
        self._append(byte)

    def _append(self, byte: int) -> None:
        try:
            self._buffer.append(byte)
        except FrameOverflowError:
            self.reset()
            raise


class FrameReader:
    """
    Reads frames from an async transport.

    Wraps a FrameAssembler and pulls bytes from the transport until a
    frame completes. The reader is the single consumer of the transport's
    read side.

    Example:
        >>> reader = FrameReader()
        >>> while (frame := await reader.read_frame(transport)) is not None:
        ...     handle(frame)
    """

    def __init__(self, assembler: FrameAssembler | None = None) -> None:
        self._assembler = assembler or FrameAssembler()

    @property
    def assembler(self) -> FrameAssembler:
        return self._assembler

    async def read_frame(self, transport: AbstractTransport) -> bytes | None:
        """
        Read the next complete frame.

        Args:
            transport: Open transport to read from.

        Returns:
            The de-stuffed frame, or None when the byte source has ended.

        Raises:
            FramingError: On a fatal framing error.
            FrameOverflowError: When a frame is abandoned under
                OverflowPolicy.FAIL (the next call continues normally).
            TransportError: If the transport fails.
        """
        while True:
            try:
                byte = await transport.read_byte()
            except EndOfStreamError:
                if self._assembler.state is not FrameAssemblerState.AWAITING_START:
                    logger.debug(
                        "Stream ended inside a frame (%d bytes discarded)",
                        self._assembler.buffered,
                    )
                return None

            frame = self._assembler.feed_byte(byte)
            if frame is not None:
                return frame


def iter_frames(
    data: Iterable[int],
    *,
    max_length: int = ProtocolConstants.MAX_FRAME_LENGTH,
    overflow_policy: OverflowPolicy = OverflowPolicy.TRUNCATE,
    resynchronize: bool = False,
) -> Iterator[bytes]:
    """
    Split an in-memory byte sequence into frames.

    Convenience wrapper over a fresh FrameAssembler, useful for captured
    streams and tests. A trailing partial frame is discarded.

    Args:
        data: Raw stream bytes.
        max_length: Maximum de-stuffed frame length.
        overflow_policy: Behavior when a frame exceeds max_length.
        resynchronize: Recover from framing errors instead of raising.

    Yields:
        De-stuffed frames in stream order.
    """
    assembler = FrameAssembler(max_length, overflow_policy, resynchronize)
    yield from assembler.feed(data)
