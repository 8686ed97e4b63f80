"""
TSIP Receiver Client.

This module provides the main client interface for talking to a TSIP
receiver over any transport.

The client owns both directions of the connection:

- The read loop: bytes -> FrameReader -> PacketDecoder -> packet models.
  Recoverable per-frame failures (truncated body, unknown type, oversized
  frame) are logged, counted in ReceiverStatistics and skipped. A fatal
  FramingError ends the loop by propagating.
- Command sending: send() frames a command and writes it while holding an
  asyncio.Lock, so concurrent senders never interleave bytes on the wire.

State machine:
    DISCONNECTED -> connect() -> CONNECTED
    CONNECTED -> results()/packets() -> READING -> ... -> CONNECTED
    CONNECTED/READING -> disconnect() -> DISCONNECTED

Example:
    >>> from tsip import ReceiverClient
    >>> from tsip.transport import TcpTransport
    >>>
    >>> async def main():
    ...     async with ReceiverClient(TcpTransport("192.168.1.50", 4001)) as client:
    ...         await client.request_software_version()
    ...         async for packet in client.packets():
    ...             print(packet)
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncGenerator
from dataclasses import dataclass, fields
from enum import Enum, auto
from typing import TYPE_CHECKING

from tsip.exceptions import ConnectionError, FrameOverflowError
from tsip.models.commands import (
    Command,
    GetSatelliteTrackingStatusCommand,
    GetSignalLevelsCommand,
    GetSoftwareVersionCommand,
)
from tsip.parsers.decoder import DEFAULT_DECODER, DecodeFailure, DecodeResult, PacketDecoder
from tsip.protocol.constants import OverflowPolicy, ProtocolConstants
from tsip.protocol.frame_reader import FrameAssembler, FrameReader
from tsip.protocol.frame_writer import encode_command

if TYPE_CHECKING:
    from tsip.models.packets import DecodedPacket
    from tsip.transport.abc import AbstractTransport

# Module logger
logger = logging.getLogger(__name__)


class ClientState(Enum):
    """Receiver client connection states."""

    DISCONNECTED = auto()
    """Transport not opened by this client."""

    CONNECTED = auto()
    """Transport open, no read loop running."""

    READING = auto()
    """A read loop is consuming the transport."""


@dataclass
class ReceiverStatistics:
    """
    Counters for one client session.

    Attributes:
        frames_received: Complete frames taken from the stream.
        packets_decoded: Frames decoded into packets.
        truncated_frames: Frames shorter than their packet layout.
        unknown_packets: Frames with an unrecognized packet type.
        overflowed_frames: Frames abandoned under OverflowPolicy.FAIL.
        commands_sent: Commands written to the transport.
    """

    frames_received: int = 0
    packets_decoded: int = 0
    truncated_frames: int = 0
    unknown_packets: int = 0
    overflowed_frames: int = 0
    commands_sent: int = 0

    @property
    def dropped_frames(self) -> int:
        return self.truncated_frames + self.unknown_packets + self.overflowed_frames

    def reset(self) -> None:
        for field in fields(self):
            setattr(self, field.name, 0)


class ReceiverClient:
    """
    Client for a TSIP receiver.

    Attributes:
        state: Current connection state.
        statistics: Session counters.
        transport: The underlying transport layer.

    Example:
        >>> client = ReceiverClient(transport, resynchronize=True)
        >>> await client.connect()
        >>> await client.request_tracking_status()
        >>> packet = await client.read_packet()
        >>> await client.disconnect()
    """

    def __init__(
        self,
        transport: AbstractTransport,
        decoder: PacketDecoder = DEFAULT_DECODER,
        max_frame_length: int = ProtocolConstants.MAX_FRAME_LENGTH,
        overflow_policy: OverflowPolicy = OverflowPolicy.TRUNCATE,
        resynchronize: bool = False,
    ) -> None:
        """
        Initialize the receiver client.

        Args:
            transport: Transport layer for communication.
            decoder: Frame-to-packet decoder.
            max_frame_length: Maximum de-stuffed frame length.
            overflow_policy: Behavior when a frame exceeds max_frame_length.
            resynchronize: Recover from framing errors instead of stopping.
        """
        self._transport = transport
        self._decoder = decoder
        self._frame_reader = FrameReader(
            FrameAssembler(max_frame_length, overflow_policy, resynchronize)
        )
        self._write_lock = asyncio.Lock()
        self._state = ClientState.DISCONNECTED
        self._statistics = ReceiverStatistics()

    @property
    def state(self) -> ClientState:
        """Get the current connection state."""
        return self._state

    @property
    def is_connected(self) -> bool:
        return self._state is not ClientState.DISCONNECTED and self._transport.is_open

    @property
    def statistics(self) -> ReceiverStatistics:
        return self._statistics

    @property
    def transport(self) -> AbstractTransport:
        """Get the underlying transport."""
        return self._transport

    async def connect(self) -> None:
        """
        Open the transport if needed and start a session.

        TSIP has no handshake; the receiver streams reports as soon as the
        connection exists.

        Raises:
            ConnectionError: If already connected.
            TransportError: If the transport cannot be opened.
        """
        if self._state is not ClientState.DISCONNECTED:
            raise ConnectionError(f"Cannot connect: client is in {self._state.name} state")

        if not self._transport.is_open:
            logger.debug("Opening transport %s", self._transport.endpoint)
            await self._transport.open()

        self._frame_reader.assembler.reset()
        self._state = ClientState.CONNECTED
        logger.info("Connected to receiver at %s", self._transport.endpoint)

    async def disconnect(self) -> None:
        """
        Close the transport.

        Safe to call even if not connected.
        """
        if self._state is ClientState.DISCONNECTED:
            return

        self._state = ClientState.DISCONNECTED
        try:
            await self._transport.close()
        finally:
            logger.info(
                "Disconnected from %s (%d frames, %d packets, %d dropped)",
                self._transport.endpoint,
                self._statistics.frames_received,
                self._statistics.packets_decoded,
                self._statistics.dropped_frames,
            )

    async def send(self, command: Command) -> None:
        """
        Frame and write one command.

        Writes are serialized: a second sender waits until the first
        command's bytes have been handed to the transport.

        Args:
            command: Command model to send.

        Raises:
            ConnectionError: If not connected.
            EncodeError: If a command field is out of range.
            TransportError: If the write fails.
        """
        self._ensure_connected()
        frame = encode_command(command)

        async with self._write_lock:
            await self._transport.write(frame)
            self._statistics.commands_sent += 1

        logger.debug("Sent %s: %s", command, frame.hex(" "))

    async def request_software_version(self) -> None:
        """Request a software version report (0x45)."""
        await self.send(GetSoftwareVersionCommand())

    async def request_signal_levels(self) -> None:
        """Request a satellite signal report (0x47)."""
        await self.send(GetSignalLevelsCommand())

    async def request_tracking_status(
        self,
        satellite_number: int = ProtocolConstants.ALL_SATELLITES,
    ) -> None:
        """
        Request satellite tracking status (0x5C).

        Args:
            satellite_number: PRN to report on, or 0 for all satellites.
        """
        await self.send(GetSatelliteTrackingStatusCommand(satellite_number=satellite_number))

    async def read_packet(self) -> DecodedPacket | None:
        """
        Read the next successfully decoded packet.

        Frames that fail to decode are logged, counted and skipped.

        Returns:
            The next packet, or None when the stream has ended.

        Raises:
            ConnectionError: If not connected or a read loop is running.
            FramingError: On a fatal framing error.
            TimeoutError: If the transport read times out.
        """
        self._ensure_idle()
        while True:
            outcome = await self._next_result()
            if outcome is None:
                return None
            result, value = outcome
            if result is DecodeResult.SUCCESS:
                return value

    async def results(
        self,
    ) -> AsyncGenerator[tuple[DecodeResult, DecodedPacket | DecodeFailure], None]:
        """
        Iterate over decode outcomes until the stream ends.

        Yields one (result, packet_or_failure) tuple per frame, including
        failed frames, so callers can report unknown packets.

        Raises:
            ConnectionError: If not connected or a read loop is running.
            FramingError: On a fatal framing error.
        """
        self._ensure_idle()
        self._state = ClientState.READING
        try:
            while True:
                outcome = await self._next_result()
                if outcome is None:
                    logger.info("Receiver stream ended")
                    break
                yield outcome
        finally:
            if self._state is ClientState.READING:
                self._state = ClientState.CONNECTED

    async def packets(self) -> AsyncGenerator[DecodedPacket, None]:
        """
        Iterate over decoded packets until the stream ends.

        Example:
            >>> async for packet in client.packets():
            ...     print(packet.kind)
        """
        async for result, value in self.results():
            if result is DecodeResult.SUCCESS:
                yield value

    async def _next_result(
        self,
    ) -> tuple[DecodeResult, DecodedPacket | DecodeFailure] | None:
        while True:
            try:
                frame = await self._frame_reader.read_frame(self._transport)
            except FrameOverflowError as e:
                self._statistics.overflowed_frames += 1
                logger.warning("Dropped frame: %s", e)
                continue

            if frame is None:
                return None

            self._statistics.frames_received += 1
            result, value = self._decoder.try_decode(frame)

            if result is DecodeResult.SUCCESS:
                self._statistics.packets_decoded += 1
                logger.debug("Decoded %s packet (%d bytes)", value.kind.value, len(frame))
            elif result is DecodeResult.UNKNOWN_PACKET:
                self._statistics.unknown_packets += 1
                logger.warning("%s", value.message)
            else:
                self._statistics.truncated_frames += 1
                logger.warning("Dropped frame: %s", value.message)

            return result, value

    def _ensure_connected(self) -> None:
        """Verify the client has an open session."""
        if not self.is_connected:
            raise ConnectionError(f"Not connected (state: {self._state.name})")

    def _ensure_idle(self) -> None:
        """Verify the client is connected and no read loop is running."""
        self._ensure_connected()
        if self._state is ClientState.READING:
            raise ConnectionError("A read loop is already consuming the transport")

    async def __aenter__(self) -> ReceiverClient:
        """Async context manager entry - connects."""
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit - disconnects and closes transport."""
        await self.disconnect()

    def __repr__(self) -> str:
        return f"ReceiverClient(state={self._state.name}, endpoint={self._transport.endpoint!r})"
