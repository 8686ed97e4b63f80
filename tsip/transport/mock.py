"""
Mock transport for testing.

This module provides an in-memory transport that allows testing the TSIP
client without a receiver. Incoming bytes are queued up front or generated
from what the client writes; everything written is recorded.

Example:
    >>> from tsip.transport import MockTransport
    >>> from tsip.protocol import frame_command
    >>>
    >>> mock = MockTransport()
    >>> mock.add_response(frame_command(b"\\x45", bytes(10)))
    >>>
    >>> async with ReceiverClient(mock) as client:
    ...     packet = await client.read_packet()
"""

from __future__ import annotations

import asyncio
from collections import deque
from typing import Callable

from tsip.exceptions import EndOfStreamError, TransportError
from tsip.transport.abc import AbstractTransport


class MockTransport(AbstractTransport):
    """
    Mock transport for testing without hardware.

    By default the stream ends (EndOfStreamError) once all queued data has
    been read. With eof_when_empty=False reads wait for more data instead,
    until feed_eof() or close() is called.

    Attributes:
        written_data: List of all bytes written to the transport.
        max_concurrent_writes: Highest number of overlapping write() calls.
    """

    def __init__(
        self,
        endpoint: str = "mock://receiver",
        eof_when_empty: bool = True,
        write_delay: float = 0.0,
    ) -> None:
        """
        Initialize the mock transport.

        Args:
            endpoint: Identifier for the mock transport.
            eof_when_empty: End the stream when queued data runs out.
            write_delay: Seconds each write() takes, to expose overlap.
        """
        self._endpoint = endpoint
        self._eof_when_empty = eof_when_empty
        self._write_delay = write_delay
        self._is_open = False
        self._eof = False
        self._responses: deque[bytes] = deque()
        self._written_data: list[bytes] = []
        self._read_buffer = bytearray()
        self._response_callback: Callable[[bytes], bytes | None] | None = None
        self._data_available: asyncio.Event | None = None
        self._writes_in_flight = 0
        self._max_concurrent_writes = 0

    @property
    def is_open(self) -> bool:
        """Check if the mock transport is open."""
        return self._is_open

    @property
    def endpoint(self) -> str:
        """Get the mock endpoint name."""
        return self._endpoint

    @property
    def written_data(self) -> list[bytes]:
        """Get all data written to the transport."""
        return self._written_data.copy()

    @property
    def last_written(self) -> bytes | None:
        """Get the most recently written data."""
        return self._written_data[-1] if self._written_data else None

    @property
    def max_concurrent_writes(self) -> int:
        return self._max_concurrent_writes

    def add_response(self, response: bytes) -> None:
        """
        Queue bytes for the read side.

        Responses are returned in FIFO order on read operations.

        Args:
            response: Bytes to return on subsequent reads.
        """
        self._responses.append(bytes(response))
        self._notify()

    def add_responses(self, *responses: bytes) -> None:
        """
        Queue multiple responses.

        Args:
            *responses: Multiple byte responses to add.
        """
        for response in responses:
            self._responses.append(bytes(response))
        self._notify()

    def feed_eof(self) -> None:
        """End the stream once queued data has been read."""
        self._eof = True
        self._notify()

    def set_response_callback(
        self,
        callback: Callable[[bytes], bytes | None] | None,
    ) -> None:
        """
        Set a callback to dynamically generate responses.

        The callback receives the written data and returns bytes to queue
        for the read side, or None for no response.

        Args:
            callback: Function that takes written bytes and returns response.
        """
        self._response_callback = callback

    def clear(self) -> None:
        """Clear all written data and pending responses."""
        self._written_data.clear()
        self._responses.clear()
        self._read_buffer.clear()

    def clear_written(self) -> None:
        """Clear only the written data history."""
        self._written_data.clear()

    async def open(self) -> None:
        """Open the mock transport."""
        if self._is_open:
            raise TransportError("Mock transport already open")
        self._is_open = True

    async def close(self) -> None:
        """Close the mock transport; pending reads see end of stream."""
        self._is_open = False
        self._notify()

    async def write(self, data: bytes) -> None:
        """
        Write data to the mock transport.

        Records the written data and optionally triggers response callback.

        Args:
            data: Bytes to write.

        Raises:
            TransportError: If transport is not open.
        """
        if not self._is_open:
            raise TransportError("Mock transport not open")

        self._writes_in_flight += 1
        self._max_concurrent_writes = max(self._max_concurrent_writes, self._writes_in_flight)
        try:
            if self._write_delay:
                await asyncio.sleep(self._write_delay)
            self._written_data.append(bytes(data))
        finally:
            self._writes_in_flight -= 1

        if self._response_callback:
            response = self._response_callback(bytes(data))
            if response is not None:
                self.add_response(response)

    async def read(self, size: int, timeout: float | None = None) -> bytes:
        """
        Read exact number of bytes.

        Args:
            size: Number of bytes to read.
            timeout: Ignored by the mock.

        Returns:
            Exactly size bytes.

        Raises:
            EndOfStreamError: If the stream ends before size bytes are available.
            TransportError: If transport is not open.
        """
        if not self._is_open:
            raise TransportError("Mock transport not open")

        while True:
            while len(self._read_buffer) < size and self._responses:
                self._read_buffer.extend(self._responses.popleft())

            if len(self._read_buffer) >= size:
                result = bytes(self._read_buffer[:size])
                del self._read_buffer[:size]
                return result

            if self._eof_when_empty or self._eof or not self._is_open:
                raise EndOfStreamError(
                    f"Mock stream ended: need {size}, have {len(self._read_buffer)}"
                )

            await self._wait_for_data()

    async def _wait_for_data(self) -> None:
        if self._data_available is None:
            self._data_available = asyncio.Event()
        self._data_available.clear()
        await self._data_available.wait()

    def _notify(self) -> None:
        if self._data_available is not None:
            self._data_available.set()

    def assert_written(self, expected: bytes, index: int = -1) -> None:
        """
        Assert that specific data was written.

        Args:
            expected: Expected bytes.
            index: Index in written_data list (-1 for last).

        Raises:
            AssertionError: If data doesn't match.
        """
        if not self._written_data:
            raise AssertionError("No data written to mock transport")

        actual = self._written_data[index]
        if actual != expected:
            raise AssertionError(f"Written data mismatch: expected {expected!r}, got {actual!r}")

    def assert_write_count(self, expected: int) -> None:
        """
        Assert number of write operations.

        Args:
            expected: Expected number of writes.

        Raises:
            AssertionError: If count doesn't match.
        """
        actual = len(self._written_data)
        if actual != expected:
            raise AssertionError(f"Write count mismatch: expected {expected}, got {actual}")


class ScriptedMockTransport(MockTransport):
    """
    Mock transport with scripted request/response pairs.

    Each write consumes the next script step: the written bytes are
    checked against the expected request (if given) and the step's
    response is queued for the read side.

    Example:
        >>> mock = ScriptedMockTransport()
        >>> mock.expect(request=b"\\x10\\x1f\\x10\\x03", response=version_frame)
    """

    def __init__(self, endpoint: str = "mock://scripted", eof_when_empty: bool = True) -> None:
        super().__init__(endpoint, eof_when_empty=eof_when_empty)
        self._script: list[tuple[bytes | None, bytes]] = []
        self._script_index = 0

    def expect(
        self,
        response: bytes,
        request: bytes | None = None,
    ) -> None:
        """
        Add an expected request/response pair.

        Args:
            response: Response to return.
            request: Expected request (None to match any).
        """
        self._script.append((request, response))

    async def write(self, data: bytes) -> None:
        """Write with script validation."""
        if not self._is_open:
            raise TransportError("Mock transport not open")

        self._written_data.append(bytes(data))

        if self._script_index < len(self._script):
            expected_request, response = self._script[self._script_index]

            if expected_request is not None and data != expected_request:
                raise AssertionError(
                    f"Script mismatch at step {self._script_index}: "
                    f"expected {expected_request!r}, got {data!r}"
                )

            self.add_response(response)
            self._script_index += 1

    def reset_script(self) -> None:
        """Reset script to beginning."""
        self._script_index = 0
        self._read_buffer.clear()

    def clear_script(self) -> None:
        """Clear all scripted expectations."""
        self._script.clear()
        self._script_index = 0
