"""
Base class for transports built on asyncio streams.

Both the TCP and the serial transport end up with an
(asyncio.StreamReader, asyncio.StreamWriter) pair; this module holds the
read/write/close logic they share. Subclasses only implement how the
streams are opened.
"""

from __future__ import annotations

import asyncio
import logging
from abc import abstractmethod

from tsip.exceptions import EndOfStreamError, TimeoutError, TransportError
from tsip.transport.abc import AbstractTransport

logger = logging.getLogger(__name__)


class StreamTransport(AbstractTransport):
    """
    Transport over an asyncio stream pair.

    Reads wait indefinitely unless a default_timeout is configured, in
    which case a read that takes longer raises TimeoutError.
    """

    def __init__(self, default_timeout: float | None = None) -> None:
        """
        Initialize the stream transport.

        Args:
            default_timeout: Default read timeout in seconds (None waits forever).
        """
        self._default_timeout = default_timeout
        self._reader: asyncio.StreamReader | None = None
        self._writer: asyncio.StreamWriter | None = None

    @property
    def is_open(self) -> bool:
        """Check if the stream is currently open."""
        return (
            self._writer is not None
            and not self._writer.is_closing()
            and self._reader is not None
        )

    @property
    def default_timeout(self) -> float | None:
        return self._default_timeout

    @abstractmethod
    async def _open_streams(self) -> tuple[asyncio.StreamReader, asyncio.StreamWriter]:
        """Open the underlying connection and return its streams."""
        ...

    async def open(self) -> None:
        """
        Open the connection.

        Raises:
            TransportError: If the connection cannot be established.
        """
        if self.is_open:
            return

        try:
            self._reader, self._writer = await self._open_streams()
        except TransportError:
            raise
        except asyncio.TimeoutError:
            raise TransportError(f"Timed out opening {self.endpoint}") from None
        except OSError as e:
            raise TransportError(f"Failed to open {self.endpoint}: {e}") from e

        logger.info("Opened %s", self.endpoint)

    async def close(self) -> None:
        """
        Close the connection.

        Safe to call multiple times.
        """
        writer = self._writer
        self._reader = None
        self._writer = None
        if writer is None:
            return

        try:
            writer.close()
            await writer.wait_closed()
        except OSError as e:
            logger.debug("Error while closing %s: %s", self.endpoint, e)
        logger.info("Closed %s", self.endpoint)

    async def write(self, data: bytes) -> None:
        """
        Write data and wait for it to drain.

        Raises:
            TransportError: If the stream is not open or write fails.
        """
        if not self.is_open:
            raise TransportError(f"{self.endpoint} is not open")

        try:
            self._writer.write(data)
            await self._writer.drain()
        except OSError as e:
            raise TransportError(f"Write failed: {e}") from e

    async def read(self, size: int, timeout: float | None = None) -> bytes:
        """
        Read an exact number of bytes.

        Args:
            size: Number of bytes to read.
            timeout: Read timeout in seconds. None uses the default timeout.

        Returns:
            Exactly `size` bytes.

        Raises:
            EndOfStreamError: If the peer closes before `size` bytes arrive.
            TimeoutError: If the timeout expires.
            TransportError: If the stream is not open or read fails.
        """
        if not self.is_open:
            raise TransportError(f"{self.endpoint} is not open")

        if size <= 0:
            return b""

        effective_timeout = timeout if timeout is not None else self._default_timeout

        try:
            if effective_timeout is None:
                return await self._reader.readexactly(size)
            return await asyncio.wait_for(
                self._reader.readexactly(size),
                timeout=effective_timeout,
            )

        except asyncio.TimeoutError:
            raise TimeoutError(
                f"Timeout waiting for {size} bytes from {self.endpoint}",
                timeout_seconds=effective_timeout,
            ) from None
        except asyncio.IncompleteReadError as e:
            raise EndOfStreamError(
                f"{self.endpoint} closed: expected {size} bytes, got {len(e.partial)}"
            ) from e
        except OSError as e:
            raise TransportError(f"Read failed: {e}") from e
