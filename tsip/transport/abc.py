"""
Byte-stream transports for TSIP receivers.

A receiver emits an unbroken stream of DLE/ETX frames and accepts framed
commands on the same link. Everything above the raw bytes (stuffing, frame
boundaries, packet layouts) lives in tsip.protocol and tsip.parsers; a
transport only moves bytes and reports when the source has ended.

Implementations:
- TcpTransport: serial-to-network bridge reached over TCP
- AsyncSerialTransport: receiver wired to a local serial port
- MockTransport: scripted byte source for tests
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from types import TracebackType


class AbstractTransport(ABC):
    """
    Link to one receiver.

    Used as an async context manager, the link is opened on entry and
    closed on exit:

        async with TcpTransport("192.168.1.50", 4001) as transport:
            await transport.write(encode_command(GetSoftwareVersionCommand()))
            frame = await FrameReader().read_frame(transport)

    Attributes:
        is_open: True between a successful open() and close().
        endpoint: Where the bytes come from ("host:port", "/dev/ttyUSB0").
    """

    @property
    @abstractmethod
    def is_open(self) -> bool:
        ...

    @property
    @abstractmethod
    def endpoint(self) -> str:
        """Printable source address, shown in logs and the monitor banner."""
        ...

    @abstractmethod
    async def open(self) -> None:
        """
        Connect to the receiver.

        Raises:
            TransportError: If the bridge or serial device is unreachable.
        """
        ...

    @abstractmethod
    async def close(self) -> None:
        """Release the link. Closing an already closed transport does nothing."""
        ...

    @abstractmethod
    async def write(self, data: bytes) -> None:
        """
        Send one framed command.

        Concurrent writers would interleave frames on the wire; ReceiverClient
        holds a lock around this call.

        Raises:
            TransportError: If the link is closed or the write fails.
        """
        ...

    @abstractmethod
    async def read(self, size: int, timeout: float | None = None) -> bytes:
        """
        Wait for the next `size` bytes of the receiver stream.

        Args:
            size: Byte count to return.
            timeout: Seconds to wait; None falls back to the transport's
                default_timeout, which itself defaults to waiting forever.

        Raises:
            EndOfStreamError: If the receiver closes the stream first.
            TimeoutError: If the bytes do not arrive in time.
            TransportError: If the link is closed or the read fails.
        """
        ...

    async def read_byte(self, timeout: float | None = None) -> int:
        """Next stream byte as an int; the frame assembler consumes these."""
        data = await self.read(1, timeout)
        return data[0]

    async def __aenter__(self) -> AbstractTransport:
        await self.open()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self.close()
