"""
Async serial transport using pyserial-asyncio.

For receivers wired directly to the host.

Serial Configuration (Thunderbolt defaults):
- Baud rate: 9600
- Data bits: 8
- Parity: None
- Stop bits: 1
- Flow control: None

Example:
    >>> transport = AsyncSerialTransport("/dev/ttyUSB0")
    >>> async with transport:
    ...     await transport.write(frame)
    ...     byte = await transport.read_byte()
"""

from __future__ import annotations

import asyncio

import serial
import serial_asyncio

from tsip.exceptions import TransportError
from tsip.protocol.constants import ProtocolConstants
from tsip.transport.stream import StreamTransport


class AsyncSerialTransport(StreamTransport):
    """
    Async serial transport using pyserial-asyncio.

    Attributes:
        endpoint: Serial port path (e.g., "/dev/ttyUSB0", "COM3").
        is_open: Whether the port is currently open.
    """

    def __init__(
        self,
        port: str,
        baudrate: int = ProtocolConstants.DEFAULT_BAUD_RATE,
        default_timeout: float | None = None,
    ) -> None:
        """
        Initialize the async serial transport.

        Args:
            port: Serial port path (e.g., "/dev/ttyUSB0", "COM3").
            baudrate: Baud rate (default: 9600).
            default_timeout: Default read timeout in seconds (None waits forever).
        """
        super().__init__(default_timeout)
        self._port = port
        self._baudrate = baudrate

    @property
    def endpoint(self) -> str:
        """Get the serial port path."""
        return self._port

    @property
    def baudrate(self) -> int:
        """Get the configured baud rate."""
        return self._baudrate

    async def _open_streams(self) -> tuple[asyncio.StreamReader, asyncio.StreamWriter]:
        try:
            return await serial_asyncio.open_serial_connection(
                url=self._port,
                baudrate=self._baudrate,
                parity=serial.PARITY_NONE,
                stopbits=serial.STOPBITS_ONE,
                bytesize=serial.EIGHTBITS,
                xonxoff=False,
                rtscts=False,
                dsrdtr=False,
            )
        except serial.SerialException as e:
            raise TransportError(f"Failed to open serial port {self._port}: {e}") from e

    def __repr__(self) -> str:
        status = "open" if self.is_open else "closed"
        return f"AsyncSerialTransport({self._port!r}, baudrate={self._baudrate}, {status})"
