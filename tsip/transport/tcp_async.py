"""
TCP transport for receivers behind a serial-to-network bridge.

Timing receivers are commonly installed at the antenna end of a long
serial run and exposed through a device server that relays the raw serial
bytes over a TCP socket. The TSIP stream passes through unchanged.

Example:
    >>> transport = TcpTransport("192.168.1.50", 4001)
    >>> async with transport:
    ...     await transport.write(frame)
    ...     byte = await transport.read_byte()
"""

from __future__ import annotations

import asyncio

from tsip.protocol.constants import ProtocolConstants
from tsip.transport.stream import StreamTransport


class TcpTransport(StreamTransport):
    """
    Async TCP transport.

    Attributes:
        host: Bridge host name or address.
        port: Bridge TCP port.
    """

    def __init__(
        self,
        host: str,
        port: int = ProtocolConstants.DEFAULT_TCP_PORT,
        default_timeout: float | None = None,
        connect_timeout: float | None = 10.0,
    ) -> None:
        """
        Initialize the TCP transport.

        Args:
            host: Bridge host name or address.
            port: Bridge TCP port.
            default_timeout: Default read timeout in seconds (None waits forever).
            connect_timeout: Connection timeout in seconds (None waits forever).
        """
        super().__init__(default_timeout)
        self._host = host
        self._port = port
        self._connect_timeout = connect_timeout

    @property
    def host(self) -> str:
        return self._host

    @property
    def port(self) -> int:
        return self._port

    @property
    def endpoint(self) -> str:
        return f"{self._host}:{self._port}"

    async def _open_streams(self) -> tuple[asyncio.StreamReader, asyncio.StreamWriter]:
        return await asyncio.wait_for(
            asyncio.open_connection(self._host, self._port),
            timeout=self._connect_timeout,
        )

    def __repr__(self) -> str:
        status = "open" if self.is_open else "closed"
        return f"TcpTransport({self._host!r}, {self._port}, {status})"
