"""
Transport layer for TSIP communication.

This package provides transport implementations that carry the raw TSIP
byte stream to and from a receiver.

Available transports:
- TcpTransport: TCP socket to a serial-to-network bridge
- AsyncSerialTransport: Async serial port using pyserial-asyncio
- MockTransport: Mock transport for testing without hardware

Example:
    >>> from tsip.transport import TcpTransport
    >>> async with TcpTransport("192.168.1.50", 4001) as transport:
    ...     await transport.write(frame_data)
    ...     byte = await transport.read_byte()

Testing Example:
    >>> from tsip.transport import MockTransport
    >>> mock = MockTransport()
    >>> mock.add_response(bytes([0x10, 0x45]) + bytes(10) + bytes([0x10, 0x03]))
"""

from tsip.transport.abc import AbstractTransport
from tsip.transport.mock import MockTransport, ScriptedMockTransport
from tsip.transport.serial_async import AsyncSerialTransport
from tsip.transport.stream import StreamTransport
from tsip.transport.tcp_async import TcpTransport

__all__ = [
    "AbstractTransport",
    "AsyncSerialTransport",
    "MockTransport",
    "ScriptedMockTransport",
    "StreamTransport",
    "TcpTransport",
]
