"""
tsip - Python library for the Trimble Standard Interface Protocol.

This library decodes and encodes TSIP, the DLE/ETX-framed binary protocol
spoken by GPS timing receivers such as the Thunderbolt family. It
reassembles the receiver byte stream into frames, decodes each frame into
a typed packet model and frames outgoing commands.

Example:
    >>> from tsip import ReceiverClient
    >>> from tsip.transport import TcpTransport
    >>>
    >>> async def main():
    ...     async with ReceiverClient(TcpTransport("192.168.1.50", 4001)) as client:
    ...         await client.request_software_version()
    ...         async for packet in client.packets():
    ...             print(packet.kind, packet)
"""

from tsip.client import ClientState, ReceiverClient, ReceiverStatistics
from tsip.exceptions import (
    ConnectionError,
    EncodeError,
    EndOfStreamError,
    FrameError,
    FrameOverflowError,
    FramingError,
    ProtocolError,
    RegistryOrderError,
    TimeoutError,
    TransportError,
    TruncationError,
    TSIPError,
    UnmatchedKindError,
)
from tsip.models import (
    GetSatelliteTrackingStatusCommand,
    GetSignalLevelsCommand,
    GetSoftwareVersionCommand,
    PPSCharacteristicsPacket,
    PrimaryTimingPacket,
    SatelliteSignalReport,
    SatelliteTrackingStatusPacket,
    SecondaryTimingPacket,
    SignalLevel,
    SoftwareVersionPacket,
)
from tsip.parsers import PacketDecoder, decode_packet
from tsip.protocol import FrameReader, encode_command, frame_command, iter_frames
from tsip.transport import AbstractTransport, AsyncSerialTransport, TcpTransport

__version__ = "0.1.0"
__all__ = [
    # Client
    "ReceiverClient",
    "ClientState",
    "ReceiverStatistics",
    # Codec
    "PacketDecoder",
    "decode_packet",
    "FrameReader",
    "iter_frames",
    "encode_command",
    "frame_command",
    # Models
    "PrimaryTimingPacket",
    "SecondaryTimingPacket",
    "PPSCharacteristicsPacket",
    "SatelliteTrackingStatusPacket",
    "SoftwareVersionPacket",
    "SatelliteSignalReport",
    "SignalLevel",
    "GetSoftwareVersionCommand",
    "GetSignalLevelsCommand",
    "GetSatelliteTrackingStatusCommand",
    # Exceptions
    "TSIPError",
    "ProtocolError",
    "FrameError",
    "FramingError",
    "FrameOverflowError",
    "TruncationError",
    "UnmatchedKindError",
    "EncodeError",
    "RegistryOrderError",
    "TransportError",
    "EndOfStreamError",
    "TimeoutError",
    "ConnectionError",
    # Transport
    "AbstractTransport",
    "AsyncSerialTransport",
    "TcpTransport",
    # Version
    "__version__",
]
