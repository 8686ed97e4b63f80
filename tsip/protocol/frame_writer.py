"""
TSIP frame construction for outgoing commands.

Frame format: DLE + packet id + stuffed(body) + DLE + ETX

Stuffing doubles every literal 0x10 in the body so the receiver cannot
mistake it for a delimiter. The packet id is written as-is and must not
contain 0x10.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Final

from tsip.protocol.constants import DLE, ETX

if TYPE_CHECKING:
    from tsip.models.commands import Command

_DLE_BYTE: Final[bytes] = bytes([DLE])
_STUFFED_DLE: Final[bytes] = bytes([DLE, DLE])
_TERMINATOR: Final[bytes] = bytes([DLE, ETX])


def stuff(body: bytes | bytearray | memoryview) -> bytes:
    """
    Double every literal DLE byte.

    Example:
        >>> stuff(b"\\x01\\x10\\x02")
        b'\\x01\\x10\\x10\\x02'
    """
    return bytes(body).replace(_DLE_BYTE, _STUFFED_DLE)


def frame_command(kind_id: bytes | bytearray, body: bytes | bytearray = b"") -> bytes:
    """
    Build a complete TSIP frame.

    Args:
        kind_id: One- or two-byte packet id.
        body: Unstuffed packet body.

    Returns:
        Framed bytes ready for transmission.

    Raises:
        ValueError: If kind_id is empty, longer than two bytes, or contains DLE.

    Example:
        >>> frame_command(b"\\x3c", b"\\x00").hex(" ")
        '10 3c 00 10 03'
    """
    if not 1 <= len(kind_id) <= 2:
        raise ValueError(f"Packet id must be 1 or 2 bytes, got {len(kind_id)}")
    if DLE in kind_id:
        raise ValueError(f"Packet id {bytes(kind_id).hex()} contains DLE (0x10)")
    return _DLE_BYTE + bytes(kind_id) + stuff(body) + _TERMINATOR


def encode_command(command: Command) -> bytes:
    """
    Encode a command model into a framed byte buffer.

    Args:
        command: Command to encode.

    Returns:
        Framed bytes ready for transmission.

    Raises:
        EncodeError: If a field value does not fit its wire width.
    """
    return frame_command(command.packet_id, command.encode_body())
