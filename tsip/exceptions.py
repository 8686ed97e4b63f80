"""
Exception hierarchy for tsip.

All exceptions inherit from TSIPError, providing a clean hierarchy
for error handling. The design follows these principles:

1. Protocol errors (framing, truncation, unknown packets) are distinct from
   transport errors
2. Recoverable errors (one bad frame) are distinct from fatal errors (the
   byte stream can no longer be trusted)
3. Decode errors carry enough context (packet name, lengths, leading bytes)
   to be logged usefully
"""

from __future__ import annotations


class TSIPError(Exception):
    """
    Base exception for all tsip errors.

    All library-specific exceptions inherit from this class, allowing
    callers to catch all tsip errors with a single except clause.
    """

    pass


class ProtocolError(TSIPError):
    """
    Protocol-level error.

    Raised when the byte stream or a message body violates TSIP, such as:
    - Unescaped DLE not followed by ETX
    - Message body shorter than its layout
    - Message type not recognized
    """

    pass


class FrameError(ProtocolError):
    """
    Frame assembly error.

    Base class for errors raised while reassembling frames from the
    DLE/ETX-delimited byte stream.
    """

    pass


class FramingError(FrameError):
    """
    Unescaped DLE followed by something other than DLE or ETX.

    Fatal by default: once the delimiter structure is broken the read loop
    stops. A FrameAssembler created with resynchronize=True logs it and
    drops the partial frame instead.
    """

    def __init__(
        self,
        message: str = "Expected ETX after DLE",
        *,
        received: int | None = None,
        partial_frame: bytes = b"",
    ) -> None:
        super().__init__(message)
        self.received = received
        self.partial_frame = partial_frame

    def __str__(self) -> str:
        base = super().__str__()
        if self.received is not None:
            return f"{base} (got 0x{self.received:02X} after {len(self.partial_frame)} bytes)"
        return base


class FrameOverflowError(FrameError):
    """
    Frame exceeded the maximum frame length under OverflowPolicy.FAIL.

    Recoverable: the frame is abandoned and the assembler waits for the
    next start marker.
    """

    def __init__(self, limit: int) -> None:
        super().__init__(f"Frame exceeds maximum length of {limit} bytes")
        self.limit = limit


class TruncationError(ProtocolError):
    """
    Message body shorter than its declared layout.

    Recoverable: the frame is dropped and processing resumes with the
    next frame.
    """

    def __init__(
        self,
        message: str,
        *,
        packet_name: str | None = None,
        required: int | None = None,
        available: int | None = None,
    ) -> None:
        super().__init__(message)
        self.packet_name = packet_name
        self.required = required
        self.available = available

    def __str__(self) -> str:
        parts = [super().__str__()]
        if self.packet_name:
            parts.append(f"packet={self.packet_name}")
        if self.required is not None and self.available is not None:
            parts.append(f"need={self.required} have={self.available}")
        return " ".join(parts)


class UnmatchedKindError(ProtocolError):
    """
    No registry entry and no variable-length handler recognizes the frame.

    Recoverable: reported as an unknown packet with the raw leading bytes.
    """

    def __init__(self, leading: bytes) -> None:
        self.leading = bytes(leading)
        shown = self.leading.hex(" ") if self.leading else "(empty)"
        super().__init__(f"Unknown packet type: {shown}")


class EncodeError(ProtocolError):
    """
    A command or packet field cannot be represented in its wire width.
    """

    pass


class RegistryOrderError(TSIPError, ValueError):
    """
    Packet registry entries are in an order that would misclassify frames.

    Raised at registry construction (or registration) time when a longer
    prefix appears after a shorter prefix it extends, or when a prefix is
    registered twice.
    """

    pass


class TransportError(TSIPError):
    """
    Transport-level error.

    Raised for low-level transport issues:
    - Socket or serial port errors
    - I/O errors
    - Transport used while closed
    """

    pass


class EndOfStreamError(TransportError):
    """
    The byte source has ended (peer closed the connection).
    """

    pass


class TimeoutError(TSIPError):  # noqa: A001 - intentionally shadows builtin
    """
    Read timeout.

    Only raised when a transport is given a default_timeout; by default
    reads wait indefinitely for the next byte.
    """

    def __init__(
        self,
        message: str = "Communication timeout",
        *,
        timeout_seconds: float | None = None,
    ) -> None:
        super().__init__(message)
        self.timeout_seconds = timeout_seconds

    def __str__(self) -> str:
        base = super().__str__()
        if self.timeout_seconds is not None:
            return f"{base} (after {self.timeout_seconds:.1f}s)"
        return base


class ConnectionError(TSIPError):  # noqa: A001 - intentionally shadows builtin
    """
    Receiver connection error.

    Raised when:
    - The client is used before being started
    - The client is started twice
    """

    pass
