"""
Parsing engine for TSIP packets.

This package converts de-stuffed frames into packet models:

1. **BinaryReader**: Bounds-checked big-endian reader
2. **PacketRegistry**: Ordered prefix table classifying frames by kind
3. **Codecs**: Fixed field layouts per packet kind
4. **VariableLengthHandler**: Count-prefixed record lists (0x47)
5. **PacketDecoder**: Dispatch over all of the above

Example:
    >>> from tsip.parsers import decode_packet
    >>> packet = decode_packet(frame)
    >>> print(packet.kind)
"""

from tsip.parsers.binary_reader import BinaryReader
from tsip.parsers.codec import (
    CODECS_BY_KIND,
    FIXED_CODECS,
    PacketCodec,
    get_codec,
)
from tsip.parsers.decoder import (
    DEFAULT_DECODER,
    DecodeFailure,
    DecodeResult,
    PacketDecoder,
    decode_packet,
)
from tsip.parsers.registry import (
    DEFAULT_REGISTRY,
    Match,
    MatchEntry,
    PacketRegistry,
    create_default_registry,
)
from tsip.parsers.variable_length import (
    DEFAULT_VARIABLE_HANDLER,
    SIGNAL_LEVELS_CODEC,
    RecordListCodec,
    VariableLengthHandler,
    decode_signal_report,
    encode_signal_report,
)

__all__ = [
    # Binary Reader
    "BinaryReader",
    # Codecs
    "PacketCodec",
    "FIXED_CODECS",
    "CODECS_BY_KIND",
    "get_codec",
    # Registry
    "MatchEntry",
    "Match",
    "PacketRegistry",
    "create_default_registry",
    "DEFAULT_REGISTRY",
    # Variable-length
    "RecordListCodec",
    "VariableLengthHandler",
    "SIGNAL_LEVELS_CODEC",
    "decode_signal_report",
    "encode_signal_report",
    "DEFAULT_VARIABLE_HANDLER",
    # Decoder
    "PacketDecoder",
    "DecodeResult",
    "DecodeFailure",
    "decode_packet",
    "DEFAULT_DECODER",
]
