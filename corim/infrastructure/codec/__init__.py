from corim.infrastructure.codec.cbor import CborCodec
from corim.infrastructure.codec.config import CodecConfig
from corim.infrastructure.codec.json import JsonCodec

__all__ = [
    "CborCodec",
    "CodecConfig",
    "JsonCodec",
]
