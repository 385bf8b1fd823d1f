from .json_codec import JSONBodyCodec, JSON_MEDIA_TYPE
from .registry import CodecRegistry, default_registry, media_type_of

__all__ = [
    "JSONBodyCodec",
    "JSON_MEDIA_TYPE",
    "CodecRegistry",
    "default_registry",
    "media_type_of",
]
