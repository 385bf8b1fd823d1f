# Converts request bodies of one media type to and from payload trees
from typing import Protocol, Any


class IBodyCodec(Protocol):
    # Media type handled by the codec, lower case without parameters
    media_type: str

    # Parses raw bytes, raising DecodeError on malformed content
    def decode(self, body: bytes) -> Any:
        ...

    # Serializes a payload tree deterministically
    def encode(self, payload: Any) -> bytes:
        ...
