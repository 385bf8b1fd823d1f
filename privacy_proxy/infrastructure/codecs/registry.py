from __future__ import annotations

from typing import Dict, Iterable, Optional

from privacy_proxy.domain.interfaces.ibody_codec import IBodyCodec
from privacy_proxy.infrastructure.codecs.json_codec import JSONBodyCodec


def media_type_of(content_type: Optional[str]) -> str:
    # # "Application/JSON; charset=utf-8" -> "application/json"; "" when absent
    if not content_type:
        return ""
    return content_type.split(";", 1)[0].strip().lower()


class CodecRegistry:
    # # Looks up body codecs by the media type of a Content-Type header
    def __init__(self, codecs: Iterable[IBodyCodec] = ()) -> None:
        self._codecs: Dict[str, IBodyCodec] = {}
        for codec in codecs:
            self.register(codec)

    def register(self, codec: IBodyCodec) -> None:
        self._codecs[media_type_of(codec.media_type)] = codec

    def for_content_type(self, content_type: Optional[str]) -> Optional[IBodyCodec]:
        # # None for empty or unrecognized content types
        media_type = media_type_of(content_type)
        if not media_type:
            return None
        return self._codecs.get(media_type)

    def media_types(self) -> list[str]:
        return sorted(self._codecs)


def default_registry() -> CodecRegistry:
    return CodecRegistry([JSONBodyCodec()])
