from __future__ import annotations

import json
import math
from typing import Any

from privacy_proxy.domain.errors import DecodeError

JSON_MEDIA_TYPE = "application/json"


def _reject_constant(name: str) -> Any:
    # # NaN / Infinity / -Infinity are not JSON
    raise ValueError(f"non-standard constant {name}")


def _parse_finite_float(text: str) -> float:
    # # 1e400 is valid syntax but does not fit a float
    value = float(text)
    if not math.isfinite(value):
        raise ValueError(f"number {text} out of range")
    return value


class JSONBodyCodec:
    # # application/json <-> payload tree (dict / list / str / int / float / bool / None)
    media_type = JSON_MEDIA_TYPE

    def decode(self, body: bytes) -> Any:
        try:
            return json.loads(body, parse_float=_parse_finite_float, parse_constant=_reject_constant)
        except (ValueError, RecursionError) as e:
            raise DecodeError(self.media_type, str(e)) from e

    def encode(self, payload: Any) -> bytes:
        # # Compact separators, key order preserved
        try:
            text = json.dumps(
                payload,
                ensure_ascii=False,
                separators=(",", ":"),
                allow_nan=False,
            )
        except (TypeError, ValueError, RecursionError) as e:
            raise DecodeError(self.media_type, f"cannot encode: {e}") from e
        return text.encode("utf-8")
