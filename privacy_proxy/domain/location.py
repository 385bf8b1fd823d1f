"""
Location addressing for nested payloads.

A location names one position inside a decoded payload tree:

    $                  the document root
    .key               field ``key`` of an object
    ["a.b"]            field ``a.b`` of an object (quoted form, needed when a
                       key contains ``.`` or ``[`` or is empty)
    [3]                index 3 of an array
    [*]                any index of an array (patterns only)

Given ``{"a": [{"c": 4}, {"c": 5}]}``, the pattern ``$.a[*].c`` whitelists
both ``c`` values. Outside of the quoted form every character of a key is
literal, so ``$.price$`` addresses the key ``price$``.

Patterns are compiled once into segment tuples. During traversal the redactor
extends a segment tuple per node and asks each compiled pattern whether it
matches; no string is built or parsed on that path.
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from typing import Optional, Tuple, Union

from privacy_proxy.domain.errors import PatternError

ROOT_SYMBOL = "$"

_INDEX_RE = re.compile(r"[0-9]+")
_KEY_TERMINATORS = ".["


@dataclass(frozen=True)
class KeySegment:
    # # Object field access
    key: str

    def render(self) -> str:
        if self.key == "" or any(c in self.key for c in _KEY_TERMINATORS):
            return "[" + json.dumps(self.key, ensure_ascii=False) + "]"
        return "." + self.key


@dataclass(frozen=True)
class IndexSegment:
    # # Array index access; index None is the [*] wildcard
    index: Optional[int]

    @property
    def is_wildcard(self) -> bool:
        return self.index is None

    def render(self) -> str:
        if self.index is None:
            return "[*]"
        return f"[{self.index}]"


Segment = Union[KeySegment, IndexSegment]
Location = Tuple[Segment, ...]

ROOT: Location = ()


def format_location(location: Location) -> str:
    # # Render a segment tuple in its canonical string form
    return ROOT_SYMBOL + "".join(segment.render() for segment in location)


def _parse_bracket(text: str, start: int) -> Tuple[Segment, int]:
    # # Parse a [..] segment beginning at text[start] == "["
    if text.startswith('"', start + 1):
        try:
            key, end = json.JSONDecoder().raw_decode(text, start + 1)
        except ValueError:
            raise PatternError(text, f"malformed quoted key at offset {start}") from None
        if not text.startswith("]", end):
            raise PatternError(text, f"expected ']' after quoted key at offset {end}")
        return KeySegment(key), end + 1

    close = text.find("]", start)
    if close == -1:
        raise PatternError(text, f"unterminated '[' at offset {start}")
    body = text[start + 1:close]
    if body == "*":
        return IndexSegment(None), close + 1
    if _INDEX_RE.fullmatch(body):
        return IndexSegment(int(body)), close + 1
    raise PatternError(text, f"invalid array index {body!r} at offset {start}")


def parse_location(text: str) -> Location:
    """
    Parse a location string into its segments.

    Raises:
        PatternError: if the text is not rooted at ``$`` or a segment is
            malformed (empty key, unterminated bracket, non-integer index).
    """
    if not text.startswith(ROOT_SYMBOL):
        raise PatternError(text, f"must start with {ROOT_SYMBOL!r}")

    segments = []
    pos = len(ROOT_SYMBOL)
    length = len(text)
    while pos < length:
        char = text[pos]
        if char == ".":
            end = pos + 1
            while end < length and text[end] not in _KEY_TERMINATORS:
                end += 1
            key = text[pos + 1:end]
            if not key:
                raise PatternError(text, f"empty key at offset {pos}")
            segments.append(KeySegment(key))
            pos = end
        elif char == "[":
            segment, pos = _parse_bracket(text, pos)
            segments.append(segment)
        else:
            raise PatternError(text, f"unexpected {char!r} at offset {pos}")
    return tuple(segments)


@dataclass(frozen=True)
class LocationPattern:
    # # A compiled whitelist rule
    source: str
    segments: Location

    @classmethod
    def compile(cls, source: str) -> "LocationPattern":
        return cls(source=source, segments=parse_location(source))

    def matches(self, location: Union[Location, str]) -> bool:
        # # True iff the pattern covers the whole concrete location
        if isinstance(location, str):
            try:
                location = parse_location(location)
            except PatternError:
                return False

        if len(location) != len(self.segments):
            return False

        for expected, actual in zip(self.segments, location):
            if isinstance(expected, IndexSegment):
                if not isinstance(actual, IndexSegment) or actual.is_wildcard:
                    return False
                if not expected.is_wildcard and expected.index != actual.index:
                    return False
            elif expected != actual:
                return False
        return True

    def __str__(self) -> str:
        return self.source
