"""
Tests for location addressing.

Tests cover:
- Parsing location strings into segments
- Whole-path matching of compiled patterns
- The [*] array wildcard
- Literal treatment of path metacharacters inside keys
- Malformed patterns
"""

import pytest

from privacy_proxy.domain.errors import ConfigError, PatternError
from privacy_proxy.domain.location import (
    IndexSegment,
    KeySegment,
    LocationPattern,
    ROOT,
    format_location,
    parse_location,
)


class TestParseLocation:
    """Test suite for parse_location."""

    def test_root(self):
        assert parse_location("$") == ROOT

    def test_keys_and_indices(self):
        assert parse_location("$.a[3].b") == (KeySegment("a"), IndexSegment(3), KeySegment("b"))

    def test_wildcard(self):
        segments = parse_location("$.a[*]")
        assert segments == (KeySegment("a"), IndexSegment(None))
        assert segments[1].is_wildcard

    def test_quoted_key(self):
        assert parse_location('$["a.b"].c') == (KeySegment("a.b"), KeySegment("c"))

    def test_quoted_empty_key(self):
        assert parse_location('$[""]') == (KeySegment(""),)

    def test_metacharacters_are_literal_key_text(self):
        assert parse_location("$.price$") == (KeySegment("price$"),)
        assert parse_location("$.a+b*]") == (KeySegment("a+b*]"),)

    def test_leading_zero_index(self):
        assert parse_location("$[05]") == (IndexSegment(5),)

    @pytest.mark.parametrize(
        "pattern",
        ["", "a.b", "$x", "$.", "$..a", "$.a[", "$.a[-1]", "$.a[x]", "$[]", '$["a', '$["a"', "!$.a"],
    )
    def test_malformed(self, pattern):
        with pytest.raises(PatternError) as exc_info:
            parse_location(pattern)
        assert exc_info.value.pattern == pattern

    def test_pattern_error_is_a_config_error(self):
        assert issubclass(PatternError, ConfigError)


class TestFormatLocation:
    """Test suite for canonical rendering."""

    def test_root(self):
        assert format_location(ROOT) == "$"

    def test_plain_and_quoted_keys(self):
        location = (KeySegment("a.b"), IndexSegment(0), KeySegment("c"), KeySegment("d[1]"))
        rendered = format_location(location)
        assert rendered == '$["a.b"][0].c["d[1]"]'
        assert parse_location(rendered) == location


class TestLocationPattern:
    """Test suite for compiled pattern matching."""

    @pytest.mark.parametrize(
        "pattern,candidate,expected",
        [
            ("$.a", "$.a", True),
            ("$.a", "!$.a", False),
            ("$.a", "$.a!", False),
            ("$.a", "!$.a!", False),
            ("$.a", "$.b", False),
            ("$.a[5]", "$.a[5]", True),
            ("$.a[5]", "$.a[4]", False),
            ("$.a[*]", "$.a[4]", True),
            ("$[*]", "$[5]", True),
            ("$", "$", True),
        ],
    )
    def test_matches_string_locations(self, pattern, candidate, expected):
        assert LocationPattern.compile(pattern).matches(candidate) is expected

    def test_must_cover_entire_location(self):
        pattern = LocationPattern.compile("$.a[*]")
        assert pattern.matches("$.a") is False
        assert pattern.matches("$.a[4].b") is False

    def test_wildcard_only_matches_indices(self):
        pattern = LocationPattern.compile("$.a[*]")
        assert pattern.matches((KeySegment("a"), KeySegment("0"))) is False
        assert pattern.matches((KeySegment("a"), IndexSegment(0))) is True

    def test_wildcard_only_at_its_position(self):
        pattern = LocationPattern.compile("$.a[*].c")
        assert pattern.matches("$.a[7].c") is True
        assert pattern.matches("$.b[7].c") is False
        assert pattern.matches("$.a[7].d") is False

    def test_candidate_wildcard_is_not_concrete(self):
        assert LocationPattern.compile("$.a[*]").matches("$.a[*]") is False

    def test_metacharacters_match_literally(self):
        pattern = LocationPattern.compile("$.a*")
        assert pattern.matches("$.a*") is True
        assert pattern.matches("$.ab") is False

    def test_dotted_key_requires_quoted_form(self):
        nested = LocationPattern.compile("$.a.b")
        dotted = LocationPattern.compile('$["a.b"]')

        assert nested.matches((KeySegment("a"), KeySegment("b"))) is True
        assert nested.matches((KeySegment("a.b"),)) is False
        assert dotted.matches((KeySegment("a.b"),)) is True
        assert dotted.matches((KeySegment("a"), KeySegment("b"))) is False

    def test_keeps_source(self):
        pattern = LocationPattern.compile("$.a[*]")
        assert pattern.source == "$.a[*]"
        assert str(pattern) == "$.a[*]"
