from __future__ import annotations

from typing import Dict, List, Mapping, Sequence
from urllib.parse import parse_qs, quote_plus, urlencode

from privacy_proxy.domain.rules import RuleSet
from privacy_proxy.redaction.tree_redactor import REDACTED_STR

# Percent escapes that are not valid UTF-8 survive parse and re-encode byte for byte
_QUERY_ENCODING = "utf-8"
_QUERY_ERRORS = "surrogateescape"


def redact_query_values(
    rules: RuleSet,
    values: Mapping[str, Sequence[str]],
) -> Dict[str, List[str]]:
    # # Keep every value of whitelisted keys, overwrite every value of the others
    redacted: Dict[str, List[str]] = {}
    for key, key_values in values.items():
        if rules.has_querystring_whitelist_match(key):
            redacted[key] = list(key_values)
        else:
            redacted[key] = [REDACTED_STR] * len(key_values)
    return redacted


def encode_query(values: Mapping[str, Sequence[str]]) -> str:
    # # Canonical encoding: keys sorted, values in their original order
    pairs = [
        (key, value)
        for key in sorted(values)
        for value in values[key]
    ]
    return urlencode(pairs, encoding=_QUERY_ENCODING, errors=_QUERY_ERRORS, quote_via=quote_plus)


def redact_querystring(rules: RuleSet, raw_query: str) -> str:
    # # Redact a raw query string; the result can replace the URL query as-is
    if not raw_query:
        return ""
    parsed = parse_qs(raw_query, keep_blank_values=True, encoding=_QUERY_ENCODING, errors=_QUERY_ERRORS)
    return encode_query(redact_query_values(rules, parsed))
