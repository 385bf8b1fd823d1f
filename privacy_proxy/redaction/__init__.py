# # Public redaction API for the privacy proxy

from .tree_redactor import (
    TreeRedactor,
    redact,
    REDACTED_STR,
    REDACTED_NUMBER,
    REDACTED_BOOL,
)
from .querystring import (
    redact_querystring,
    redact_query_values,
    encode_query,
)

__all__ = [
    "TreeRedactor",
    "redact",
    "REDACTED_STR",
    "REDACTED_NUMBER",
    "REDACTED_BOOL",
    "redact_querystring",
    "redact_query_values",
    "encode_query",
]
