from __future__ import annotations

import copy
from typing import Any, Dict, List

from privacy_proxy.domain.location import IndexSegment, KeySegment, Location, ROOT
from privacy_proxy.domain.rules import RuleSet
from privacy_proxy.domain.tree import NodeKind, node_kind

# Placeholders written over non-whitelisted leaves, per leaf type
REDACTED_STR = "REDACTED"
REDACTED_NUMBER = 0
REDACTED_BOOL = False


class TreeRedactor:
    # # Whitelist based redaction of decoded payload trees.
    # # A whitelisted location passes its whole subtree through; everything
    # # else keeps its shape while every leaf is overwritten.
    def redact_payload(self, payload: Any, rules: RuleSet, location: Location = ROOT) -> Any:
        # # Return a redacted copy of payload; the input is never mutated
        if rules.has_body_whitelist_match(location):
            return copy.deepcopy(payload)

        kind = node_kind(payload)
        if kind is NodeKind.OBJECT:
            return self._redact_object(payload, rules, location)
        if kind is NodeKind.ARRAY:
            return self._redact_array(payload, rules, location)
        if kind is NodeKind.STRING:
            return REDACTED_STR
        if kind is NodeKind.NUMBER:
            return REDACTED_NUMBER
        if kind is NodeKind.BOOL:
            return REDACTED_BOOL
        # Null stays null, unsupported leaves become null
        return None

    def _redact_object(self, payload: Dict[Any, Any], rules: RuleSet, location: Location) -> Dict[Any, Any]:
        return {
            key: self.redact_payload(value, rules, location + (KeySegment(str(key)),))
            for key, value in payload.items()
        }

    def _redact_array(self, payload: List[Any], rules: RuleSet, location: Location) -> List[Any]:
        return [
            self.redact_payload(item, rules, location + (IndexSegment(index),))
            for index, item in enumerate(payload)
        ]


_DEFAULT_REDACTOR = TreeRedactor()


def redact(rules: RuleSet, value: Any, location: Location = ROOT) -> Any:
    # # Module level shortcut over a shared stateless TreeRedactor
    return _DEFAULT_REDACTOR.redact_payload(value, rules, location)
