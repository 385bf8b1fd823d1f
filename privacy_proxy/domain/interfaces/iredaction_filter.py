# Redacts a decoded payload tree against a ruleset
from typing import Protocol, Any

from privacy_proxy.domain.location import Location, ROOT
from privacy_proxy.domain.rules import RuleSet


class IRedactionFilter(Protocol):
    # Redacts a nested payload structure, returning a copy
    def redact_payload(self, payload: Any, rules: RuleSet, location: Location = ROOT) -> Any:
        ...
