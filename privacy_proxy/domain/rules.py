from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Tuple
from urllib.parse import SplitResult

from privacy_proxy.domain.location import Location, LocationPattern

DEFAULT_PORT = "8888"


@dataclass(frozen=True)
class RuleSet:
    # # Whitelists applicable to one request: body location patterns + exact querystring keys
    body: Tuple[LocationPattern, ...] = ()
    querystring: Tuple[str, ...] = ()

    @classmethod
    def build(
        cls,
        body: Iterable[str] = (),
        querystring: Iterable[str] = (),
    ) -> "RuleSet":
        # # Compile raw pattern strings; raises PatternError on malformed patterns
        return cls(
            body=tuple(LocationPattern.compile(p) for p in body),
            querystring=tuple(querystring),
        )

    def has_body_whitelist_match(self, location: Location) -> bool:
        return any(pattern.matches(location) for pattern in self.body)

    def has_querystring_whitelist_match(self, key: str) -> bool:
        return key in self.querystring


EMPTY_RULESET = RuleSet()


@dataclass(frozen=True)
class MatchClause:
    # # None for method or path means "matches anything"
    method: Optional[str] = None
    path: Optional[str] = None
    rules: RuleSet = EMPTY_RULESET


@dataclass(frozen=True)
class ProxyConfig:
    # # Immutable process-wide configuration, built once at startup
    target: SplitResult
    clauses: Tuple[MatchClause, ...] = ()
    port: str = DEFAULT_PORT

    @property
    def target_url(self) -> str:
        return self.target.geturl()

    @property
    def target_host(self) -> str:
        return self.target.netloc
