from __future__ import annotations

from typing import Optional, Tuple

from privacy_proxy.domain.rules import EMPTY_RULESET, MatchClause, ProxyConfig, RuleSet


def is_same_path(a: str, b: str) -> bool:
    # # Equal regardless of trailing slashes
    return a.rstrip("/") == b.rstrip("/")


def is_same_case_insensitive(a: str, b: str) -> bool:
    return a.lower() == b.lower()


def clause_matches(clause: MatchClause, method: str, path: str) -> bool:
    if clause.method and not is_same_case_insensitive(clause.method, method):
        return False
    if clause.path and not is_same_path(clause.path, path):
        return False
    return True


def find_match_clause(
    config: ProxyConfig,
    method: str,
    path: str,
) -> Tuple[Optional[int], Optional[MatchClause]]:
    # # First clause matching method and path, with its position in the config
    for index, clause in enumerate(config.clauses):
        if clause_matches(clause, method, path):
            return index, clause
    return None, None


def select_ruleset(config: ProxyConfig, method: str, path: str) -> RuleSet:
    # # Rules of the first matching clause; the empty ruleset (redact everything) otherwise
    _, clause = find_match_clause(config, method, path)
    if clause is None:
        return EMPTY_RULESET
    return clause.rules
