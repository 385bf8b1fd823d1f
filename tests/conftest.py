"""
Pytest configuration and shared fixtures for Privacy Proxy tests.

Datadog tracing is switched off before any privacy_proxy module is imported,
and the upstream backend is replaced by a recording fake so no test touches
the network.
"""

import os
import sys
from typing import List, Optional
from urllib.parse import urlsplit

import pytest

os.environ.setdefault("DD_TRACE_ENABLED", "false")
os.environ.setdefault("DD_INSTRUMENTATION_TELEMETRY_ENABLED", "false")

# Add parent directory to path for package imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from privacy_proxy.domain.messages import OutboundRequest, UpstreamResponse  # noqa: E402
from privacy_proxy.domain.rules import MatchClause, ProxyConfig, RuleSet  # noqa: E402


class FakeUpstreamClient:
    """Records every outbound request and answers with a canned response."""

    def __init__(self, response: Optional[UpstreamResponse] = None, error: Optional[Exception] = None):
        self.requests: List[OutboundRequest] = []
        self.response = response or UpstreamResponse(
            status_code=200,
            headers=[("Content-Type", "application/json")],
            content=b'{"ok":true}',
        )
        self.error = error

    def send(self, request: OutboundRequest) -> UpstreamResponse:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return self.response


def make_config(*clauses: MatchClause, target: str = "https://api.usebutton.com/ingest") -> ProxyConfig:
    return ProxyConfig(target=urlsplit(target), clauses=tuple(clauses))


@pytest.fixture
def whitelist_config() -> ProxyConfig:
    """Config with a single GET /v1/whitelist clause."""
    return make_config(
        MatchClause(
            method="GET",
            path="/v1/whitelist",
            rules=RuleSet.build(body=["$.a.b", "$.a.c"], querystring=["a"]),
        )
    )


@pytest.fixture
def fake_upstream() -> FakeUpstreamClient:
    return FakeUpstreamClient()
