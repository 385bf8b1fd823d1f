"""
Tests for the HTTP proxy surface.

Tests cover:
- End-to-end redaction of bodies and query strings
- Relaying upstream status, headers and body
- Upstream failures mapped to 502
- Health endpoint
"""

import json

import pytest
import requests
from fastapi.testclient import TestClient

from conftest import FakeUpstreamClient
from privacy_proxy.api.routers.proxy import HEALTH_PATH
from privacy_proxy.application.directors.request_director import REDACTED_MARKER_HEADER
from privacy_proxy.domain.messages import UpstreamResponse
from privacy_proxy.infrastructure.config.settings import Settings
from privacy_proxy.main import create_app


def make_client(config, upstream):
    app = create_app(settings=Settings(), proxy_config=config, upstream_client=upstream)
    return TestClient(app)


@pytest.fixture
def client(whitelist_config, fake_upstream):
    return make_client(whitelist_config, fake_upstream)


class TestProxyRequests:
    """Test suite for the catch-all proxy route."""

    def test_post_body_fully_redacted(self, client, fake_upstream):
        payload = {"user": {"email": "a@b.c", "age": 31, "admin": True, "tags": ["x", None]}}

        response = client.post("/v1/users", json=payload)

        assert response.status_code == 200
        assert response.json() == {"ok": True}

        sent = fake_upstream.requests[0]
        assert sent.method == "POST"
        assert sent.url == "https://api.usebutton.com/ingest/v1/users"
        assert json.loads(sent.body) == {
            "user": {"email": "REDACTED", "age": 0, "admin": False, "tags": ["REDACTED", None]}
        }
        assert sent.headers["Content-Length"] == str(len(sent.body))
        assert sent.headers["Host"] == "api.usebutton.com"
        assert sent.headers[REDACTED_MARKER_HEADER] == "1"

    def test_whitelisted_get(self, client, fake_upstream):
        response = client.request(
            "GET",
            "/v1/whitelist?c=2&a=1",
            content=b'{"a":{"b":10,"c":"data","d":10}}',
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 200
        sent = fake_upstream.requests[0]
        assert json.loads(sent.body) == {"a": {"b": 10, "c": "data", "d": 0}}
        assert sent.url == "https://api.usebutton.com/ingest/v1/whitelist?a=1&c=REDACTED"

    def test_get_without_body(self, client, fake_upstream):
        client.get("/v1/whitelist?a=1&token=abc")

        sent = fake_upstream.requests[0]
        assert sent.body is None
        assert sent.url == "https://api.usebutton.com/ingest/v1/whitelist?a=1&token=REDACTED"

    def test_unsupported_body_emptied(self, client, fake_upstream):
        client.post("/graphql", content=b"{ user { email } }", headers={"Content-Type": "application/graphql"})

        sent = fake_upstream.requests[0]
        assert sent.body == b""
        assert sent.headers["Content-Length"] == "0"

    def test_undecodable_body_still_forwarded(self, client, fake_upstream):
        response = client.post("/v1/users", content=b'{"email": ', headers={"Content-Type": "application/json"})

        assert response.status_code == 200
        assert fake_upstream.requests[0].body == b""

    def test_custom_headers_forwarded(self, client, fake_upstream):
        client.get("/v1/whitelist", headers={"X-Request-Id": "abc-123"})
        assert fake_upstream.requests[0].headers["X-Request-Id"] == "abc-123"


class TestResponseRelay:
    """Test suite for relaying upstream responses."""

    def test_status_headers_and_body(self, whitelist_config):
        upstream = FakeUpstreamClient(
            response=UpstreamResponse(
                status_code=404,
                headers=[
                    ("Content-Type", "text/plain"),
                    ("Set-Cookie", "a=1"),
                    ("Set-Cookie", "b=2"),
                    ("Connection", "close"),
                    ("Content-Length", "999"),
                ],
                content=b"missing",
            )
        )
        response = make_client(whitelist_config, upstream).get("/nowhere")

        assert response.status_code == 404
        assert response.content == b"missing"
        assert response.headers["content-type"] == "text/plain"
        assert response.headers.get_list("set-cookie") == ["a=1", "b=2"]
        assert response.headers["content-length"] == "7"

    def test_upstream_failure_returns_502(self, whitelist_config):
        upstream = FakeUpstreamClient(error=requests.ConnectionError("refused"))
        response = make_client(whitelist_config, upstream).post("/v1/users", json={"a": 1})

        assert response.status_code == 502
        assert len(upstream.requests) == 1


class TestHealth:
    """Test suite for the health endpoint."""

    def test_health(self, client, fake_upstream):
        response = client.get(HEALTH_PATH)

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "ok"
        assert body["target_host"] == "api.usebutton.com"
        assert body["clauses"] == 1
        assert fake_upstream.requests == []
