# Builds fully wired proxy components with their concrete implementations
from typing import Optional

# Redaction engine
from privacy_proxy.redaction import TreeRedactor

# Body codecs
from privacy_proxy.infrastructure.codecs import default_registry

# Upstream transport
from privacy_proxy.infrastructure.http import RequestsUpstreamClient

# Config
from privacy_proxy.infrastructure.config.settings import Settings, get_settings
from privacy_proxy.domain.rules import ProxyConfig

# Director class
from privacy_proxy.application.directors.request_director import RequestDirector


def build_request_director(config: ProxyConfig) -> RequestDirector:
    # Config is loaded once at startup and shared read-only by every request
    return RequestDirector(
        config=config,
        redaction=TreeRedactor(),
        codecs=default_registry(),
    )


def build_upstream_client(settings: Optional[Settings] = None) -> RequestsUpstreamClient:
    settings = settings or get_settings()
    return RequestsUpstreamClient(timeout=settings.upstream_timeout_seconds)
