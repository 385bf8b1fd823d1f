# Load environment variables before anything else
from dotenv import load_dotenv  # # Import dotenv loader
load_dotenv()  # # Settings and DD_* variables may come from .env

# Datadog auto-instrumentation (must be before any framework imports)
from ddtrace import patch_all  # # Auto-instrument all supported libraries
patch_all()  # # Traces FastAPI routes and outgoing requests calls

from typing import Optional

from fastapi import FastAPI

from privacy_proxy import __version__
from privacy_proxy.api.routers import proxy as proxy_router
from privacy_proxy.domain.errors import ConfigError
from privacy_proxy.domain.interfaces.iupstream_client import IUpstreamClient
from privacy_proxy.domain.rules import ProxyConfig
from privacy_proxy.infrastructure.config.proxy_config import load_proxy_config
from privacy_proxy.infrastructure.config.settings import Settings, get_settings
from privacy_proxy.infrastructure.factories.director_factory import (
    build_request_director,
    build_upstream_client,
)

# Structured JSON logger integration
from privacy_proxy.infrastructure.telemetry import configure_event_logger, log_event


def _load_config(settings: Settings) -> ProxyConfig:
    # # Startup errors propagate as ProxyInitError subclasses; nothing is served without a config
    if not settings.config_path:
        raise ConfigError(
            "No proxy configuration given. Pass a config file path or set PRIVACY_PROXY_CONFIG."
        )
    return load_proxy_config(settings.config_path)


def create_app(
    settings: Optional[Settings] = None,
    proxy_config: Optional[ProxyConfig] = None,
    upstream_client: Optional[IUpstreamClient] = None,
) -> FastAPI:
    settings = settings or get_settings()
    proxy_config = proxy_config or _load_config(settings)

    configure_event_logger(settings.log_level)

    app = FastAPI(
        title=settings.app_name,
        version=__version__,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )

    # # Shared read-only state for every request worker
    app.state.settings = settings
    app.state.director = build_request_director(proxy_config)
    app.state.upstream_client = upstream_client or build_upstream_client(settings)

    # # Attach routers
    app.include_router(proxy_router.router)

    log_event(
        event_type="proxy_startup",
        message="Privacy Proxy configured",
        extra_fields={
            "target_host": proxy_config.target_host,
            "clauses": len(proxy_config.clauses),
            "port": proxy_config.port,
            "environment": settings.environment,
        },
    )

    return app
