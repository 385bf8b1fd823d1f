"""Command line entry point: ``privacy-proxy CONFIG``."""

import argparse
import logging
import sys
from typing import List, Optional

from privacy_proxy import __version__


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="privacy-proxy",
        description="A Data-Redacting Reverse Proxy",
    )
    parser.add_argument(
        "config",
        nargs="?",
        help="JSON config file (defaults to $PRIVACY_PROXY_CONFIG)",
    )
    parser.add_argument("--host", help="Address to bind (defaults to $PRIVACY_PROXY_LISTEN_HOST)")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = _build_parser().parse_args(argv)

    # Imported here so --help and --version work without loading ddtrace
    import uvicorn

    from privacy_proxy.domain.errors import ProxyInitError
    from privacy_proxy.infrastructure.config.proxy_config import load_proxy_config
    from privacy_proxy.infrastructure.config.settings import get_settings
    from privacy_proxy.infrastructure.telemetry import configure_event_logger, log_event
    from privacy_proxy.main import create_app

    settings = get_settings()
    if args.config:
        settings = settings.model_copy(update={"config_path": args.config})
    configure_event_logger(settings.log_level)

    try:
        if not settings.config_path:
            raise ProxyInitError("Missing config file argument")
        proxy_config = load_proxy_config(settings.config_path)
        app = create_app(settings=settings, proxy_config=proxy_config)
    except ProxyInitError as e:
        log_event(
            event_type="startup_failed",
            message=str(e),
            level=logging.CRITICAL,
            extra_fields={"error": type(e).__name__},
        )
        return 1

    print(f"Privacy Proxy listening on {proxy_config.port}...")
    uvicorn.run(app, host=args.host or settings.listen_host, port=int(proxy_config.port))
    return 0


if __name__ == "__main__":
    sys.exit(main())
