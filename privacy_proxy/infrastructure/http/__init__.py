from .upstream_client import RequestsUpstreamClient, HOP_BY_HOP_HEADERS

__all__ = ["RequestsUpstreamClient", "HOP_BY_HOP_HEADERS"]
