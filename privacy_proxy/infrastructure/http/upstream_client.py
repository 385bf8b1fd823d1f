from __future__ import annotations

from typing import List, Optional, Tuple

import requests

from privacy_proxy.domain.messages import OutboundRequest, UpstreamResponse

# Connection-scoped headers that must not be forwarded by a proxy (RFC 9110 7.6.1)
HOP_BY_HOP_HEADERS = frozenset(
    {
        "connection",
        "keep-alive",
        "proxy-authenticate",
        "proxy-authorization",
        "proxy-connection",
        "te",
        "trailer",
        "transfer-encoding",
        "upgrade",
    }
)


def filter_request_headers(request: OutboundRequest) -> dict:
    return {
        name: value
        for name, value in request.headers.items()
        if name.lower() not in HOP_BY_HOP_HEADERS
    }


class RequestsUpstreamClient:
    # # Sends rewritten requests with a pooled requests.Session
    def __init__(self, timeout: float = 30.0, session: Optional[requests.Session] = None) -> None:
        self._timeout = timeout
        self._session = session or requests.Session()
        # Never pick up proxy settings or netrc credentials from the environment
        self._session.trust_env = False

    def send(self, request: OutboundRequest) -> UpstreamResponse:
        # # Raises requests.RequestException on network failure
        resp = self._session.request(
            method=request.method,
            url=request.url,
            headers=filter_request_headers(request),
            data=request.body,
            allow_redirects=False,
            stream=True,
            timeout=self._timeout,
        )
        try:
            # Relay the body exactly as received, without undoing Content-Encoding
            content = resp.raw.read(decode_content=False)
            headers: List[Tuple[str, str]] = [
                (name, value)
                for name in resp.raw.headers
                for value in resp.raw.headers.getlist(name)
            ]
        finally:
            resp.close()

        return UpstreamResponse(
            status_code=resp.status_code,
            headers=headers,
            content=content,
        )

    def close(self) -> None:
        self._session.close()
