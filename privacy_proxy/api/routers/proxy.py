# Proxy Router: every request is redacted by the director, then relayed upstream
import logging
from typing import Any, Dict
from urllib.parse import quote

import requests
from fastapi import APIRouter, Depends, Request, Response
from fastapi.concurrency import run_in_threadpool
from requests.structures import CaseInsensitiveDict

from privacy_proxy.application.directors.request_director import RequestDirector
from privacy_proxy.domain.interfaces.iupstream_client import IUpstreamClient
from privacy_proxy.domain.messages import IncomingRequest, UpstreamResponse
from privacy_proxy.infrastructure.http import HOP_BY_HOP_HEADERS
from privacy_proxy.infrastructure.telemetry import log_event


HEALTH_PATH = "/__privacy_proxy/health"

PROXY_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]

# Starlette computes Content-Length from the relayed body itself
_SKIPPED_RESPONSE_HEADERS = HOP_BY_HOP_HEADERS | {"content-length"}

router = APIRouter(tags=["proxy"])


def get_request_director(request: Request) -> RequestDirector:
    # Director is built once at startup and stored on the app
    return request.app.state.director


def get_upstream_client(request: Request) -> IUpstreamClient:
    return request.app.state.upstream_client


def _request_target(request: Request) -> str:
    # Path exactly as sent by the client (still percent-encoded) plus the raw query
    raw_path = request.scope.get("raw_path")
    if raw_path:
        path = raw_path.decode("latin-1").split("?", 1)[0]
    else:
        path = quote(request.scope.get("path", "/"))
    query = request.scope.get("query_string", b"").decode("latin-1")
    return f"{path}?{query}" if query else path


def _has_body(request: Request, body: bytes) -> bool:
    return bool(body) or "content-length" in request.headers or "transfer-encoding" in request.headers


def relay_response(upstream: UpstreamResponse) -> Response:
    response = Response(content=upstream.content, status_code=upstream.status_code)
    for name, value in upstream.headers:
        if name.lower() in _SKIPPED_RESPONSE_HEADERS:
            continue
        response.headers.append(name, value)
    return response


@router.get(HEALTH_PATH)
async def health(request: Request) -> Dict[str, Any]:
    settings = request.app.state.settings
    director: RequestDirector = request.app.state.director
    return {
        "status": "ok",
        "app": settings.app_name,
        "environment": settings.environment,
        "target_host": director.config.target_host,
        "clauses": len(director.config.clauses),
    }


@router.api_route("/{full_path:path}", methods=PROXY_METHODS, include_in_schema=False)
async def proxy_endpoint(
    request: Request,
    director: RequestDirector = Depends(get_request_director),
    upstream: IUpstreamClient = Depends(get_upstream_client),
) -> Response:
    body = await request.body()
    incoming = IncomingRequest(
        method=request.method,
        target=_request_target(request),
        headers=CaseInsensitiveDict(request.headers.items()),
        body=body if _has_body(request, body) else None,
    )

    # Redaction is CPU bound and the upstream call blocks, keep both off the event loop
    outbound = await run_in_threadpool(director.handle, incoming)

    try:
        upstream_response = await run_in_threadpool(upstream.send, outbound)
    except requests.RequestException as e:
        log_event(
            event_type="upstream_failed",
            message="Upstream request failed",
            level=logging.ERROR,
            extra_fields={
                "method": outbound.method,
                "host": outbound.host,
                "error": type(e).__name__,
            },
        )
        return Response(status_code=502)

    return relay_response(upstream_response)
