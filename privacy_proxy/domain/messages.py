from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from requests.structures import CaseInsensitiveDict

from privacy_proxy.domain.errors import DecodeError


@dataclass
class IncomingRequest:
    # # Request as received by the proxy; target is the request-target, e.g. "/v1/users?a=2"
    method: str
    target: str
    headers: CaseInsensitiveDict = field(default_factory=CaseInsensitiveDict)
    body: Optional[bytes] = None


@dataclass
class OutboundRequest:
    # # Rewritten request ready to be sent upstream
    method: str
    url: str
    host: str
    headers: CaseInsensitiveDict
    body: Optional[bytes] = None
    clause_index: Optional[int] = None
    body_error: Optional[DecodeError] = None


@dataclass
class UpstreamResponse:
    # # Upstream reply relayed back to the client unmodified
    status_code: int
    headers: List[Tuple[str, str]] = field(default_factory=list)
    content: bytes = b""
