# Delivers rewritten requests to the proxied backend
from typing import Protocol

from privacy_proxy.domain.messages import OutboundRequest, UpstreamResponse


class IUpstreamClient(Protocol):
    # Sends the request and returns the raw upstream reply
    def send(self, request: OutboundRequest) -> UpstreamResponse:
        ...
