# Request director: rewrites each incoming request into its redacted upstream form
from __future__ import annotations

import logging
import posixpath
from typing import Optional, Tuple
from urllib.parse import SplitResult, unquote, urlsplit

from ddtrace import tracer
from requests.structures import CaseInsensitiveDict

from privacy_proxy.application.selectors.rule_selector import find_match_clause
from privacy_proxy.domain.errors import DecodeError
from privacy_proxy.domain.interfaces.iredaction_filter import IRedactionFilter
from privacy_proxy.domain.messages import IncomingRequest, OutboundRequest
from privacy_proxy.domain.rules import EMPTY_RULESET, ProxyConfig, RuleSet
from privacy_proxy.infrastructure.codecs.registry import CodecRegistry
from privacy_proxy.infrastructure.telemetry import log_event
from privacy_proxy.redaction.querystring import redact_querystring

REDACTED_MARKER_HEADER = "x-privacy-proxy-redacted"


def join_paths(*parts: str) -> str:
    # # Slash-normalizing join: "/ingest" + "/v1/users/" -> "/ingest/v1/users"
    joined = "/".join(part for part in parts if part)
    if not joined:
        return ""
    cleaned = posixpath.normpath(joined)
    if cleaned.startswith("//"):
        cleaned = "/" + cleaned.lstrip("/")
    return cleaned


def merge_url(destination: SplitResult, source: SplitResult) -> SplitResult:
    """
    Merge a request URL onto the proxy target. For example, if

        source = /v1/users?a=2#anchor
        destination = https://backend/upstream

    the result is https://backend/upstream/v1/users?a=2#anchor. Query and
    fragment always come from the source.
    """
    return destination._replace(
        path=join_paths(destination.path, source.path),
        query=source.query,
        fragment=source.fragment,
    )


class RequestDirector:
    # Director depends on the immutable config plus injected redaction and codecs
    def __init__(
        self,
        config: ProxyConfig,
        redaction: IRedactionFilter,
        codecs: CodecRegistry,
    ) -> None:
        self._config = config
        self._redaction = redaction
        self._codecs = codecs

    @property
    def config(self) -> ProxyConfig:
        return self._config

    def redact_body(
        self,
        rules: RuleSet,
        content_type: Optional[str],
        body: bytes,
    ) -> Tuple[bytes, Optional[DecodeError]]:
        # # Unknown content types and undecodable bodies both become empty bodies
        codec = self._codecs.for_content_type(content_type)
        if codec is None:
            return b"", None

        try:
            payload = codec.decode(body)
            redacted = self._redaction.redact_payload(payload, rules)
            return codec.encode(redacted), None
        except DecodeError as e:
            return b"", e
        except RecursionError:
            # Decodable but nested deeper than the redactor can walk
            return b"", DecodeError(codec.media_type, "payload nested too deeply")

    def handle(self, incoming: IncomingRequest) -> OutboundRequest:
        original = urlsplit(incoming.target)
        original_path = unquote(original.path)
        rewritten = merge_url(self._config.target, original)

        headers = CaseInsensitiveDict(incoming.headers)
        host = rewritten.netloc
        headers["Host"] = host
        headers[REDACTED_MARKER_HEADER] = "1"

        with tracer.trace("privacy_proxy.direct", resource=f"{incoming.method} {original_path}") as span:
            # Rule selection always sees the path as the client sent it
            clause_index, clause = find_match_clause(self._config, incoming.method, original_path)
            rules = clause.rules if clause is not None else EMPTY_RULESET
            span.set_tag("privacy_proxy.clause_index", -1 if clause_index is None else clause_index)

            body = incoming.body
            body_error: Optional[DecodeError] = None
            if body is not None:
                body, body_error = self.redact_body(rules, headers.get("Content-Type"), body)
                headers["Content-Length"] = str(len(body))
                headers.pop("Transfer-Encoding", None)
                headers.pop("Content-Encoding", None)

            query = redact_querystring(rules, rewritten.query)

        if body_error is not None:
            log_event(
                event_type="body_decode_failed",
                message="Request body could not be decoded, forwarding an empty body",
                level=logging.WARNING,
                extra_fields={
                    "method": incoming.method,
                    "path": original_path,
                    "content_type": body_error.content_type,
                    "reason": body_error.reason,
                },
            )

        log_event(
            event_type="request_redacted",
            message="Request rewritten for upstream",
            level=logging.DEBUG,
            extra_fields={
                "method": incoming.method,
                "path": original_path,
                "clause_index": clause_index,
                "body_length": None if body is None else len(body),
            },
        )

        return OutboundRequest(
            method=incoming.method,
            url=rewritten._replace(query=query).geturl(),
            host=host,
            headers=headers,
            body=body,
            clause_index=clause_index,
            body_error=body_error,
        )
