from __future__ import annotations

import json
import logging
from typing import Any, Dict, Optional, Union

from ddtrace import tracer


_EVENT_LOGGER_NAME = "privacy_proxy.events"


class JsonFormatter(logging.Formatter):
    # # Formatter that emits one JSON object per line for Datadog log ingestion
    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        event = getattr(record, "event", None)
        if isinstance(event, dict):
            payload.update(event)
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False, default=str)


def configure_event_logger(level: Union[int, str] = logging.INFO) -> logging.Logger:
    # # Configure the JSON event logger if not already configured
    logger = logging.getLogger(_EVENT_LOGGER_NAME)
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    if logger.handlers:
        logger.setLevel(level)
        return logger

    handler = logging.StreamHandler()
    handler.setFormatter(JsonFormatter())
    logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False
    return logger


def _current_trace_context() -> Dict[str, Any]:
    # # Extract current trace and span identifiers for log correlation
    span = tracer.current_span()
    if span is None:
        return {}
    context: Dict[str, Any] = {}
    trace_id = getattr(span, "trace_id", None)
    span_id = getattr(span, "span_id", None)
    if trace_id is not None:
        context["dd.trace_id"] = int(trace_id)
    if span_id is not None:
        context["dd.span_id"] = int(span_id)
    return context


def log_event(
    event_type: str,
    message: str,
    level: int = logging.INFO,
    extra_fields: Optional[Dict[str, Any]] = None,
) -> None:
    # # Emit a structured event with Datadog trace correlation; callers never pass payload values
    logger = logging.getLogger(_EVENT_LOGGER_NAME)
    if not logger.handlers:
        logger = configure_event_logger()

    payload: Dict[str, Any] = {
        "event_type": event_type,
    }
    payload.update(_current_trace_context())
    if extra_fields:
        payload.update(extra_fields)

    logger.log(level, message, extra={"event": payload})
