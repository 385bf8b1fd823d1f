# # TELEMETRY PUBLIC API
# # Structured event logging shared by the director, the API layer and the CLI

from .logging.log_collector import (
    JsonFormatter,
    log_event,
    configure_event_logger,
)

__all__ = [
    "JsonFormatter",
    "log_event",
    "configure_event_logger",
]
