"""Logging setup shared by every service entrypoint.

configure_logging() installs a single stdout handler with the JSON formatter
and the trace ID filter on the root logger. Library modules never configure
logging themselves; they only call logging.getLogger(__name__).
"""

import logging
import sys

from libs.common.logging.context import get_trace_id
from libs.common.logging.formatter import JSONFormatter


class TraceIDFilter(logging.Filter):
    """Stamp the current trace ID onto every record passing the handler."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.trace_id = get_trace_id()
        return True


def configure_logging(
    service_name: str,
    log_level: str = "INFO",
    include_context: bool = True,
) -> logging.Logger:
    """Configure structured JSON logging for a service.

    Call once at service startup. Existing root handlers are replaced so that
    repeated calls (e.g. uvicorn reloads) do not duplicate output.

    Args:
        service_name: Name of the service (e.g., "fanout-gateway")
        log_level: Minimum log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        include_context: Whether to include the context dict in output

    Returns:
        Configured root logger instance

    Raises:
        ValueError: If log_level is invalid
    """
    numeric_level = getattr(logging, log_level.upper(), None)
    if not isinstance(numeric_level, int):
        raise ValueError(f"Invalid log level: {log_level}")

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)
    root_logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(numeric_level)
    handler.setFormatter(JSONFormatter(service_name=service_name, include_context=include_context))
    handler.addFilter(TraceIDFilter())

    root_logger.addHandler(handler)

    return root_logger


def log_with_context(
    logger: logging.Logger,
    level: str,
    message: str,
    **context_fields: object,
) -> None:
    """Log a message with additional context fields.

    Context fields appear under the "context" key of the JSON output.

    Example:
        >>> log_with_context(
        ...     logger,
        ...     "WARNING",
        ...     "Deadline fired",
        ...     operation="get_api1",
        ...     deadline_ms=900,
        ... )
    """
    log_method = getattr(logger, level.lower())
    log_method(message, extra={"context": context_fields})
