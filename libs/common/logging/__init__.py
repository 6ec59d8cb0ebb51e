"""Structured logging for the fan-out gateway.

JSON output with trace ID support, so the inbound request and every
downstream call it fans out to can be correlated in the logs.

Usage:
    # At service startup
    from libs.common.logging import configure_logging
    configure_logging(service_name="fanout-gateway", log_level="INFO")

    # Anywhere else
    import logging
    from libs.common.logging import log_with_context
    logger = logging.getLogger(__name__)
    log_with_context(logger, "INFO", "Dispatching calls", resources=["api/2", "api/3"])
"""

from libs.common.logging.config import (
    configure_logging,
    log_with_context,
)
from libs.common.logging.context import (
    TRACE_ID_HEADER,
    clear_trace_id,
    generate_trace_id,
    get_trace_id,
    set_trace_id,
)
from libs.common.logging.formatter import JSONFormatter

__all__ = [
    # Configuration
    "configure_logging",
    "log_with_context",
    # Trace ID management
    "generate_trace_id",
    "get_trace_id",
    "set_trace_id",
    "clear_trace_id",
    "TRACE_ID_HEADER",
    # Formatter
    "JSONFormatter",
]
