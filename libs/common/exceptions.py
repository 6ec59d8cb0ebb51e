"""
Exception hierarchy for the fan-out gateway.

Per-call failures are never raised: they travel as ``CallOutcome`` values.
Exceptions are reserved for misconfiguration and programming errors, which the
orchestration boundary converts into a generic failure.
"""


class FanoutPlatformError(Exception):
    """
    Base exception for all fan-out gateway errors.

    Example:
        >>> try:
        ...     new_bounded_context(0)
        ... except FanoutPlatformError as e:
        ...     logger.error(f"Platform error: {e}")
    """

    pass


class ConfigurationError(FanoutPlatformError):
    """
    Raised when a required setting is missing or out of range.

    Example:
        >>> if duration_ms <= 0:
        ...     raise ConfigurationError(f"Deadline must be positive, got {duration_ms}")
    """

    pass
