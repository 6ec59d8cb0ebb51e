"""Common utilities and exceptions."""

from libs.common.exceptions import ConfigurationError, FanoutPlatformError

__all__ = [
    "FanoutPlatformError",
    "ConfigurationError",
]
