"""
stl2mitl Utilities Module

Provides logging and helper functions.
"""

from .helpers import TimeInterval, round_time
from .logging import (
    ColoredFormatter,
    ConverterLogger,
    JSONFormatter,
    LogContext,
    LogLevel,
    configure_logging,
    get_logger,
)

__all__ = [
    # Logging
    "ConverterLogger",
    "LogLevel",
    "LogContext",
    "JSONFormatter",
    "ColoredFormatter",
    "get_logger",
    "configure_logging",
    # Helpers
    "TimeInterval",
    "round_time",
]
