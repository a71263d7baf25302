"""Public logging API for the Atrium data-access layer.

This package wraps Python's ``logging`` module with stdout defaults and
structured context propagation.
"""

from . import fields
from .config import (
    ContextFilter,
    JsonFormatter,
    PlainFormatter,
    configure_logging,
    configure_logging_from_settings,
    get_logger,
)
from .context import bind_context, clear_context, get_context, log_context, reset_context

__all__ = [
    "ContextFilter",
    "JsonFormatter",
    "PlainFormatter",
    "bind_context",
    "clear_context",
    "configure_logging",
    "configure_logging_from_settings",
    "fields",
    "get_context",
    "get_logger",
    "log_context",
    "reset_context",
]
