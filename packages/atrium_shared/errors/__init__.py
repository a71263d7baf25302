"""Public shared error API for the Atrium data-access layer."""

from . import codes
from .exceptions import AtriumError, AutoFillFailure, BackendUnavailable, UnsupportedDialect
from .factories import error_detail
from .normalize import exception_to_error
from .types import ErrorCategory, ErrorDetail

__all__ = [
    "AtriumError",
    "AutoFillFailure",
    "BackendUnavailable",
    "ErrorCategory",
    "ErrorDetail",
    "UnsupportedDialect",
    "codes",
    "error_detail",
    "exception_to_error",
]
