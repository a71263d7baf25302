"""Map arbitrary exceptions onto the shared ``ErrorDetail`` shape."""

from __future__ import annotations

from sqlalchemy.exc import DisconnectionError, OperationalError

from . import codes
from .exceptions import AtriumError
from .factories import error_detail
from .types import ErrorCategory, ErrorDetail

# First match wins; order subclasses before their bases.
_EXCEPTION_MAP: tuple[tuple[type[BaseException], ErrorCategory, str, str], ...] = (
    (OperationalError, ErrorCategory.DEPENDENCY, codes.DEPENDENCY_UNAVAILABLE, "database unavailable"),
    (DisconnectionError, ErrorCategory.DEPENDENCY, codes.DEPENDENCY_UNAVAILABLE, "database disconnected"),
    (TimeoutError, ErrorCategory.DEPENDENCY, codes.DEPENDENCY_TIMEOUT, "dependency timeout"),
    (ConnectionError, ErrorCategory.DEPENDENCY, codes.DEPENDENCY_UNAVAILABLE, "dependency unavailable"),
    (ValueError, ErrorCategory.VALIDATION, codes.INVALID_ARGUMENT, "invalid argument"),
    (KeyError, ErrorCategory.NOT_FOUND, codes.RESOURCE_NOT_FOUND, "resource not found"),
)


def exception_to_error(exc: Exception) -> ErrorDetail:
    """Return the ``ErrorDetail`` describing ``exc``.

    Data-layer exceptions already carry their detail. Driver connectivity
    errors and builtin exceptions are mapped by type; anything else is an
    internal error.
    """
    if isinstance(exc, AtriumError):
        return exc.detail

    for exc_type, category, code, fallback in _EXCEPTION_MAP:
        if isinstance(exc, exc_type):
            return error_detail(
                category, str(exc) or fallback, code=code, exception_type=type(exc).__name__
            )
    return error_detail(
        ErrorCategory.INTERNAL,
        str(exc) or "unexpected exception",
        exception_type=type(exc).__name__,
    )
