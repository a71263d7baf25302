"""Exception types raised by the dialect, audit and data source layers.

Each exception carries an ``ErrorDetail`` so the persistence layer can decide
presentation without string matching.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from . import codes
from .factories import error_detail
from .types import ErrorCategory, ErrorDetail


@dataclass(eq=False)
class AtriumError(Exception):
    """Base error type for data-access support failures."""

    message: str
    detail: ErrorDetail = field(repr=False)

    def __str__(self) -> str:
        """Return human-readable error message."""
        return self.message


class BackendUnavailable(AtriumError):
    """Connection acquisition or metadata retrieval failed."""

    def __init__(self, message: str, *, data_source: str | None = None) -> None:
        super().__init__(
            message=message,
            detail=error_detail(ErrorCategory.DEPENDENCY, message, data_source=data_source),
        )


class UnsupportedDialect(AtriumError):
    """A backend or dialect value falls outside the supported enumeration."""

    def __init__(self, message: str, *, dialect: object = None) -> None:
        super().__init__(
            message=message,
            detail=error_detail(
                ErrorCategory.DEPENDENCY,
                message,
                code=codes.UNSUPPORTED_DIALECT,
                retryable=False,
                dialect=dialect,
            ),
        )


class AutoFillFailure(AtriumError):
    """Audit field augmentation failed; the triggering write must abort."""

    def __init__(self, message: str, *, cause: BaseException) -> None:
        super().__init__(
            message=message,
            detail=error_detail(
                ErrorCategory.INTERNAL,
                message,
                code=codes.AUTO_FILL_FAILURE,
                exception_type=type(cause).__name__,
            ),
        )
        self.cause = cause
