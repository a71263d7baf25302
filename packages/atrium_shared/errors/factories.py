"""Builder for ``ErrorDetail`` values with per-category defaults."""

from __future__ import annotations

from . import codes
from .types import ErrorCategory, ErrorDetail

# Default (code, retryable) per category.
_CATEGORY_DEFAULTS: dict[ErrorCategory, tuple[str, bool]] = {
    ErrorCategory.VALIDATION: (codes.INVALID_ARGUMENT, False),
    ErrorCategory.NOT_FOUND: (codes.RESOURCE_NOT_FOUND, False),
    ErrorCategory.DEPENDENCY: (codes.DEPENDENCY_UNAVAILABLE, True),
    ErrorCategory.INTERNAL: (codes.UNEXPECTED_EXCEPTION, False),
}


def error_detail(
    category: ErrorCategory,
    message: str,
    *,
    code: str | None = None,
    retryable: bool | None = None,
    **metadata: object,
) -> ErrorDetail:
    """Build an ``ErrorDetail``, taking unset code and retryability from ``category``.

    Metadata values are stringified and ``None`` values are dropped, so callers
    can pass optional context such as a data source name unconditionally.
    """
    default_code, default_retryable = _CATEGORY_DEFAULTS[category]
    return ErrorDetail(
        code=code or default_code,
        message=message,
        category=category,
        retryable=default_retryable if retryable is None else retryable,
        metadata={key: str(value) for key, value in metadata.items() if value is not None},
    )
