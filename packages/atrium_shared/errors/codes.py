"""Stable machine-readable error codes.

Callers that need finer-grained handling than ``ErrorCategory`` should match on
``ErrorDetail.code`` rather than message text.
"""

INVALID_ARGUMENT = "INVALID_ARGUMENT"
RESOURCE_NOT_FOUND = "RESOURCE_NOT_FOUND"

# Backend connectivity and classification.
DEPENDENCY_TIMEOUT = "DEPENDENCY_TIMEOUT"
DEPENDENCY_UNAVAILABLE = "DEPENDENCY_UNAVAILABLE"
UNSUPPORTED_DIALECT = "UNSUPPORTED_DIALECT"

UNEXPECTED_EXCEPTION = "UNEXPECTED_EXCEPTION"
AUTO_FILL_FAILURE = "AUTO_FILL_FAILURE"
