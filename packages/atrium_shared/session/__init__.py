"""Public session-context API for audit consumers."""

from .context import (
    ContextVarSessionContextProvider,
    SessionContext,
    SessionContextProvider,
    StaticSessionContextProvider,
)

__all__ = [
    "ContextVarSessionContextProvider",
    "SessionContext",
    "SessionContextProvider",
    "StaticSessionContextProvider",
]
