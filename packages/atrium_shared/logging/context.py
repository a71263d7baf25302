"""Per-task structured logging context.

Bound values ride along on every record emitted from the same thread or
asyncio task. Data source routing binds the active source name and the audit
flush hook binds the acting principal.
"""

from __future__ import annotations

from contextlib import contextmanager
from contextvars import ContextVar, Token
from types import MappingProxyType
from typing import Iterator, Mapping

_EMPTY: Mapping[str, str] = MappingProxyType({})
_LOG_CONTEXT: ContextVar[Mapping[str, str]] = ContextVar("atrium_log_context", default=_EMPTY)


def get_context() -> dict[str, str]:
    """Return a copy of the context bound to the current task."""
    return dict(_LOG_CONTEXT.get())


def bind_context(**values: object) -> Token[Mapping[str, str]]:
    """Merge ``values`` into the current context and return the reset token.

    Values are stringified; ``None`` values are skipped rather than erasing an
    outer binding.
    """
    merged = dict(_LOG_CONTEXT.get())
    merged.update({key: str(value) for key, value in values.items() if value is not None})
    return _LOG_CONTEXT.set(MappingProxyType(merged))


def reset_context(token: Token[Mapping[str, str]]) -> None:
    """Restore the context that was current before ``bind_context``."""
    _LOG_CONTEXT.reset(token)


def clear_context() -> None:
    _LOG_CONTEXT.set(_EMPTY)


@contextmanager
def log_context(values: Mapping[str, object]) -> Iterator[None]:
    """Bind ``values`` for the duration of a block."""
    token = bind_context(**values)
    try:
        yield
    finally:
        reset_context(token)
