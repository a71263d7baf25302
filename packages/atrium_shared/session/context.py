"""Acting-principal context consumed by audit field auto-fill.

Authentication lives elsewhere; this module only describes who is acting for
the current operation. A provider reporting ``None`` means no session is
active, which is a normal state for system jobs.
"""

from __future__ import annotations

from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass
from typing import Iterator, Protocol, runtime_checkable


@dataclass(frozen=True)
class SessionContext:
    """Identity of the acting principal and their organizational unit."""

    actor_id: int | str
    org_unit_id: int | str | None = None


@runtime_checkable
class SessionContextProvider(Protocol):
    """Source of the current actor; raises only on infrastructure failure."""

    def current_actor_id(self) -> int | str | None:
        """Return the acting principal id, or ``None`` when no session exists."""

    def current_org_unit_id(self) -> int | str | None:
        """Return the acting principal's org-unit id, or ``None``."""


class StaticSessionContextProvider:
    """Provider over one explicit context value for a single operation."""

    def __init__(self, context: SessionContext | None = None) -> None:
        self._context = context

    def current_actor_id(self) -> int | str | None:
        return None if self._context is None else self._context.actor_id

    def current_org_unit_id(self) -> int | str | None:
        return None if self._context is None else self._context.org_unit_id


class ContextVarSessionContextProvider:
    """Provider scoped to the calling thread or task via ``contextvars``.

    Each provider instance owns its own variable, so concurrent operations
    bound in different threads or tasks never observe one another's context.
    """

    def __init__(self, name: str = "atrium_session_context") -> None:
        self._current: ContextVar[SessionContext | None] = ContextVar(name, default=None)

    def current_actor_id(self) -> int | str | None:
        context = self._current.get()
        return None if context is None else context.actor_id

    def current_org_unit_id(self) -> int | str | None:
        context = self._current.get()
        return None if context is None else context.org_unit_id

    @contextmanager
    def bind(self, context: SessionContext | None) -> Iterator[None]:
        """Make ``context`` current for the duration of a block."""
        token = self._current.set(context)
        try:
            yield
        finally:
            self._current.reset(token)
