"""SQLAlchemy wiring that runs audit auto-fill on every ORM flush."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from sqlalchemy import event
from sqlalchemy.orm import Session, sessionmaker

from packages.atrium_shared.errors import AutoFillFailure
from packages.atrium_shared.logging import fields, log_context
from packages.atrium_shared.session import SessionContextProvider

from .autofill import AuditFieldAutoFiller

SESSION_CONTEXT_KEY = "atrium.session_context"


def bind_session_context(
    session: Session, sessions: SessionContextProvider | None
) -> None:
    """Attach the acting-principal provider used by this session's flushes."""
    session.info[SESSION_CONTEXT_KEY] = sessions


def session_context_of(session: Session) -> SessionContextProvider | None:
    """Return the provider bound to ``session``, if any."""
    return session.info.get(SESSION_CONTEXT_KEY)


def install_audit_listeners(
    target: type[Session] | sessionmaker[Session] | Session,
    filler: AuditFieldAutoFiller,
) -> Callable[..., None]:
    """Register a ``before_flush`` hook applying ``filler`` to pending writes.

    Returns the registered listener so callers can ``event.remove`` it. An
    ``AutoFillFailure`` raised by the filler aborts the flush.
    """

    def _before_flush(session: Session, flush_context: Any, instances: Any) -> None:
        del flush_context, instances
        sessions = session_context_of(session)
        try:
            principal = _principal_fields(sessions)
        except Exception as exc:
            raise AutoFillFailure(f"unable to read session context: {exc}", cause=exc) from exc
        with log_context(principal):
            for record in list(session.new):
                filler.on_insert(record, sessions)
            for record in list(session.dirty):
                if session.is_modified(record, include_collections=False):
                    filler.on_update(record, sessions)

    event.listen(target, "before_flush", _before_flush)
    return _before_flush


def _principal_fields(sessions: SessionContextProvider | None) -> dict[str, object]:
    """Log context naming the principal a flush is stamped with."""
    if sessions is None:
        return {}
    return {
        fields.ACTOR_ID: sessions.current_actor_id(),
        fields.ORG_UNIT_ID: sessions.current_org_unit_id(),
    }
