"""Session lifecycle helpers for audited relational access."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy import Engine
from sqlalchemy.orm import Session, sessionmaker

from packages.atrium_shared.audit import (
    AuditFieldAutoFiller,
    bind_session_context,
    install_audit_listeners,
)
from packages.atrium_shared.session import SessionContextProvider


def create_session_factory(
    engine: Engine, *, filler: AuditFieldAutoFiller | None = None
) -> sessionmaker[Session]:
    """Create a session factory, optionally running audit auto-fill on flush."""
    factory = sessionmaker(
        bind=engine, autoflush=False, expire_on_commit=False
    )
    if filler is not None:
        install_audit_listeners(factory, filler)
    return factory


@contextmanager
def transactional_session(
    session_factory: sessionmaker[Session],
    *,
    sessions: SessionContextProvider | None = None,
) -> Iterator[Session]:
    """Yield a session bound to ``sessions`` and enforce commit/rollback."""
    session = session_factory()
    bind_session_context(session, sessions)
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
