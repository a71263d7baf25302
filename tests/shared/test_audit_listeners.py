"""Tests for audit auto-fill wired into SQLAlchemy ORM flushes."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Iterator

import pytest
from sqlalchemy import Column, DateTime, Engine, Integer, String, create_engine, event, select
from sqlalchemy.orm import DeclarativeBase, sessionmaker

from packages.atrium_shared.audit import (
    AuditColumnsMixin,
    AuditFieldAutoFiller,
    install_audit_listeners,
)
from packages.atrium_shared.errors import AutoFillFailure
from packages.atrium_shared.logging import clear_context, fields, get_context
from packages.atrium_shared.session import SessionContext, StaticSessionContextProvider
from resources.substrates.relational import create_session_factory, transactional_session

T0 = datetime(2024, 5, 1, 8, 0, tzinfo=UTC)
T1 = datetime(2024, 5, 2, 9, 30, tzinfo=UTC)


class _Base(DeclarativeBase):
    pass


class _Dept(AuditColumnsMixin, _Base):
    __tablename__ = "sys_dept"

    id = Column(Integer, primary_key=True)
    name = Column(String(64), nullable=False)
    ancestors = Column(String(512), nullable=False, default="0")


class _LoginLog(_Base):
    """Table without actor columns; only timestamps are filled."""

    __tablename__ = "sys_login_log"

    id = Column(Integer, primary_key=True)
    message = Column(String(128), nullable=False)
    create_time = Column(DateTime(timezone=True), nullable=True)


class _Clock:
    def __init__(self) -> None:
        self.now = T0

    def __call__(self) -> datetime:
        return self.now


@pytest.fixture()
def engine() -> Iterator[Engine]:
    engine = create_engine("sqlite://")
    _Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


def test_insert_and_update_through_transactional_session(engine: Engine) -> None:
    """Flushes fill audit fields using the session bound to the operation."""
    clock = _Clock()
    factory = create_session_factory(engine, filler=AuditFieldAutoFiller(clock=clock))
    admin = StaticSessionContextProvider(SessionContext(actor_id=1, org_unit_id=100))
    editor = StaticSessionContextProvider(SessionContext(actor_id=2, org_unit_id=200))

    with transactional_session(factory, sessions=admin) as session:
        session.add(_Dept(id=1, name="root"))

    clock.now = T1
    with transactional_session(factory, sessions=editor) as session:
        dept = session.get(_Dept, 1)
        dept.name = "headquarters"

    with transactional_session(factory) as session:
        dept = session.execute(select(_Dept)).scalar_one()

    assert dept.create_by == 1
    assert dept.create_dept == 100
    assert dept.update_by == 2
    assert dept.create_time.replace(tzinfo=UTC) == T0
    assert dept.update_time.replace(tzinfo=UTC) == T1


def test_unmodified_dirty_objects_are_not_stamped(engine: Engine) -> None:
    """Attribute sets that change nothing do not count as updates."""
    clock = _Clock()
    factory = create_session_factory(engine, filler=AuditFieldAutoFiller(clock=clock))

    with transactional_session(factory) as session:
        session.add(_Dept(id=1, name="root"))

    clock.now = T1
    with transactional_session(factory) as session:
        dept = session.get(_Dept, 1)
        dept.name = "root"

    with transactional_session(factory) as session:
        dept = session.get(_Dept, 1)
    assert dept.update_time.replace(tzinfo=UTC) == T0


def test_non_auditable_mapped_class_gets_timestamp_fallback(engine: Engine) -> None:
    """Mapped classes outside the audit contract only get timestamps."""
    factory = create_session_factory(engine, filler=AuditFieldAutoFiller(clock=lambda: T0))

    with transactional_session(factory) as session:
        session.add(_LoginLog(id=1, message="login ok"))

    with transactional_session(factory) as session:
        entry = session.get(_LoginLog, 1)
    assert entry.create_time.replace(tzinfo=UTC) == T0


def test_autofill_failure_aborts_the_write(engine: Engine) -> None:
    """A failing session lookup rolls the transaction back."""

    class _BrokenProvider:
        def current_actor_id(self) -> int:
            raise RuntimeError("token store down")

        def current_org_unit_id(self) -> int:
            raise RuntimeError("token store down")

    factory = create_session_factory(engine, filler=AuditFieldAutoFiller(clock=lambda: T0))

    with pytest.raises(AutoFillFailure):
        with transactional_session(factory, sessions=_BrokenProvider()) as session:
            session.add(_Dept(id=1, name="root"))

    with transactional_session(factory) as session:
        assert session.execute(select(_Dept)).scalars().all() == []


def test_installed_listener_can_be_removed(engine: Engine) -> None:
    """The returned listener is the registered hook."""
    factory = sessionmaker(bind=engine)
    listener = install_audit_listeners(factory, AuditFieldAutoFiller(clock=lambda: T0))
    event.remove(factory, "before_flush", listener)

    with transactional_session(factory) as session:
        session.add(_Dept(id=1, name="root"))
    with transactional_session(factory) as session:
        assert session.get(_Dept, 1).create_time is None


def test_flush_binds_acting_principal_into_log_context(engine: Engine) -> None:
    """Log lines emitted while stamping a flush name the acting principal."""
    seen: list[dict[str, str]] = []

    def _clock() -> datetime:
        seen.append(get_context())
        return T0

    clear_context()
    factory = create_session_factory(engine, filler=AuditFieldAutoFiller(clock=_clock))
    admin = StaticSessionContextProvider(SessionContext(actor_id=1, org_unit_id=100))

    with transactional_session(factory, sessions=admin) as session:
        session.add(_Dept(id=1, name="root"))

    assert seen == [{fields.ACTOR_ID: "1", fields.ORG_UNIT_ID: "100"}]
    assert get_context() == {}
