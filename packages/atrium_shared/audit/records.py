"""Audit field contract and the SQLAlchemy columns implementing it."""

from __future__ import annotations

from datetime import datetime
from typing import Protocol, runtime_checkable

from sqlalchemy import BigInteger, Column, DateTime


@runtime_checkable
class AuditableRecord(Protocol):
    """Record exposing the five audit fields maintained on every write."""

    create_time: datetime | None
    update_time: datetime | None
    create_by: int | str | None
    update_by: int | str | None
    create_dept: int | str | None


class AuditColumnsMixin:
    """Declarative mixin adding audit columns to a mapped class."""

    create_time = Column(DateTime(timezone=True), nullable=True)
    update_time = Column(DateTime(timezone=True), nullable=True)
    create_by = Column(BigInteger, nullable=True)
    update_by = Column(BigInteger, nullable=True)
    create_dept = Column(BigInteger, nullable=True)
