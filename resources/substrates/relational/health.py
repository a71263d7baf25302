"""Health-check utilities for relational data sources."""

from __future__ import annotations

from sqlalchemy import Engine, text

from packages.atrium_shared.dialect import DialectKind
from packages.atrium_shared.logging import fields, get_logger

_LOGGER = get_logger(__name__)


def probe_statement(kind: DialectKind | None) -> str:
    """Return the trivial query every backend of ``kind`` can answer."""
    if kind is DialectKind.ORACLE:
        return "SELECT 1 FROM DUAL"
    return "SELECT 1"


def ping(engine: Engine, *, kind: DialectKind | None = None) -> bool:
    """Return True when the database answers a trivial query."""
    try:
        with engine.connect() as conn:
            conn.execute(text(probe_statement(kind)))
        return True
    except Exception as exc:  # noqa: BLE001
        _LOGGER.warning(
            "Data source ping failed",
            extra={
                fields.DIALECT: None if kind is None else kind.value,
                fields.EXCEPTION_TYPE: type(exc).__name__,
            },
        )
        return False
