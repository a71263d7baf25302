"""Dialect-correct SQL for "value is a member of a comma-delimited column".

Hierarchy tables store ancestor chains as text such as ``"0,100,101"``. MySQL
tests membership natively with ``find_in_set``. The other backends wrap both
the column value and the target in sentinel commas and search for the
delimited target, so ``1`` never matches inside ``12,3``.

Only ``value`` is data. ``column`` is interpolated verbatim and must come from
trusted code, never from request input.
"""

from __future__ import annotations

from sqlalchemy import Connection, TextClause, text

from packages.atrium_shared.errors import UnsupportedDialect

from .kinds import DialectKind
from .resolver import DialectResolver

_TEMPLATES: dict[DialectKind, str] = {
    DialectKind.MYSQL: "find_in_set('{value}', {column}) <> 0",
    DialectKind.SQL_SERVER: "charindex(',{value},' , ','+{column}+',') <> 0",
    DialectKind.POSTGRESQL: "(select strpos(','||{column}||',' , ',{value},')) <> 0",
    DialectKind.ORACLE: "instr(','||{column}||',' , ',{value},') <> 0",
}


def build_membership_predicate(kind: DialectKind, value: object, column: str) -> str:
    """Return the membership predicate for ``kind`` as plain SQL text.

    Examples for ``value=100`` and ``column="ancestors"``::

        mysql       find_in_set('100', ancestors) <> 0
        sqlserver   charindex(',100,' , ','+ancestors+',') <> 0
        postgresql  (select strpos(','||ancestors||',' , ',100,')) <> 0
        oracle      instr(','||ancestors||',' , ',100,') <> 0
    """
    if not isinstance(kind, DialectKind):
        raise UnsupportedDialect(f"unsupported dialect: {kind!r}", dialect=kind)
    if value is None:
        raise ValueError("membership value is required")
    return _TEMPLATES[kind].format(value=str(value), column=column)


def membership_clause(kind: DialectKind, value: object, column: str) -> TextClause:
    """Return the predicate as a ``TextClause`` for Core/ORM ``where()``."""
    predicate = build_membership_predicate(kind, value, column)
    # Colons would otherwise be parsed as bind parameters.
    return text(predicate.replace(":", r"\:"))


class MembershipPredicateBuilder:
    """Build membership predicates for whichever backend is currently routed."""

    def __init__(self, resolver: DialectResolver) -> None:
        self._resolver = resolver

    def find_in_set(
        self,
        value: object,
        column: str,
        *,
        connection: Connection | None = None,
    ) -> str:
        """Resolve the live dialect and return its membership predicate."""
        return build_membership_predicate(
            self._resolver.classify(connection), value, column
        )
