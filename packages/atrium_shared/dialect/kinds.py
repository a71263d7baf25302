"""Supported relational backend families."""

from __future__ import annotations

from enum import Enum

from packages.atrium_shared.errors import UnsupportedDialect


class DialectKind(str, Enum):
    """Closed set of backend families the data-access layer emits SQL for."""

    MYSQL = "mysql"
    ORACLE = "oracle"
    POSTGRESQL = "postgresql"
    SQL_SERVER = "sqlserver"

    @classmethod
    def from_product_name(cls, product_name: str) -> "DialectKind":
        """Classify a driver product name or SQLAlchemy dialect name.

        Raises ``UnsupportedDialect`` for anything outside the enumeration;
        there is no default family.
        """
        normalized = " ".join(str(product_name).split()).lower()
        kind = _PRODUCT_NAMES.get(normalized)
        if kind is None:
            raise UnsupportedDialect(
                f"unsupported database product: {product_name!r}",
                dialect=product_name,
            )
        return kind


_PRODUCT_NAMES: dict[str, DialectKind] = {
    # SQLAlchemy dialect names.
    "mysql": DialectKind.MYSQL,
    "mariadb": DialectKind.MYSQL,
    "oracle": DialectKind.ORACLE,
    "postgresql": DialectKind.POSTGRESQL,
    "mssql": DialectKind.SQL_SERVER,
    # Driver-reported product names.
    "postgres": DialectKind.POSTGRESQL,
    "microsoft sql server": DialectKind.SQL_SERVER,
    "sql server": DialectKind.SQL_SERVER,
}
