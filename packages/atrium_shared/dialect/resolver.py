"""Runtime classification of the backend behind a logical connection."""

from __future__ import annotations

from sqlalchemy import Connection
from sqlalchemy.exc import SQLAlchemyError

from packages.atrium_shared.errors import BackendUnavailable
from packages.atrium_shared.logging import fields, get_logger, log_context

from .interfaces import DataSource
from .kinds import DialectKind

_LOGGER = get_logger(__name__)


class DialectResolver:
    """Classify connections into a ``DialectKind`` from live metadata.

    Nothing is cached: with dynamically routed data sources the backend can
    differ between calls, so every call re-reads the connection in use.
    """

    def __init__(self, data_source: DataSource) -> None:
        self._data_source = data_source

    def classify(self, connection: Connection | None = None) -> DialectKind:
        """Return the dialect of ``connection`` or of a freshly borrowed one.

        A supplied connection is inspected and left open. Otherwise one is
        borrowed from the data source and released before returning, including
        when classification fails.
        """
        if connection is not None:
            return _classify_live(connection)

        source_name = self._data_source.current_name
        try:
            borrowed = self._data_source.determine_connection()
        except SQLAlchemyError as exc:
            _LOGGER.warning(
                "Dialect classification could not acquire a connection",
                extra={
                    fields.DATA_SOURCE: source_name,
                    fields.EXCEPTION_TYPE: type(exc).__name__,
                },
            )
            raise BackendUnavailable(
                f"unable to acquire connection: {exc}", data_source=source_name
            ) from exc

        with borrowed, log_context({fields.DATA_SOURCE: source_name}):
            return _classify_live(borrowed, data_source=source_name)

    def is_mysql(self) -> bool:
        return self.classify() is DialectKind.MYSQL

    def is_oracle(self) -> bool:
        return self.classify() is DialectKind.ORACLE

    def is_postgres(self) -> bool:
        return self.classify() is DialectKind.POSTGRESQL

    def is_sql_server(self) -> bool:
        return self.classify() is DialectKind.SQL_SERVER

    def list_data_source_names(self) -> list[str]:
        """Return configured data source names in stable order."""
        return sorted(self._data_source.list_known_source_names())


def _classify_live(connection: Connection, *, data_source: str | None = None) -> DialectKind:
    """Read the product name from an open connection and classify it."""
    if connection.closed or connection.invalidated:
        raise BackendUnavailable("connection is closed or invalidated", data_source=data_source)
    try:
        product_name = connection.dialect.name
    except SQLAlchemyError as exc:
        raise BackendUnavailable(
            f"unable to read connection metadata: {exc}", data_source=data_source
        ) from exc

    kind = DialectKind.from_product_name(product_name)
    _LOGGER.debug(
        "Classified connection dialect",
        extra={fields.PRODUCT_NAME: product_name, fields.DIALECT: kind.value},
    )
    return kind
