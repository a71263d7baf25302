"""Named data sources with per-context routing of the current source.

Callers switch the active source for a block with ``use(name)``. The current
name lives in a ``ContextVar``, so each thread or task routes independently.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from contextvars import ContextVar

from sqlalchemy import Connection, Engine

from packages.atrium_shared.config import AtriumSettings
from packages.atrium_shared.logging import fields, get_logger, log_context
from resources.substrates.relational.engine import create_datasource_engine

_LOGGER = get_logger(__name__)


class RoutingDataSource:
    """Data source that routes connections to one of several named engines."""

    def __init__(
        self,
        engines: Mapping[str, Engine],
        *,
        primary: str,
        strict: bool = False,
    ) -> None:
        if primary not in engines:
            raise ValueError(f"primary data source {primary!r} is not configured")
        self._engines = dict(engines)
        self._primary = primary
        self._strict = strict
        self._current: ContextVar[str | None] = ContextVar(
            f"atrium_datasource_{id(self)}", default=None
        )

    @classmethod
    def from_settings(cls, settings: AtriumSettings) -> "RoutingDataSource":
        """Build one engine per configured source."""
        datasource = settings.datasource
        if not datasource.sources:
            raise ValueError("datasource.sources must configure at least one source")
        engines = {
            name: create_datasource_engine(source)
            for name, source in datasource.sources.items()
        }
        return cls(engines, primary=datasource.primary, strict=datasource.strict)

    @property
    def primary(self) -> str:
        return self._primary

    @property
    def current_name(self) -> str:
        """Return the routed source name, falling back to the primary."""
        name = self._current.get()
        if name is None:
            return self._primary
        if name in self._engines:
            return name
        if self._strict:
            raise KeyError(f"unknown data source: {name!r}")
        return self._primary

    @contextmanager
    def use(self, name: str) -> Iterator[None]:
        """Route connections to ``name`` for the duration of a block."""
        if self._strict and name not in self._engines:
            raise KeyError(f"unknown data source: {name!r}")
        token = self._current.set(name)
        try:
            with log_context({fields.DATA_SOURCE: self.current_name}):
                _LOGGER.debug("Switched data source")
                yield
        finally:
            self._current.reset(token)

    def determine_engine(self) -> Engine:
        return self._engines[self.current_name]

    def determine_connection(self) -> Connection:
        """Open a connection on the routed engine; the caller must close it."""
        return self.determine_engine().connect()

    def list_known_source_names(self) -> set[str]:
        return set(self._engines)

    def dispose(self) -> None:
        """Dispose every engine's connection pool."""
        for engine in self._engines.values():
            engine.dispose()
