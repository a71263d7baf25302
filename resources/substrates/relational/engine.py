"""SQLAlchemy engine construction for configured relational data sources."""

from __future__ import annotations

from typing import Any

from sqlalchemy import Engine, create_engine, make_url

from packages.atrium_shared.config import DataSourceSettings

# SQLite uses non-queue pools that reject sizing arguments.
_UNPOOLED_BACKENDS = frozenset({"sqlite"})


def create_datasource_engine(settings: DataSourceSettings) -> Engine:
    """Construct a configured SQLAlchemy engine for one data source."""
    kwargs: dict[str, Any] = {
        "pool_pre_ping": settings.pool_pre_ping,
        "connect_args": dict(settings.connect_args),
    }
    if make_url(settings.url).get_backend_name() not in _UNPOOLED_BACKENDS:
        kwargs.update(
            pool_size=settings.pool_size,
            max_overflow=settings.max_overflow,
            pool_timeout=settings.pool_timeout_seconds,
        )
    return create_engine(settings.url, **kwargs)
