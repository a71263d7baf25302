"""Relational substrate primitives shared by Atrium persistence code."""

from resources.substrates.relational.engine import create_datasource_engine
from resources.substrates.relational.health import ping, probe_statement
from resources.substrates.relational.routing import RoutingDataSource
from resources.substrates.relational.session import (
    create_session_factory,
    transactional_session,
)

__all__ = [
    "RoutingDataSource",
    "create_datasource_engine",
    "create_session_factory",
    "ping",
    "probe_statement",
    "transactional_session",
]
