"""Protocol interfaces consumed by dialect resolution."""

from __future__ import annotations

from typing import Protocol

from sqlalchemy import Connection


class DataSource(Protocol):
    """Provider of live connections for the currently routed backend."""

    @property
    def current_name(self) -> str:
        """Name of the source ``determine_connection`` currently routes to."""

    def determine_connection(self) -> Connection:
        """Return an open connection; the caller must close it."""

    def list_known_source_names(self) -> set[str]:
        """Return the names of every configured data source."""
