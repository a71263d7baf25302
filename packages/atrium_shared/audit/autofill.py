"""Automatic audit field population for inserts and updates.

The persistence layer calls ``on_insert``/``on_update`` right before a write is
dispatched. The acting principal is passed in explicitly for each call; a
missing provider, or one reporting no actor, leaves identity fields alone so
unauthenticated system jobs can still write.
"""

from __future__ import annotations

from collections.abc import Callable, MutableMapping
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

from packages.atrium_shared.errors import AutoFillFailure
from packages.atrium_shared.logging import fields, get_logger
from packages.atrium_shared.session import SessionContextProvider

from .records import AuditableRecord

if TYPE_CHECKING:
    from packages.atrium_shared.config import AtriumSettings

_LOGGER = get_logger(__name__)

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    """Return the current timezone-aware UTC instant."""
    return datetime.now(UTC)


class AuditFieldAutoFiller:
    """Fill audit timestamps and actor identifiers on in-flight records."""

    def __init__(
        self,
        *,
        clock: Clock | None = None,
        create_time_field: str = "create_time",
        update_time_field: str = "update_time",
    ) -> None:
        self._clock = clock or utc_now
        self._create_time_field = create_time_field
        self._update_time_field = update_time_field

    @classmethod
    def from_settings(
        cls, settings: "AtriumSettings", *, clock: Clock | None = None
    ) -> "AuditFieldAutoFiller":
        """Build a filler using the configured fallback field names."""
        return cls(
            clock=clock,
            create_time_field=settings.audit.create_time_field,
            update_time_field=settings.audit.update_time_field,
        )

    def on_insert(
        self, record: Any, sessions: SessionContextProvider | None = None
    ) -> None:
        """Populate creation and update audit fields before an insert.

        Raises:
            AutoFillFailure: on any unexpected error; the insert must abort.
        """
        try:
            if isinstance(record, AuditableRecord):
                self._fill_insert(record, sessions)
            else:
                now = self._clock()
                _strict_fill(record, self._create_time_field, now)
                _strict_fill(record, self._update_time_field, now)
        except AutoFillFailure:
            raise
        except Exception as exc:
            raise self._failure("insert", record, exc) from exc

    def on_update(
        self, record: Any, sessions: SessionContextProvider | None = None
    ) -> None:
        """Refresh update audit fields before an update.

        Creator fields are never touched here.

        Raises:
            AutoFillFailure: on any unexpected error; the update must abort.
        """
        try:
            if isinstance(record, AuditableRecord):
                record.update_time = self._clock()
                actor_id = None if sessions is None else sessions.current_actor_id()
                if actor_id is not None:
                    record.update_by = actor_id
            else:
                _strict_fill(record, self._update_time_field, self._clock())
        except AutoFillFailure:
            raise
        except Exception as exc:
            raise self._failure("update", record, exc) from exc

    def _fill_insert(
        self, record: AuditableRecord, sessions: SessionContextProvider | None
    ) -> None:
        now = self._clock()
        if record.create_time is None:
            record.create_time = now
        record.update_time = now

        if record.create_by is not None:
            return
        actor_id = None if sessions is None else sessions.current_actor_id()
        if actor_id is None:
            _LOGGER.debug(
                "Audit actor fields left unset: no active session",
                extra={fields.RECORD_TYPE: type(record).__name__},
            )
            return

        record.create_by = actor_id
        record.update_by = actor_id
        if record.create_dept is None:
            record.create_dept = sessions.current_org_unit_id()
        _LOGGER.debug(
            "Audit actor fields filled",
            extra={
                fields.RECORD_TYPE: type(record).__name__,
                fields.ACTOR_ID: actor_id,
                fields.ORG_UNIT_ID: record.create_dept,
            },
        )

    def _failure(self, operation: str, record: Any, exc: Exception) -> AutoFillFailure:
        _LOGGER.error(
            "Audit auto-fill failed",
            exc_info=exc,
            extra={
                fields.OPERATION: operation,
                fields.RECORD_TYPE: type(record).__name__,
                fields.EXCEPTION_TYPE: type(exc).__name__,
            },
        )
        return AutoFillFailure(
            f"audit auto-fill failed on {operation}: {exc}", cause=exc
        )


def _strict_fill(record: Any, field_name: str, value: object) -> None:
    """Set ``field_name`` only when the record has it and it is empty."""
    if isinstance(record, MutableMapping):
        if field_name in record and record[field_name] is None:
            record[field_name] = value
        return
    if getattr(record, field_name, value) is None:
        setattr(record, field_name, value)
