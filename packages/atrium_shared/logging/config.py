"""Stdout logging setup with structured data-access fields.

Every record carries a ``context`` mapping: the task-bound log context merged
with any ``fields.RECORD_FIELDS`` passed through ``extra=``. The JSON formatter
emits it as top-level keys; the plain formatter appends it as ``key=value``.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

from . import fields
from .context import bind_context, get_context

if TYPE_CHECKING:
    from packages.atrium_shared.config import LoggingSettings


class ContextFilter(logging.Filter):
    """Attach the structured context to each record."""

    def filter(self, record: logging.LogRecord) -> bool:
        context = get_context()
        for name in fields.RECORD_FIELDS:
            value = getattr(record, name, None)
            if value is not None:
                context[name] = str(value)
        record.context = context
        return True


def _context_of(record: logging.LogRecord) -> dict[str, str]:
    context = getattr(record, "context", None)
    return context if isinstance(context, dict) else {}


class JsonFormatter(logging.Formatter):
    """One JSON object per line; context keys never override the core fields."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = dict(_context_of(record))
        payload.update(
            {
                fields.TIMESTAMP: datetime.fromtimestamp(record.created, UTC).isoformat(),
                fields.LEVEL: record.levelname,
                fields.LOGGER: record.name,
                fields.MESSAGE: record.getMessage(),
            }
        )
        if record.exc_info:
            payload[fields.EXCEPTION] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str, separators=(",", ":"))


class PlainFormatter(logging.Formatter):
    """Human-readable line with sorted ``key=value`` context appended."""

    def __init__(self) -> None:
        super().__init__(
            fmt="%(asctime)s %(levelname)s %(name)s %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S%z",
        )

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        context = _context_of(record)
        if not context:
            return message
        return message + " " + " ".join(f"{key}={context[key]}" for key in sorted(context))


def configure_logging(
    *,
    level: str = "INFO",
    json_output: bool = True,
    service: str | None = None,
    environment: str | None = None,
) -> None:
    """Install a single stdout handler on the root logger.

    Existing root handlers are replaced, so repeated calls do not duplicate
    output. ``service`` and ``environment`` are bound into the log context.
    """
    handler = logging.StreamHandler(stream=sys.stdout)
    handler.addFilter(ContextFilter())
    handler.setFormatter(JsonFormatter() if json_output else PlainFormatter())

    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(level.upper())

    bind_context(**{fields.SERVICE: service, fields.ENVIRONMENT: environment})


def configure_logging_from_settings(settings: "LoggingSettings") -> None:
    """Apply the ``logging`` subtree of ``AtriumSettings``."""
    configure_logging(
        level=settings.level,
        json_output=settings.json_output,
        service=settings.service,
        environment=settings.environment,
    )


def get_logger(name: str | None = None) -> logging.Logger:
    return logging.getLogger(name)
