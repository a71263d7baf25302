"""Public API for shared Atrium configuration utilities."""

from .loader import load_settings
from .models import (
    DEFAULT_CONFIG_PATH,
    AtriumSettings,
    AuditSettings,
    DataSourceSettings,
    DataSourcesSettings,
    LoggingSettings,
    SerializationSettings,
)

__all__ = [
    "DEFAULT_CONFIG_PATH",
    "AtriumSettings",
    "AuditSettings",
    "DataSourceSettings",
    "DataSourcesSettings",
    "LoggingSettings",
    "SerializationSettings",
    "load_settings",
]
