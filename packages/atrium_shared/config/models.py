"""Typed configuration models for Atrium data-access settings."""

from __future__ import annotations

from contextvars import ContextVar
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Literal, Mapping

from pydantic import BaseModel, Field, field_validator, model_validator
from pydantic.fields import FieldInfo
from pydantic_settings import (
    BaseSettings,
    JsonConfigSettingsSource,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

from packages.atrium_shared.serialization.safe_integer import (
    MAX_SAFE_INTEGER,
    MIN_SAFE_INTEGER,
)

DEFAULT_CONFIG_PATH = Path.home() / ".config" / "atrium" / "atrium.yaml"
ENV_PREFIX = "ATRIUM_"
ENV_NESTED_DELIMITER = "__"
YAML_SUFFIXES = frozenset({".yml", ".yaml"})
JSON_SUFFIXES = frozenset({".json"})


class LoggingSettings(BaseModel):
    """Structured logging configuration."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    json_output: bool = True
    service: str = "atrium"
    environment: str = "dev"


class DataSourceSettings(BaseModel):
    """Connection and pool settings for one named relational data source."""

    url: str
    pool_size: int = Field(default=5, gt=0)
    max_overflow: int = Field(default=10, ge=0)
    pool_timeout_seconds: float = Field(default=30.0, gt=0)
    pool_pre_ping: bool = True
    connect_args: dict[str, Any] = Field(default_factory=dict)

    @field_validator("url")
    @classmethod
    def _require_url(cls, value: str) -> str:
        """Reject blank connection URLs."""
        stripped = value.strip()
        if not stripped:
            raise ValueError("datasource url is required")
        return stripped


class DataSourcesSettings(BaseModel):
    """Named data sources plus the routing defaults applied across them."""

    primary: str = "master"
    strict: bool = False
    sources: dict[str, DataSourceSettings] = Field(default_factory=dict)

    @model_validator(mode="after")
    def _primary_must_be_configured(self) -> "DataSourcesSettings":
        """Require the primary name to exist once any source is configured."""
        if self.sources and self.primary not in self.sources:
            raise ValueError(
                f"datasource.primary={self.primary!r} is not one of the configured sources"
            )
        return self


class SerializationSettings(BaseModel):
    """Bounds used when encoding integers for double-precision consumers."""

    max_safe_integer: int = MAX_SAFE_INTEGER
    min_safe_integer: int = MIN_SAFE_INTEGER

    @model_validator(mode="after")
    def _bounds_must_be_ordered(self) -> "SerializationSettings":
        """Reject inverted or empty safe-integer ranges."""
        if self.min_safe_integer >= self.max_safe_integer:
            raise ValueError(
                "serialization.min_safe_integer must be < serialization.max_safe_integer"
            )
        return self


class AuditSettings(BaseModel):
    """Field names filled on records that do not expose the audit contract."""

    create_time_field: str = "create_time"
    update_time_field: str = "update_time"


@dataclass(frozen=True)
class _LoadOptions:
    """Per-call source overrides consumed while settings are being built."""

    config_path: Path
    environ: Mapping[str, str] | None


_LOAD_OPTIONS: ContextVar[_LoadOptions | None] = ContextVar(
    "atrium_settings_load_options", default=None
)


class MappingEnvSettingsSource(PydanticBaseSettingsSource):
    """Read ``ATRIUM_``-prefixed variables from an explicit mapping."""

    def __init__(
        self, settings_cls: type[BaseSettings], *, environ: Mapping[str, str]
    ) -> None:
        super().__init__(settings_cls)
        self._environ = environ

    def get_field_value(
        self, field: FieldInfo, field_name: str
    ) -> tuple[Any, str, bool]:
        del field
        return None, field_name, False

    def __call__(self) -> dict[str, Any]:
        output: dict[str, Any] = {}
        for key, raw_value in self._environ.items():
            if not key.startswith(ENV_PREFIX):
                continue
            path = [
                segment.strip().lower()
                for segment in key[len(ENV_PREFIX) :].split(ENV_NESTED_DELIMITER)
                if segment.strip()
            ]
            if path:
                _set_nested(output, path, raw_value)
        return output


class AtriumSettings(BaseSettings):
    """Root runtime settings resolved from init/env/file/defaults sources."""

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        env_nested_delimiter=ENV_NESTED_DELIMITER,
        extra="ignore",
        nested_model_default_partial_update=True,
    )

    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    datasource: DataSourcesSettings = Field(default_factory=DataSourcesSettings)
    serialization: SerializationSettings = Field(default_factory=SerializationSettings)
    audit: AuditSettings = Field(default_factory=AuditSettings)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Apply Atrium precedence: init > env > config file > defaults."""
        options = _LOAD_OPTIONS.get()
        config_path = DEFAULT_CONFIG_PATH if options is None else options.config_path
        if options is not None and options.environ is not None:
            env_settings = MappingEnvSettingsSource(
                settings_cls, environ=options.environ
            )
        return (
            init_settings,
            env_settings,
            config_file_source(settings_cls, config_path),
        )


def config_file_source(
    settings_cls: type[BaseSettings], path: Path
) -> PydanticBaseSettingsSource:
    """Return the file settings source matching the config file suffix."""
    suffix = path.suffix.lower()
    if suffix in YAML_SUFFIXES:
        return YamlConfigSettingsSource(
            settings_cls, yaml_file=path, yaml_file_encoding="utf-8"
        )
    if suffix in JSON_SUFFIXES:
        return JsonConfigSettingsSource(
            settings_cls, json_file=path, json_file_encoding="utf-8"
        )
    raise ValueError(f"Unsupported config file type (expected .yml, .yaml or .json): {path}")


def _set_nested(target: dict[str, Any], path: list[str], value: Any) -> None:
    """Set a nested mapping value by path, creating intermediate dicts."""
    cursor: dict[str, Any] = target
    for segment in path[:-1]:
        child = cursor.get(segment)
        if not isinstance(child, dict):
            child = {}
            cursor[segment] = child
        cursor = child
    cursor[path[-1]] = value
