"""Configuration loading with deterministic precedence.

The cascade is always:
1) CLI / init params
2) Environment variables
3) ~/.config/atrium/atrium.yaml (or an explicit YAML/JSON path)
4) Model defaults

Environment variable format:
- Prefix: ``ATRIUM_``
- Nested keys: ``__`` separator
- Example: ``ATRIUM_DATASOURCE__SOURCES__MASTER__URL=...``
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping

from .models import (
    DEFAULT_CONFIG_PATH,
    JSON_SUFFIXES,
    YAML_SUFFIXES,
    AtriumSettings,
    _LOAD_OPTIONS,
    _LoadOptions,
)


def load_settings(
    *,
    cli_params: Mapping[str, Any] | None = None,
    environ: Mapping[str, str] | None = None,
    config_path: str | Path | None = None,
) -> AtriumSettings:
    """Load settings by applying the standard Atrium precedence cascade.

    ``environ`` replaces ``os.environ`` as the environment source when given.
    A missing config file is treated as empty.
    """
    resolved = Path(config_path) if config_path is not None else DEFAULT_CONFIG_PATH
    if resolved.suffix.lower() not in YAML_SUFFIXES | JSON_SUFFIXES:
        raise ValueError(
            f"Unsupported config file type (expected .yml, .yaml or .json): {resolved}"
        )

    token = _LOAD_OPTIONS.set(_LoadOptions(config_path=resolved, environ=environ))
    try:
        return AtriumSettings(**dict(cli_params or {}))
    finally:
        _LOAD_OPTIONS.reset(token)
