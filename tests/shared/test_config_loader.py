"""Tests for pydantic-settings-backed configuration loading."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from packages.atrium_shared.config import load_settings


def test_load_settings_uses_atrium_precedence_cascade(tmp_path: Path) -> None:
    """Init params should override env, env should override YAML, then defaults."""
    config_file = tmp_path / "atrium.yaml"
    config_file.write_text(
        "\n".join(
            [
                "logging:",
                "  level: WARNING",
                "  service: admin",
                "datasource:",
                "  primary: master",
                "  sources:",
                "    master:",
                "      url: mysql+pymysql://ry:ry@db:3306/ry",
                "      pool_size: 7",
            ]
        ),
        encoding="utf-8",
    )

    settings = load_settings(
        cli_params={"logging": {"level": "DEBUG"}},
        environ={
            "ATRIUM_LOGGING__LEVEL": "ERROR",
            "ATRIUM_LOGGING__ENVIRONMENT": "prod",
            "ATRIUM_DATASOURCE__SOURCES__MASTER__POOL_SIZE": "9",
            "UNRELATED": "ignored",
        },
        config_path=config_file,
    )

    master = settings.datasource.sources["master"]
    assert settings.logging.level == "DEBUG"
    assert settings.logging.environment == "prod"
    assert settings.logging.service == "admin"
    assert master.pool_size == 9
    assert master.url == "mysql+pymysql://ry:ry@db:3306/ry"


def test_load_settings_uses_model_defaults_when_sources_missing(tmp_path: Path) -> None:
    """Settings should fall back to model defaults when env and YAML are absent."""
    settings = load_settings(config_path=tmp_path / "atrium.yaml", environ={})

    assert settings.logging.level == "INFO"
    assert settings.logging.service == "atrium"
    assert settings.datasource.primary == "master"
    assert settings.datasource.sources == {}
    assert settings.serialization.max_safe_integer == 9007199254740991
    assert settings.serialization.min_safe_integer == -9007199254740991
    assert settings.audit.create_time_field == "create_time"


def test_load_settings_reads_json_config(tmp_path: Path) -> None:
    """JSON config files are accepted alongside YAML."""
    config_file = tmp_path / "atrium.json"
    config_file.write_text(
        json.dumps({"audit": {"update_time_field": "updated_at"}}), encoding="utf-8"
    )

    settings = load_settings(config_path=config_file, environ={})
    assert settings.audit.update_time_field == "updated_at"


def test_load_settings_rejects_unsupported_config_suffix(tmp_path: Path) -> None:
    """Only YAML and JSON config files are understood."""
    with pytest.raises(ValueError):
        load_settings(config_path=tmp_path / "atrium.properties", environ={})


def test_primary_datasource_must_be_configured(tmp_path: Path) -> None:
    """A primary name absent from the configured sources is invalid."""
    with pytest.raises(ValidationError):
        load_settings(
            cli_params={
                "datasource": {
                    "primary": "master",
                    "sources": {"slave": {"url": "sqlite://"}},
                }
            },
            environ={},
            config_path=tmp_path / "atrium.yaml",
        )


def test_datasource_pool_settings_are_validated(tmp_path: Path) -> None:
    """Pool sizing must be positive."""
    with pytest.raises(ValidationError):
        load_settings(
            cli_params={
                "datasource": {"sources": {"master": {"url": "sqlite://", "pool_size": 0}}}
            },
            environ={},
            config_path=tmp_path / "atrium.yaml",
        )


def test_inverted_safe_integer_bounds_are_rejected(tmp_path: Path) -> None:
    """Serialization bounds must describe a non-empty range."""
    with pytest.raises(ValidationError):
        load_settings(
            environ={
                "ATRIUM_SERIALIZATION__MIN_SAFE_INTEGER": "5",
                "ATRIUM_SERIALIZATION__MAX_SAFE_INTEGER": "5",
            },
            config_path=tmp_path / "atrium.yaml",
        )
