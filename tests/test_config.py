"""Settings loading tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from core.config import AdapterConfig, CorsOptions, Settings, load_settings
from core.errors import ConfigError


def test_missing_file_gives_defaults(tmp_path: Path):
    settings = load_settings(tmp_path / "absent.yml")
    assert settings == Settings()
    assert settings.adapter.cors is False
    assert settings.adapter.max_body_size == 6 * 1024 * 1024


def test_yaml_file_is_parsed(tmp_path: Path):
    path = tmp_path / "edgecrud.yml"
    path.write_text(
        "service_name: crm\n"
        "log_level: debug\n"
        "adapter:\n"
        "  cors:\n"
        "    origin: https://app.example\n"
        "    methods: GET, POST\n"
        "  max_body_size: 1024\n"
        "  multi_value_query_params: true\n"
        "store:\n"
        "  backend: rds-data\n"
        "  database: crm\n",
        encoding="utf-8",
    )
    settings = load_settings(path)
    assert settings.service_name == "crm"
    assert settings.log_level == "DEBUG"
    assert settings.adapter.cors == CorsOptions(origin="https://app.example", methods=("GET", "POST"))
    assert settings.adapter.max_body_size == 1024
    assert settings.adapter.multi_value_query_params is True
    assert settings.store.backend == "rds-data"
    assert settings.store.database == "crm"


def test_invalid_files_raise_config_error(tmp_path: Path):
    path = tmp_path / "list.yml"
    path.write_text("- a\n- b\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_settings(path)

    with pytest.raises(ConfigError):
        Settings.from_mapping({"store": {"backend": "sqlite"}})
    with pytest.raises(ConfigError):
        AdapterConfig.from_mapping({"max_body_size": 0})


def test_environment_overlay():
    settings = Settings().with_env(
        {
            "EDGECRUD_STORE_BACKEND": "rds-data",
            "EDGECRUD_DB_RESOURCE_ARN": "arn:cluster",
            "EDGECRUD_DB_SECRET_ARN": "arn:secret",
            "EDGECRUD_DB_NAME": "app",
            "EDGECRUD_LOG_LEVEL": "warning",
        }
    )
    assert settings.store.backend == "rds-data"
    assert settings.store.resource_arn == "arn:cluster"
    assert settings.log_level == "WARNING"
    with pytest.raises(ConfigError):
        Settings().with_env({"EDGECRUD_STORE_BACKEND": "mongo"})
