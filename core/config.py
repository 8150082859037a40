"""Configuration objects for the adapter and the service boot sequence."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Mapping, Union

import yaml

from core.constants import DEFAULT_MAX_BODY_SIZE
from core.errors import ConfigError

DEFAULT_CORS_METHODS = ("GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS")
DEFAULT_CORS_HEADERS = ("Content-Type", "Authorization")

DEFAULTS = {
    "service_name": "edgecrud",
    "log_level": "INFO",
    "log_format": "json",
    "store_backend": "memory",
}

STORE_BACKENDS = ("memory", "rds-data")


@dataclass(frozen=True, slots=True)
class CorsOptions:
    """Caller overrides merged over the default CORS policy."""

    origin: str = "*"
    methods: tuple[str, ...] = DEFAULT_CORS_METHODS
    headers: tuple[str, ...] = DEFAULT_CORS_HEADERS
    credentials: bool = False

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "CorsOptions":
        return cls(
            origin=str(data.get("origin") or "*"),
            methods=_as_tuple(data.get("methods"), DEFAULT_CORS_METHODS),
            headers=_as_tuple(data.get("headers"), DEFAULT_CORS_HEADERS),
            credentials=bool(data.get("credentials", False)),
        )


CorsSetting = Union[bool, CorsOptions]


@dataclass(frozen=True, slots=True)
class AdapterConfig:
    """Per-adapter behaviour; immutable once the adapter is built."""

    cors: CorsSetting = False
    max_body_size: int = DEFAULT_MAX_BODY_SIZE
    validate_content_type: bool = True
    multi_value_query_params: bool = False

    @property
    def cors_enabled(self) -> bool:
        return self.cors is not False

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "AdapterConfig":
        raw_cors = data.get("cors", False)
        if isinstance(raw_cors, Mapping):
            cors: CorsSetting = CorsOptions.from_mapping(raw_cors)
        else:
            cors = bool(raw_cors)
        max_body_size = int(data.get("max_body_size", DEFAULT_MAX_BODY_SIZE))
        if max_body_size <= 0:
            raise ConfigError("adapter.max_body_size must be a positive number of bytes")
        return cls(
            cors=cors,
            max_body_size=max_body_size,
            validate_content_type=bool(data.get("validate_content_type", True)),
            multi_value_query_params=bool(data.get("multi_value_query_params", False)),
        )


@dataclass(frozen=True, slots=True)
class StoreSettings:
    backend: str = DEFAULTS["store_backend"]
    resource_arn: str | None = None
    secret_arn: str | None = None
    database: str | None = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "StoreSettings":
        backend = str(data.get("backend", DEFAULTS["store_backend"]))
        if backend not in STORE_BACKENDS:
            raise ConfigError(f"store.backend must be one of {', '.join(STORE_BACKENDS)}, got {backend!r}")
        return cls(
            backend=backend,
            resource_arn=data.get("resource_arn"),
            secret_arn=data.get("secret_arn"),
            database=data.get("database"),
        )


@dataclass(frozen=True, slots=True)
class Settings:
    service_name: str = DEFAULTS["service_name"]
    log_level: str = DEFAULTS["log_level"]
    log_format: str = DEFAULTS["log_format"]
    adapter: AdapterConfig = field(default_factory=AdapterConfig)
    store: StoreSettings = field(default_factory=StoreSettings)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "Settings":
        adapter = data.get("adapter") or {}
        store = data.get("store") or {}
        if not isinstance(adapter, Mapping) or not isinstance(store, Mapping):
            raise ConfigError("'adapter' and 'store' sections must be mappings")
        return cls(
            service_name=str(data.get("service_name", DEFAULTS["service_name"])),
            log_level=str(data.get("log_level", DEFAULTS["log_level"])).upper(),
            log_format=str(data.get("log_format", DEFAULTS["log_format"])),
            adapter=AdapterConfig.from_mapping(adapter),
            store=StoreSettings.from_mapping(store),
        )

    def with_env(self, environ: Mapping[str, str]) -> "Settings":
        """Overlay ``EDGECRUD_*`` variables; called once at boot."""
        store = self.store
        backend = environ.get("EDGECRUD_STORE_BACKEND")
        if backend is not None and backend not in STORE_BACKENDS:
            raise ConfigError(f"EDGECRUD_STORE_BACKEND must be one of {', '.join(STORE_BACKENDS)}")
        store = replace(
            store,
            backend=backend or store.backend,
            resource_arn=environ.get("EDGECRUD_DB_RESOURCE_ARN", store.resource_arn),
            secret_arn=environ.get("EDGECRUD_DB_SECRET_ARN", store.secret_arn),
            database=environ.get("EDGECRUD_DB_NAME", store.database),
        )
        return replace(
            self,
            log_level=environ.get("EDGECRUD_LOG_LEVEL", self.log_level).upper(),
            log_format=environ.get("EDGECRUD_LOG_FORMAT", self.log_format),
            store=store,
        )


def load_settings(path: Path) -> Settings:
    if not path.exists():
        return Settings()

    with path.open("r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle) or {}

    if not isinstance(data, dict):
        raise ConfigError("Configuration file must be a mapping of keys to values.")

    return Settings.from_mapping(data)


def _as_tuple(value: Any, default: tuple[str, ...]) -> tuple[str, ...]:
    if value is None:
        return default
    if isinstance(value, str):
        return tuple(part.strip() for part in value.split(",") if part.strip())
    return tuple(str(item) for item in value)


__all__ = [
    "AdapterConfig",
    "CorsOptions",
    "DEFAULT_CORS_HEADERS",
    "DEFAULT_CORS_METHODS",
    "Settings",
    "StoreSettings",
    "load_settings",
]
