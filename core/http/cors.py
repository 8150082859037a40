"""CORS header policy."""

from __future__ import annotations

from core.config import AdapterConfig, CorsOptions, CorsSetting
from core.constants import (
    HEADER_ALLOW_CREDENTIALS,
    HEADER_ALLOW_HEADERS,
    HEADER_ALLOW_METHODS,
    HEADER_ALLOW_ORIGIN,
    HEADER_VARY,
)


def build_cors_headers(cors: CorsSetting) -> dict[str, str]:
    if cors is False or cors is None:
        return {}
    options = cors if isinstance(cors, CorsOptions) else CorsOptions()
    headers = {
        HEADER_ALLOW_ORIGIN: options.origin or "*",
        HEADER_ALLOW_METHODS: ", ".join(options.methods),
        HEADER_ALLOW_HEADERS: ", ".join(options.headers),
        HEADER_VARY: "Origin",
    }
    if options.credentials:
        headers[HEADER_ALLOW_CREDENTIALS] = "true"
    return headers


def is_preflight(method: str, config: AdapterConfig) -> bool:
    return method == "OPTIONS" and config.cors_enabled


__all__ = ["build_cors_headers", "is_preflight"]
