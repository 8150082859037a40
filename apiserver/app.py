"""Entrypoint compatible with AWS Lambda + API Gateway."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, Mapping, Optional

from apiserver.routes import RESOURCES, ResourceRoutes
from core.config import Settings, load_settings
from core.constants import HttpCodes
from core.http.adapter import ApiAdapter, ProxyResponse
from core.http.errors import serialize_error
from core.http.response import build_error_response, build_response
from core.observability import configure_logging
from core.store import TableStore, build_store

logger = logging.getLogger(__name__)

CONFIG_ENV = "EDGECRUD_CONFIG"
DEFAULT_CONFIG_PATH = "edgecrud.yml"
API_PREFIX = "/api"

LambdaHandler = Callable[[Mapping[str, Any], Any], ProxyResponse]


@dataclass(slots=True)
class AppContext:
    """Handles built once per container and shared by every invocation."""

    settings: Settings
    store: TableStore
    routes: Dict[str, ApiAdapter]


def build_context(settings: Settings, store: Optional[TableStore] = None) -> AppContext:
    store = store if store is not None else build_store(settings.store)
    routes: Dict[str, ApiAdapter] = {}
    for definition in RESOURCES:
        resource = ResourceRoutes(definition, store)
        for operation, handler in resource.handlers().items():
            path = f"{API_PREFIX}/{definition.name}/{operation}"
            routes[path] = ApiAdapter(handler, settings.adapter, name=f"{definition.name}.{operation}")
    return AppContext(settings=settings, store=store, routes=routes)


def route_path(event: Any) -> str:
    path = None
    if isinstance(event, Mapping):
        path = event.get("path") or event.get("rawPath")
    if not isinstance(path, str) or not path:
        return "/"
    if len(path) > 1:
        path = path.rstrip("/") or "/"
    return path


def dispatch(app_context: AppContext, event: Mapping[str, Any], context: Any = None) -> ProxyResponse:
    config = app_context.settings.adapter
    try:
        path = route_path(event)
        adapter = app_context.routes.get(path)
        if adapter is None:
            logger.info("No route for %s", path)
            return build_response(
                HttpCodes.NOT_FOUND,
                {"error": "Route not found", "details": path},
                None,
                config,
            )
        return adapter(event, context)
    except Exception as exc:
        info = serialize_error(exc)
        logger.error("Dispatch failed: %s: %s", info["name"], info["message"], exc_info=exc)
        return build_error_response(HttpCodes.INTERNAL_ERROR, info["name"], info["message"], config)


def make_lambda_handler(app_context: AppContext) -> LambdaHandler:
    def lambda_handler(event: Mapping[str, Any], context: Any) -> ProxyResponse:
        return dispatch(app_context, event, context)

    return lambda_handler


def boot(environ: Optional[Mapping[str, str]] = None) -> AppContext:
    """Load settings, configure logging and open the store."""
    environ = os.environ if environ is None else environ
    settings = load_settings(Path(environ.get(CONFIG_ENV, DEFAULT_CONFIG_PATH))).with_env(environ)
    configure_logging(settings.log_level, settings.service_name, settings.log_format)
    app_context = build_context(settings)
    logger.info(
        "Booted %s with %d routes on %s store",
        settings.service_name,
        len(app_context.routes),
        settings.store.backend,
    )
    return app_context


__all__ = [
    "AppContext",
    "boot",
    "build_context",
    "dispatch",
    "make_lambda_handler",
    "route_path",
]
