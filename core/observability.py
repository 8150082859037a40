"""Logging setup for Lambda and local runs.

``configure_logging`` is called once at boot. Every record gets ``service``
and ``request_id`` fields; the request id is bound per invocation by the
adapter through :func:`bind_request_id`.
"""

from __future__ import annotations

import logging
from contextvars import ContextVar

from pythonjsonlogger.json import JsonFormatter

VALID_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})
LOG_FIELDS = ("asctime", "levelname", "name", "message", "service", "request_id")
FIELD_RENAME_MAP = {"levelname": "level", "name": "logger"}
TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s [%(request_id)s] %(message)s"

_request_id: ContextVar[str] = ContextVar("edgecrud_request_id", default="")


class RequestContextFilter(logging.Filter):
    def __init__(self, service_name: str) -> None:
        super().__init__()
        self.service_name = service_name

    def filter(self, record: logging.LogRecord) -> bool:
        record.service = self.service_name
        record.request_id = _request_id.get()
        return True


def configure_logging(level: str = "INFO", service_name: str = "edgecrud", fmt: str = "json") -> None:
    level_upper = level.upper()
    if level_upper not in VALID_LOG_LEVELS:
        raise ValueError(f"Invalid log level: {level}. Valid: {', '.join(sorted(VALID_LOG_LEVELS))}")

    handler = logging.StreamHandler()
    if fmt == "json":
        handler.setFormatter(
            JsonFormatter(" ".join(f"%({name})s" for name in LOG_FIELDS), rename_fields=FIELD_RENAME_MAP)
        )
    else:
        handler.setFormatter(logging.Formatter(TEXT_FORMAT))
    handler.addFilter(RequestContextFilter(service_name))

    root = logging.getLogger()
    root.setLevel(level_upper)
    root.handlers = [handler]


def bind_request_id(request_id: str | None):
    """Bind the invocation id for log records; returns a token for ``reset_request_id``."""
    return _request_id.set(request_id or "")


def reset_request_id(token) -> None:
    _request_id.reset(token)


def current_request_id() -> str:
    return _request_id.get()


__all__ = [
    "RequestContextFilter",
    "bind_request_id",
    "configure_logging",
    "current_request_id",
    "reset_request_id",
]
