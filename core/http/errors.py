"""Convert arbitrary raised values into a JSON-safe ``{name, message}`` shape."""

from __future__ import annotations

import json
import math
from typing import Any, Mapping

from core.errors import NamedError

CIRCULAR = "[Circular]"
TRUNCATED = "[Truncated]"
MAX_DEPTH = 8

_BASE_KEYS = frozenset({"name", "message", "stack", "args", "__traceback__"})


def serialize_error(value: Any) -> dict[str, Any]:
    """Describe ``value`` as ``{name, message, ...}`` without raising.

    Extra public attributes (or mapping keys) are merged best-effort through
    :func:`to_safe_json`; when that fails only ``name`` and ``message`` are
    returned. Tracebacks are never included.
    """
    try:
        base = {"name": _error_name(value), "message": _error_message(value)}
    except Exception:
        base = {"name": "Error", "message": "Unknown error"}
    try:
        extras = _extra_fields(value)
    except Exception:
        return base
    if not extras:
        return base
    return {**extras, **base}


def to_safe_json(value: Any, *, max_depth: int = MAX_DEPTH) -> Any:
    """Copy ``value`` into plain JSON types, replacing repeated objects with a sentinel."""
    return _walk(value, set(), 0, max_depth)


def extract_error_message(value: Any) -> str:
    if isinstance(value, BaseException):
        return _safe_str(value)
    if isinstance(value, str):
        return value
    if isinstance(value, Mapping) and "message" in value:
        return _safe_str(value["message"])
    message = getattr(value, "message", None)
    if message is not None:
        return _safe_str(message)
    return _safe_str(value)


def _error_name(value: Any) -> str:
    if isinstance(value, Mapping):
        name = value.get("name")
        return name if isinstance(name, str) and name else "Error"
    if isinstance(value, NamedError):
        return value.name or type(value).__name__
    if isinstance(value, BaseException):
        return type(value).__name__
    name = getattr(value, "name", None)
    if isinstance(name, str) and name:
        return name
    return "Error"


def _error_message(value: Any) -> str:
    if isinstance(value, BaseException):
        message = _safe_str(value)
        return message or type(value).__name__
    if isinstance(value, str):
        return value or "Unknown error"
    if isinstance(value, Mapping) and "message" in value:
        return _safe_str(value["message"]) or "Unknown error"
    if hasattr(value, "message"):
        return _safe_str(getattr(value, "message", None)) or "Unknown error"
    if value is None:
        return "Unknown error"
    if isinstance(value, (Mapping, list, tuple)):
        try:
            return json.dumps(to_safe_json(value), default=str)
        except Exception:
            return _safe_str(value)
    return _safe_str(value)


def _extra_fields(value: Any) -> dict[str, Any]:
    if isinstance(value, Mapping):
        source = {str(key): item for key, item in value.items()}
    elif isinstance(value, (str, bytes, int, float, bool)) or value is None:
        return {}
    else:
        source = dict(getattr(value, "__dict__", {}) or {})
    extras: dict[str, Any] = {}
    for key, item in source.items():
        if key in _BASE_KEYS or key.startswith("_"):
            continue
        extras[key] = to_safe_json(item)
    return extras


def _walk(value: Any, seen: set[int], depth: int, max_depth: int) -> Any:
    if value is None or isinstance(value, (str, bool, int)):
        return value
    if isinstance(value, float):
        return value if math.isfinite(value) else str(value)
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    if depth >= max_depth:
        return TRUNCATED

    marker = id(value)
    if marker in seen:
        return CIRCULAR
    seen.add(marker)

    if isinstance(value, BaseException):
        return {"name": _error_name(value), "message": _error_message(value)}
    if isinstance(value, Mapping):
        return {str(key): _walk(item, seen, depth + 1, max_depth) for key, item in value.items()}
    if isinstance(value, (list, tuple, set, frozenset)):
        return [_walk(item, seen, depth + 1, max_depth) for item in value]
    attributes = getattr(value, "__dict__", None)
    if isinstance(attributes, dict):
        return {
            key: _walk(item, seen, depth + 1, max_depth)
            for key, item in attributes.items()
            if not key.startswith("_")
        }
    return _safe_str(value)


def _safe_str(value: Any) -> str:
    if value is None:
        return ""
    try:
        return str(value)
    except Exception:
        try:
            return repr(value)
        except Exception:
            return f"<unprintable {type(value).__name__}>"


__all__ = ["CIRCULAR", "extract_error_message", "serialize_error", "to_safe_json"]
