"""Normalize API Gateway proxy events (REST v1 and HTTP API v2)."""

from __future__ import annotations

import base64
import binascii
from typing import Any, Mapping, Optional
from urllib.parse import parse_qsl

from core.errors import InvalidBody


class RequestNormalizer:
    """Extract method, headers, query and raw body from a proxy event.

    Query values are always flattened to strings: repeated keys keep their
    first value, or are joined with commas when ``multi_value`` is set.
    """

    def __init__(self, multi_value: bool = False) -> None:
        self.multi_value = multi_value

    def method(self, event: Mapping[str, Any]) -> str:
        raw = event.get("httpMethod")
        if not raw:
            context = event.get("requestContext")
            http = context.get("http") if isinstance(context, Mapping) else None
            raw = http.get("method") if isinstance(http, Mapping) else None
        return str(raw).upper() if raw else ""

    def headers(self, event: Mapping[str, Any]) -> dict[str, str]:
        normalized: dict[str, str] = {}
        multi = event.get("multiValueHeaders")
        if isinstance(multi, Mapping):
            for key, values in multi.items():
                if values is None:
                    continue
                if isinstance(values, (list, tuple)):
                    normalized[str(key).lower()] = ", ".join(str(value) for value in values)
                else:
                    normalized[str(key).lower()] = str(values)
        single = event.get("headers")
        if isinstance(single, Mapping):
            for key, value in single.items():
                if value is not None:
                    normalized[str(key).lower()] = str(value)
        return normalized

    def query(self, event: Mapping[str, Any]) -> dict[str, str]:
        raw_query = event.get("rawQueryString")
        if isinstance(raw_query, str) and raw_query:
            return self._collapse(self._group(parse_qsl(raw_query, keep_blank_values=True)))

        multi = event.get("multiValueQueryStringParameters")
        if isinstance(multi, Mapping) and multi:
            grouped: dict[str, list[str]] = {}
            for key, values in multi.items():
                if values is None:
                    continue
                if isinstance(values, (list, tuple)):
                    grouped[str(key)] = [str(value) for value in values]
                else:
                    grouped[str(key)] = [str(values)]
            return self._collapse(grouped)

        single = event.get("queryStringParameters")
        if isinstance(single, Mapping):
            return {str(key): str(value) for key, value in single.items() if value is not None}
        return {}

    def body(self, event: Mapping[str, Any]) -> Optional[bytes | str]:
        raw = event.get("body")
        if raw is None:
            return None
        if self._coerce_bool(event.get("isBase64Encoded", False)):
            try:
                return base64.b64decode(raw, validate=True)
            except (binascii.Error, ValueError, TypeError) as exc:
                raise InvalidBody(f"Request body is not valid base64: {exc}") from exc
        if isinstance(raw, (bytes, str)):
            return raw
        return str(raw)

    @staticmethod
    def _group(pairs: list[tuple[str, str]]) -> dict[str, list[str]]:
        grouped: dict[str, list[str]] = {}
        for key, value in pairs:
            grouped.setdefault(key, []).append(value)
        return grouped

    def _collapse(self, grouped: Mapping[str, list[str]]) -> dict[str, str]:
        normalized: dict[str, str] = {}
        for key, values in grouped.items():
            if not values:
                continue
            if self.multi_value and len(values) > 1:
                normalized[key] = ",".join(values)
            else:
                normalized[key] = values[0]
        return normalized

    @staticmethod
    def _coerce_bool(value: Any) -> bool:
        if isinstance(value, bool):
            return value
        if isinstance(value, str):
            return value.lower() == "true"
        return bool(value)


__all__ = ["RequestNormalizer"]
