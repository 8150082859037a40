"""Build Lambda proxy responses with consistent headers and JSON bodies."""

from __future__ import annotations

import json
import logging
from typing import Any, Mapping, Optional

from core.config import AdapterConfig
from core.constants import (
    HEADER_CONTENT_TYPE,
    JSON_CONTENT_TYPE,
    MAX_STATUS_CODE,
    MIN_STATUS_CODE,
    NO_BODY_STATUS_CODES,
    HttpCodes,
)
from core.errors import InvalidResponse
from core.http.cors import build_cors_headers

logger = logging.getLogger(__name__)


def is_valid_status(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and MIN_STATUS_CODE <= value <= MAX_STATUS_CODE


def normalize_header_map(headers: Optional[Mapping[str, Any]]) -> dict[str, str]:
    if not headers:
        return {}
    return {str(key).lower(): str(value) for key, value in headers.items() if value is not None}


def build_response(
    status_code: int,
    body: Any = None,
    headers: Optional[Mapping[str, Any]] = None,
    config: Optional[AdapterConfig] = None,
) -> dict[str, Any]:
    """Serialize ``body`` and merge CORS and caller headers.

    A status outside 100..599 becomes a 500 ``InvalidResponse`` envelope.
    Status codes that forbid a body (204, 304) always return ``""``. JSON
    serialization problems and non-string bodies under a custom content type
    become a 500 ``InvalidResponse`` envelope instead of raising.
    """
    config = config or AdapterConfig()
    if not is_valid_status(status_code):
        logger.warning("Response status %r is outside %d..%d, using 500", status_code, MIN_STATUS_CODE, MAX_STATUS_CODE)
        return build_error_response(
            HttpCodes.INTERNAL_ERROR,
            InvalidResponse.name,
            f"Invalid status code {status_code!r}",
            config,
        )
    cors_headers = build_cors_headers(config.cors)
    caller_headers = normalize_header_map(headers)

    if status_code in NO_BODY_STATUS_CODES:
        return {"statusCode": status_code, "headers": {**cors_headers, **caller_headers}, "body": ""}

    custom_type = caller_headers.get(HEADER_CONTENT_TYPE)
    is_json = not custom_type or JSON_CONTENT_TYPE in custom_type.lower()

    if is_json:
        try:
            rendered = json.dumps(body, allow_nan=False)
        except (TypeError, ValueError, RecursionError) as exc:
            logger.error("Handler returned a non-serializable response body: %s", exc)
            return build_error_response(
                HttpCodes.INTERNAL_ERROR,
                InvalidResponse.name,
                f"Response body is not JSON-serializable: {exc}",
                config,
            )
    elif isinstance(body, str):
        rendered = body
    else:
        logger.error("Handler returned a %s body with content-type %s", type(body).__name__, custom_type)
        return build_error_response(
            HttpCodes.INTERNAL_ERROR,
            InvalidResponse.name,
            "Non-JSON responses must provide a string body",
            config,
        )

    merged: dict[str, str] = {HEADER_CONTENT_TYPE: JSON_CONTENT_TYPE} if is_json else {}
    merged.update(cors_headers)
    merged.update(caller_headers)
    return {"statusCode": status_code, "headers": merged, "body": rendered}


def build_error_response(
    status_code: int,
    error: str,
    details: Optional[str] = None,
    config: Optional[AdapterConfig] = None,
) -> dict[str, Any]:
    body: dict[str, str] = {"error": error}
    if details:
        body["details"] = details
    return build_response(status_code, body, None, config)


__all__ = ["build_error_response", "build_response", "is_valid_status", "normalize_header_map"]
