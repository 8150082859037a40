"""Request body validation: size ceiling, content type and JSON parsing."""

from __future__ import annotations

import json
from typing import Any, Mapping, Optional

from core.config import AdapterConfig
from core.constants import (
    HEADER_CONTENT_LENGTH,
    HEADER_CONTENT_TYPE,
    JSON_CONTENT_TYPE,
    METHODS_WITH_BODY,
    HttpCodes,
)
from core.errors import InvalidBody, InvalidContentType, InvalidJSON, NamedError, PayloadTooLarge


def parse_request_body(
    body: Optional[bytes | str],
    method: str,
    headers: Mapping[str, str],
    config: AdapterConfig,
) -> Any:
    """Return the parsed JSON body, or ``None`` when the request carries none.

    Raises a :class:`NamedError` subclass describing the first failed check.
    """
    if method not in METHODS_WITH_BODY:
        return None
    if body is None:
        return None

    max_size = config.max_body_size
    declared = _declared_length(headers.get(HEADER_CONTENT_LENGTH))
    if declared is not None and declared > max_size:
        raise PayloadTooLarge(f"Request body exceeds maximum size of {max_size} bytes")

    if isinstance(body, bytes):
        size = len(body)
        try:
            text = body.decode("utf-8")
        except UnicodeDecodeError as exc:
            if size > max_size:
                raise PayloadTooLarge(f"Request body exceeds maximum size of {max_size} bytes") from exc
            raise InvalidBody(f"Request body is not valid UTF-8: {exc.reason}") from exc
    else:
        text = body
        size = len(text.encode("utf-8"))

    if not text:
        return None
    if size > max_size:
        raise PayloadTooLarge(f"Request body exceeds maximum size of {max_size} bytes")

    if config.validate_content_type:
        content_type = headers.get(HEADER_CONTENT_TYPE)
        if JSON_CONTENT_TYPE not in (content_type or "").lower():
            raise InvalidContentType(
                f"Expected Content-Type: {JSON_CONTENT_TYPE}, received: {content_type or 'none'}"
            )

    try:
        return json.loads(text)
    except ValueError as exc:
        raise InvalidJSON(f"Invalid JSON: {exc}") from exc


def status_for(error: NamedError) -> int:
    if error.name == PayloadTooLarge.name:
        return HttpCodes.PAYLOAD_TOO_LARGE
    return HttpCodes.BAD_REQUEST


def _declared_length(value: Optional[str]) -> Optional[int]:
    if not value:
        return None
    try:
        return int(value.strip())
    except ValueError:
        return None


__all__ = ["parse_request_body", "status_for"]
