"""Handler-side helpers producing data and error envelopes."""

from __future__ import annotations

from typing import Any, Mapping

from pydantic import BaseModel

from core.constants import HttpCodes
from core.http.errors import extract_error_message
from core.http.types import ApiResponse


def jsonable(value: Any) -> Any:
    """Dump pydantic models (also inside lists/dicts) to JSON-ready values."""
    if isinstance(value, BaseModel):
        return value.model_dump(by_alias=True, mode="json", exclude_none=True)
    if isinstance(value, (list, tuple)):
        return [jsonable(item) for item in value]
    if isinstance(value, Mapping):
        return {key: jsonable(item) for key, item in value.items()}
    return value


def is_envelope(body: Any) -> bool:
    if not isinstance(body, Mapping):
        return False
    if "data" in body:
        return True
    return isinstance(body.get("error"), str)


def to_ok(data: Any) -> ApiResponse:
    return ApiResponse(HttpCodes.OK, {"data": jsonable(data)})


def to_created(data: Any) -> ApiResponse:
    return ApiResponse(HttpCodes.CREATED, {"data": jsonable(data)})


def to_list(data: list[Any], cursor: int, has_more: bool) -> ApiResponse:
    return ApiResponse(HttpCodes.OK, {"data": jsonable(data), "cursor": cursor, "hasMore": has_more})


def to_no_content() -> ApiResponse:
    return ApiResponse(HttpCodes.NO_CONTENT)


def to_bad_request(error: str) -> ApiResponse:
    return ApiResponse(HttpCodes.BAD_REQUEST, {"error": error})


def to_not_found(error: str) -> ApiResponse:
    return ApiResponse(HttpCodes.NOT_FOUND, {"error": error})


def to_method_not_allowed() -> ApiResponse:
    return ApiResponse(HttpCodes.METHOD_NOT_ALLOWED, {"error": "Method Not Allowed"})


def to_unprocessable(error: str) -> ApiResponse:
    return ApiResponse(HttpCodes.UNPROCESSABLE_ENTITY, {"error": error})


def to_internal_error(error: str, details: Any = None) -> ApiResponse:
    body = {"error": error}
    if details is not None:
        message = extract_error_message(details)
        if message:
            body["details"] = message
    return ApiResponse(HttpCodes.INTERNAL_ERROR, body)


__all__ = [
    "is_envelope",
    "jsonable",
    "to_bad_request",
    "to_created",
    "to_internal_error",
    "to_list",
    "to_method_not_allowed",
    "to_no_content",
    "to_not_found",
    "to_ok",
    "to_unprocessable",
]
