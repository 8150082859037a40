"""Wire-level constants shared across edgecrud modules."""

from __future__ import annotations


class HttpCodes:
    """Semantic names for the status codes handlers emit."""

    OK = 200
    CREATED = 201
    NO_CONTENT = 204
    NOT_MODIFIED = 304
    BAD_REQUEST = 400
    NOT_FOUND = 404
    METHOD_NOT_ALLOWED = 405
    PAYLOAD_TOO_LARGE = 413
    UNPROCESSABLE_ENTITY = 422
    INTERNAL_ERROR = 500


HTTP_METHODS = ("GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS", "HEAD")
METHODS_WITH_BODY = frozenset({"POST", "PUT", "PATCH", "DELETE"})
NO_BODY_STATUS_CODES = frozenset({HttpCodes.NO_CONTENT, HttpCodes.NOT_MODIFIED})
MIN_STATUS_CODE = 100
MAX_STATUS_CODE = 599

HEADER_CONTENT_TYPE = "content-type"
HEADER_CONTENT_LENGTH = "content-length"
HEADER_ALLOW_ORIGIN = "access-control-allow-origin"
HEADER_ALLOW_METHODS = "access-control-allow-methods"
HEADER_ALLOW_HEADERS = "access-control-allow-headers"
HEADER_ALLOW_CREDENTIALS = "access-control-allow-credentials"
HEADER_VARY = "vary"

JSON_CONTENT_TYPE = "application/json"

DEFAULT_MAX_BODY_SIZE = 6 * 1024 * 1024

DEFAULT_LIMIT = 25
MAX_LIMIT = 100
DEFAULT_CURSOR = 0


def is_http_method(value: object) -> bool:
    return isinstance(value, str) and value in HTTP_METHODS


__all__ = [
    "DEFAULT_CURSOR",
    "DEFAULT_LIMIT",
    "DEFAULT_MAX_BODY_SIZE",
    "HEADER_ALLOW_CREDENTIALS",
    "HEADER_ALLOW_HEADERS",
    "HEADER_ALLOW_METHODS",
    "HEADER_ALLOW_ORIGIN",
    "HEADER_CONTENT_LENGTH",
    "HEADER_CONTENT_TYPE",
    "HEADER_VARY",
    "HTTP_METHODS",
    "HttpCodes",
    "JSON_CONTENT_TYPE",
    "MAX_LIMIT",
    "MAX_STATUS_CODE",
    "METHODS_WITH_BODY",
    "MIN_STATUS_CODE",
    "NO_BODY_STATUS_CODES",
    "is_http_method",
]
