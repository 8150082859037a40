"""HTTP boundary: request normalization, validation and response building."""

from .adapter import ApiAdapter, create_api_handler
from .body import parse_request_body
from .cors import build_cors_headers
from .envelopes import (
    to_bad_request,
    to_created,
    to_internal_error,
    to_list,
    to_method_not_allowed,
    to_no_content,
    to_not_found,
    to_ok,
    to_unprocessable,
)
from .errors import serialize_error, to_safe_json
from .normalizer import RequestNormalizer
from .response import build_error_response, build_response
from .types import ApiHandler, ApiRequest, ApiResponse

__all__ = [
    "ApiAdapter",
    "ApiHandler",
    "ApiRequest",
    "ApiResponse",
    "RequestNormalizer",
    "build_cors_headers",
    "build_error_response",
    "build_response",
    "create_api_handler",
    "parse_request_body",
    "serialize_error",
    "to_bad_request",
    "to_created",
    "to_internal_error",
    "to_list",
    "to_method_not_allowed",
    "to_no_content",
    "to_not_found",
    "to_ok",
    "to_safe_json",
    "to_unprocessable",
]
