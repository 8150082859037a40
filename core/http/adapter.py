"""Wrap typed handlers into Lambda proxy handlers.

Every invocation runs the same stages: method check, body parsing, query
normalization, handler call, response validation and serialization. Any
failure short-circuits to a well-formed error envelope; the adapter itself
never raises an ``Exception`` back to the Lambda runtime.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
import time
from typing import Any, Awaitable, Mapping, Optional, Union

from core.config import AdapterConfig
from core.constants import (
    HEADER_CONTENT_TYPE,
    JSON_CONTENT_TYPE,
    METHODS_WITH_BODY,
    NO_BODY_STATUS_CODES,
    HttpCodes,
    is_http_method,
)
from core.errors import InvalidResponse, NamedError
from core.http.body import parse_request_body, status_for
from core.http.cors import is_preflight
from core.http.envelopes import is_envelope, jsonable
from core.http.errors import serialize_error
from core.http.normalizer import RequestNormalizer
from core.http.response import build_error_response, build_response, is_valid_status, normalize_header_map
from core.http.types import ApiHandler, ApiRequest, ApiResponse, HandlerResult
from core.observability import bind_request_id, reset_request_id

logger = logging.getLogger(__name__)

ProxyResponse = dict[str, Any]


class ApiAdapter:
    """Callable ``(event, context) -> proxy response`` around one handler."""

    def __init__(self, handler: ApiHandler, config: Optional[AdapterConfig] = None, name: str | None = None) -> None:
        self.handler = handler
        self.config = config or AdapterConfig()
        self.normalizer = RequestNormalizer(multi_value=self.config.multi_value_query_params)
        self.name = name or getattr(handler, "__name__", type(handler).__name__)

    def __call__(self, event: Mapping[str, Any], context: Any = None) -> ProxyResponse:
        token = bind_request_id(_invocation_id(event, context))
        started = time.perf_counter()
        response: ProxyResponse | None = None
        try:
            try:
                prepared = self._prepare(event)
                if isinstance(prepared, ApiRequest):
                    result = self.handler(prepared)
                    if inspect.isawaitable(result):
                        result = asyncio.run(_resolve(result))
                    prepared = self._finish(result)
                response = prepared
            except Exception as exc:
                response = self._fail(exc)
            return response
        finally:
            self._log_outcome(event, response, started)
            reset_request_id(token)

    async def acall(self, event: Mapping[str, Any], context: Any = None) -> ProxyResponse:
        """Same pipeline for hosts that already run an event loop."""
        token = bind_request_id(_invocation_id(event, context))
        started = time.perf_counter()
        response: ProxyResponse | None = None
        try:
            try:
                prepared = self._prepare(event)
                if isinstance(prepared, ApiRequest):
                    result = self.handler(prepared)
                    if inspect.isawaitable(result):
                        result = await result
                    prepared = self._finish(result)
                response = prepared
            except Exception as exc:
                response = self._fail(exc)
            return response
        finally:
            self._log_outcome(event, response, started)
            reset_request_id(token)

    # ------------------------------------------------------------------
    def _prepare(self, event: Mapping[str, Any]) -> Union[ApiRequest, ProxyResponse]:
        method = self.normalizer.method(event)

        if is_preflight(method, self.config):
            return build_response(HttpCodes.NO_CONTENT, None, None, self.config)

        if not is_http_method(method):
            return build_error_response(HttpCodes.METHOD_NOT_ALLOWED, "Method Not Allowed", None, self.config)

        headers = self.normalizer.headers(event)
        try:
            raw_body = self.normalizer.body(event) if method in METHODS_WITH_BODY else None
            body = parse_request_body(raw_body, method, headers, self.config)
        except NamedError as exc:
            return build_error_response(status_for(exc), exc.name, exc.message, self.config)

        query = self.normalizer.query(event)
        return ApiRequest(method=method, body=body, query=query, headers=headers, raw_event=event)

    def _finish(self, result: HandlerResult) -> ProxyResponse:
        response = self._coerce(result)
        status = response.status_code
        if not is_valid_status(status):
            logger.warning("Handler %s returned invalid status code %r, using 500", self.name, status)
            return build_error_response(
                HttpCodes.INTERNAL_ERROR,
                InvalidResponse.name,
                f"Handler returned invalid status code {status!r}",
                self.config,
            )

        if status in NO_BODY_STATUS_CODES:
            return build_response(status, None, response.headers, self.config)

        body = jsonable(response.body)
        content_type = normalize_header_map(response.headers).get(HEADER_CONTENT_TYPE)
        if (not content_type or JSON_CONTENT_TYPE in content_type.lower()) and not is_envelope(body):
            logger.error("Handler %s returned a body that is not a data or error envelope", self.name)
            return build_error_response(
                HttpCodes.INTERNAL_ERROR,
                InvalidResponse.name,
                "Response body must be a data or error envelope",
                self.config,
            )
        return build_response(status, body, response.headers, self.config)

    @staticmethod
    def _coerce(result: Any) -> ApiResponse:
        if isinstance(result, ApiResponse):
            return result
        if isinstance(result, Mapping):
            try:
                return ApiResponse.from_mapping(result)
            except TypeError as exc:
                raise InvalidResponse(str(exc)) from exc
        raise InvalidResponse(f"Handler returned {type(result).__name__} instead of a response")

    def _fail(self, exc: BaseException) -> ProxyResponse:
        info = serialize_error(exc)
        logger.error(
            "Unhandled error in handler %s: %s: %s",
            self.name,
            info["name"],
            info["message"],
            exc_info=exc,
        )
        return build_error_response(HttpCodes.INTERNAL_ERROR, info["name"], info["message"], self.config)

    def _log_outcome(self, event: Any, response: ProxyResponse | None, started: float) -> None:
        elapsed_ms = round((time.perf_counter() - started) * 1000, 2)
        status = response.get("statusCode") if response else None
        path = event.get("path") or event.get("rawPath") if isinstance(event, Mapping) else None
        logger.info(
            "%s %s -> %s",
            self.normalizer.method(event) if isinstance(event, Mapping) else "?",
            path or "-",
            status,
            extra={"handler": self.name, "status": status, "duration_ms": elapsed_ms},
        )


def create_api_handler(handler: ApiHandler, config: Optional[AdapterConfig] = None) -> ApiAdapter:
    return ApiAdapter(handler, config)


async def _resolve(awaitable: Awaitable[HandlerResult]) -> HandlerResult:
    return await awaitable


def _invocation_id(event: Any, context: Any) -> str:
    request_id = getattr(context, "aws_request_id", None)
    if request_id:
        return str(request_id)
    if isinstance(event, Mapping):
        request_context = event.get("requestContext")
        if isinstance(request_context, Mapping) and request_context.get("requestId"):
            return str(request_context["requestId"])
    return ""


__all__ = ["ApiAdapter", "create_api_handler", "is_valid_status"]
