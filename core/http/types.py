"""Typed request and response objects exchanged with handlers."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Awaitable, Callable, Mapping, Union

HttpHeaders = Mapping[str, str]
HttpQuery = Mapping[str, str]


@dataclass(frozen=True, slots=True)
class ApiRequest:
    """Normalized inbound request handed to every handler."""

    method: str
    body: Any = None
    query: HttpQuery = field(default_factory=dict)
    headers: HttpHeaders = field(default_factory=dict)
    raw_event: Mapping[str, Any] = field(default_factory=dict, repr=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "query", MappingProxyType(dict(self.query)))
        object.__setattr__(self, "headers", MappingProxyType(dict(self.headers)))


@dataclass(slots=True)
class ApiResponse:
    """What a handler returns; the adapter turns it into a transport response."""

    status_code: int
    body: Any = None
    headers: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "ApiResponse":
        if "statusCode" not in data and "status_code" not in data:
            raise TypeError("Handler response mapping has no statusCode")
        status = data.get("statusCode", data.get("status_code"))
        headers = data.get("headers") or {}
        if not isinstance(headers, Mapping):
            raise TypeError("Handler response headers must be a mapping")
        return cls(status_code=status, body=data.get("body"), headers={str(k): str(v) for k, v in headers.items()})


HandlerResult = Union[ApiResponse, Mapping[str, Any]]
ApiHandler = Callable[[ApiRequest], Union[HandlerResult, Awaitable[HandlerResult]]]


__all__ = ["ApiHandler", "ApiRequest", "ApiResponse", "HandlerResult", "HttpHeaders", "HttpQuery"]
