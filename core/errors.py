"""Named error types used to route failures to status codes."""

from __future__ import annotations

from typing import Iterable


class NamedError(Exception):
    """Exception carrying a stable ``name`` that survives serialization."""

    name = "Error"

    def __init__(self, message: str, *, name: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        if name is not None:
            self.name = name


class PayloadTooLarge(NamedError):
    name = "PayloadTooLarge"


class InvalidContentType(NamedError):
    name = "InvalidContentType"


class InvalidJSON(NamedError):
    name = "InvalidJSON"


class InvalidBody(NamedError):
    name = "InvalidBody"


class InvalidResponse(NamedError):
    name = "InvalidResponse"


class ConfigError(NamedError):
    name = "ConfigError"


class StoreError(NamedError):
    """Raised by store backends when the downstream call fails."""

    name = "StoreError"


class MissingFields(NamedError):
    """Row could not be mapped into a domain entity."""

    name = "MissingFields"

    def __init__(self, entity: str, fields: Iterable[str] = ()) -> None:
        self.entity = entity
        self.fields = sorted(set(fields))
        message = f"{entity} row is missing required fields"
        if self.fields:
            message = f"{message}: {', '.join(self.fields)}"
        super().__init__(message)


__all__ = [
    "ConfigError",
    "InvalidBody",
    "InvalidContentType",
    "InvalidJSON",
    "InvalidResponse",
    "MissingFields",
    "NamedError",
    "PayloadTooLarge",
    "StoreError",
]
