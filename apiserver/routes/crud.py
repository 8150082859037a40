"""Generic create/get/update/delete/list handlers shared by every resource."""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable, Mapping, Optional

from pydantic import BaseModel, ValidationError

from core.constants import HttpCodes
from core.errors import MissingFields, StoreError
from core.http.envelopes import (
    to_bad_request,
    to_created,
    to_internal_error,
    to_list,
    to_method_not_allowed,
    to_not_found,
    to_ok,
    to_unprocessable,
)
from core.http.types import ApiHandler, ApiRequest, ApiResponse
from core.resources.mapper import ResourceMapper
from core.resources.pagination import Page, clamp_limit, page_window, parse_cursor
from core.resources.validators import is_non_empty_string, validate_id_payload
from core.store.base import TableStore

logger = logging.getLogger(__name__)

Validator = Callable[[Any], Optional[str]]
Builder = Callable[[Mapping[str, Any], str, datetime], BaseModel]
Updater = Callable[[BaseModel, Mapping[str, Any], datetime], BaseModel]

OPERATIONS = ("create", "get", "update", "delete", "list")


@dataclass(frozen=True, slots=True)
class ResourceDefinition:
    """Everything the generic handlers need to know about one resource."""

    name: str
    table: str
    mapper: ResourceMapper
    validate_create: Validator
    validate_update: Validator
    build: Builder
    apply_update: Updater
    soft_delete: bool = True

    @property
    def entity(self) -> str:
        return self.mapper.entity

    @property
    def label(self) -> str:
        return self.mapper.entity.lower()


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def new_id() -> str:
    return str(uuid.uuid4())


def validation_message(exc: ValidationError) -> str:
    """First model error as one readable line, e.g. ``contacts.0.email: Input should be a valid string``."""
    errors = exc.errors(include_url=False)
    if not errors:
        return f"Invalid {exc.title}"
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()))
    return f"{location}: {first['msg']}" if location else first["msg"]


class ResourceRoutes:
    """Bind a :class:`ResourceDefinition` to a store handle built at boot."""

    def __init__(
        self,
        definition: ResourceDefinition,
        store: TableStore,
        clock: Callable[[], datetime] = utc_now,
        id_factory: Callable[[], str] = new_id,
    ) -> None:
        self.definition = definition
        self.store = store
        self.clock = clock
        self.id_factory = id_factory

    def handlers(self) -> dict[str, ApiHandler]:
        return {
            "create": self.create,
            "get": self.get,
            "update": self.update,
            "delete": self.delete,
            "list": self.list_page,
        }

    def create(self, req: ApiRequest) -> ApiResponse:
        if req.method != "POST":
            return to_method_not_allowed()

        error = self.definition.validate_create(req.body)
        if error:
            return to_unprocessable(error)

        try:
            entity = self.definition.build(req.body, self.id_factory(), self.clock())
        except ValidationError as exc:
            return to_unprocessable(validation_message(exc))
        try:
            self.store.insert(self.definition.table, self.definition.mapper.to_row(entity))
        except StoreError as exc:
            return to_internal_error(f"Failed to create {self.definition.label}", exc)
        return to_created(entity)

    def get(self, req: ApiRequest) -> ApiResponse:
        if req.method != "GET":
            return to_method_not_allowed()

        entity_id = req.query.get("id")
        if not is_non_empty_string(entity_id):
            return to_bad_request("id is required")

        loaded = self._load(entity_id)
        if isinstance(loaded, ApiResponse):
            return loaded
        return to_ok(loaded)

    def update(self, req: ApiRequest) -> ApiResponse:
        if req.method not in {"PUT", "PATCH"}:
            return to_method_not_allowed()

        error = self.definition.validate_update(req.body)
        if error:
            return to_unprocessable(error)

        loaded = self._load(req.body["id"])
        if isinstance(loaded, ApiResponse):
            return loaded

        try:
            updated = self.definition.apply_update(loaded, req.body, self.clock())
        except ValidationError as exc:
            return to_unprocessable(validation_message(exc))
        try:
            self.store.update(self.definition.table, updated.id, self.definition.mapper.to_row(updated))
        except StoreError as exc:
            return to_internal_error(f"Failed to update {self.definition.label}", exc)
        return to_ok(updated)

    def delete(self, req: ApiRequest) -> ApiResponse:
        if req.method != "DELETE":
            return to_method_not_allowed()

        error = validate_id_payload(req.body)
        if error:
            return to_unprocessable(error)

        loaded = self._load(req.body["id"])
        if isinstance(loaded, ApiResponse):
            return loaded

        deleted_at = self.clock()
        try:
            if self.definition.soft_delete:
                tombstone = loaded.model_copy(update={"deleted_at": deleted_at, "updated_at": deleted_at})
                self.store.update(self.definition.table, loaded.id, self.definition.mapper.to_row(tombstone))
            else:
                self.store.delete(self.definition.table, loaded.id)
        except StoreError as exc:
            return to_internal_error(f"Failed to delete {self.definition.label}", exc)

        logger.info("Deleted %s %s (soft=%s)", self.definition.label, loaded.id, self.definition.soft_delete)
        return ApiResponse(HttpCodes.OK, {"data": {"id": loaded.id, "deletedAt": deleted_at.isoformat()}})

    def list_page(self, req: ApiRequest) -> ApiResponse:
        if req.method != "GET":
            return to_method_not_allowed()

        limit = clamp_limit(req.query.get("limit"))
        cursor = parse_cursor(req.query.get("cursor"))
        start, end = page_window(cursor, limit)

        try:
            rows, total = self.store.select_page(self.definition.table, start, end)
        except StoreError as exc:
            return to_internal_error(f"Failed to load {self.definition.name}", exc)

        try:
            items = self.definition.mapper.from_rows(rows)
        except MissingFields as exc:
            return to_internal_error(f"Invalid {self.definition.label} record from database", exc)

        page = Page(items, cursor=cursor, limit=limit, total=total)
        return to_list(items, page.next_cursor, page.has_more)

    # ------------------------------------------------------------------
    def _load(self, entity_id: str) -> BaseModel | ApiResponse:
        try:
            row = self.store.get(self.definition.table, entity_id)
        except StoreError as exc:
            return to_internal_error(f"Failed to load {self.definition.label}", exc)
        if row is None:
            return to_not_found(f"{self.definition.entity} not found")
        try:
            return self.definition.mapper.from_row(row)
        except MissingFields as exc:
            return to_internal_error(f"Invalid {self.definition.label} record from database", exc)


__all__ = ["OPERATIONS", "ResourceDefinition", "ResourceRoutes", "new_id", "utc_now", "validation_message"]
