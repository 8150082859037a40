"""Row <-> domain mapping with the embedded payload treated as the source of truth."""

from __future__ import annotations

import json
import logging
from typing import Any, Generic, Mapping, Optional, TypeVar, get_args, get_origin

from pydantic import BaseModel, ValidationError

from core.errors import MissingFields

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)

PAYLOAD_COLUMN = "payload"


def _expects_container(annotation: Any) -> bool:
    candidates = (annotation, *get_args(annotation))
    return any(get_origin(candidate) in (list, dict, tuple, set) for candidate in candidates)


def _decode_json(value: Any) -> Any:
    if isinstance(value, (bytes, bytearray)):
        value = value.decode("utf-8", errors="replace")
    if not isinstance(value, str):
        return value
    try:
        return json.loads(value)
    except ValueError:
        return value


class ResourceMapper(Generic[M]):
    """Map one entity type to and from its persisted row.

    ``to_row`` writes a discrete column per model field (snake_case unless
    overridden in ``columns``) plus a ``payload`` column holding the whole
    object. ``from_row`` returns the payload when it validates; otherwise it
    rebuilds the object from the columns, accepting snake_case or camelCase
    names, and raises :class:`MissingFields` naming the entity when that fails.
    """

    def __init__(
        self,
        model: type[M],
        entity: Optional[str] = None,
        columns: Optional[Mapping[str, str]] = None,
    ) -> None:
        self.model = model
        self.entity = entity or model.__name__
        self.columns = {name: name for name in model.model_fields}
        self.columns.update(columns or {})

    def to_row(self, obj: M) -> dict[str, Any]:
        values = obj.model_dump(mode="json")
        row = {self.columns[name]: values.get(name) for name in self.model.model_fields}
        row[PAYLOAD_COLUMN] = obj.model_dump(by_alias=True, mode="json", exclude_none=True)
        return row

    def from_row(self, row: Any) -> M:
        if not isinstance(row, Mapping):
            raise MissingFields(self.entity)

        payload = _decode_json(row.get(PAYLOAD_COLUMN))
        if isinstance(payload, Mapping):
            try:
                return self.model.model_validate(payload)
            except ValidationError as exc:
                logger.debug(
                    "%s payload failed validation, falling back to columns: %s",
                    self.entity,
                    exc.error_count(),
                )

        data = self._collect_columns(row)
        try:
            return self.model.model_validate(data)
        except ValidationError as exc:
            by_alias = {info.alias or name: self.columns[name] for name, info in self.model.model_fields.items()}
            fields = {
                by_alias.get(str(error["loc"][0]), str(error["loc"][0])) for error in exc.errors() if error.get("loc")
            }
            raise MissingFields(self.entity, fields) from exc

    def from_rows(self, rows: list[Any]) -> list[M]:
        return [self.from_row(row) for row in rows]

    def _collect_columns(self, row: Mapping[str, Any]) -> dict[str, Any]:
        data: dict[str, Any] = {}
        for name, info in self.model.model_fields.items():
            for key in (self.columns[name], info.alias, name):
                if key and row.get(key) is not None:
                    value = row[key]
                    if _expects_container(info.annotation):
                        value = _decode_json(value)
                    data[name] = value
                    break
        return data


__all__ = ["PAYLOAD_COLUMN", "ResourceMapper"]
