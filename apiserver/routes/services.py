"""Service resource: construction and update rules."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Mapping

from apiserver.routes.crud import ResourceDefinition
from core.resources.entities import Service
from core.resources.mappings import SERVICE_MAPPER
from core.resources.validators import validate_service_create, validate_service_update


def build_service(body: Mapping[str, Any], service_id: str, now: datetime) -> Service:
    description = body.get("description")
    return Service(
        id=service_id,
        name=body["name"].strip(),
        sku=body["sku"].strip(),
        description=description.strip() if isinstance(description, str) else None,
        category=body["category"],
        required_asset_types=list(body["requiredAssetTypes"]),
        created_at=now,
        updated_at=now,
    )


def apply_service_update(current: Service, body: Mapping[str, Any], now: datetime) -> Service:
    changes: dict[str, Any] = {"updated_at": now}
    if "name" in body:
        changes["name"] = body["name"].strip()
    if "sku" in body:
        changes["sku"] = body["sku"].strip()
    if "description" in body:
        description = body["description"]
        changes["description"] = description.strip() if isinstance(description, str) else None
    if "category" in body:
        changes["category"] = body["category"]
    if "requiredAssetTypes" in body:
        changes["required_asset_types"] = list(body["requiredAssetTypes"])
    return Service.model_validate({**current.model_dump(), **changes})


# Services are hard-deleted; there is no tombstone for offerings.
SERVICES = ResourceDefinition(
    name="services",
    table="services",
    mapper=SERVICE_MAPPER,
    validate_create=validate_service_create,
    validate_update=validate_service_update,
    build=build_service,
    apply_update=apply_service_update,
    soft_delete=False,
)


__all__ = ["SERVICES", "apply_service_update", "build_service"]
