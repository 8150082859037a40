"""Customer resource: construction and update rules."""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Any, Mapping

from apiserver.routes.crud import ResourceDefinition
from core.resources.entities import Contact, Customer
from core.resources.mappings import CUSTOMER_MAPPER
from core.resources.validators import validate_customer_create, validate_customer_update

_ADDRESS_FIELDS = {
    "line1": "line1",
    "city": "city",
    "state": "state",
    "postalCode": "postal_code",
    "country": "country",
}


def build_customer(body: Mapping[str, Any], customer_id: str, now: datetime) -> Customer:
    primary = body["primaryContact"]
    contact = Contact(
        id=str(uuid.uuid4()),
        customer_id=customer_id,
        name=primary["name"].strip(),
        email=primary.get("email"),
        phone=primary.get("phone"),
        preferred_channel=primary.get("preferredChannel"),
        created_at=now,
        updated_at=now,
    )
    line2 = body.get("line2")
    return Customer(
        id=customer_id,
        name=body["name"].strip(),
        status=body.get("status") or "prospect",
        line1=body["line1"].strip(),
        line2=line2.strip() if isinstance(line2, str) and line2.strip() else None,
        city=body["city"].strip(),
        state=body["state"].strip(),
        postal_code=body["postalCode"].strip(),
        country=body["country"].strip(),
        account_manager_id=body.get("accountManagerId"),
        primary_contact_id=contact.id,
        contacts=[contact],
        created_at=now,
        updated_at=now,
    )


def apply_customer_update(current: Customer, body: Mapping[str, Any], now: datetime) -> Customer:
    changes: dict[str, Any] = {"updated_at": now}
    if "name" in body:
        changes["name"] = body["name"].strip()
    if "status" in body:
        changes["status"] = body["status"]
    for key, attribute in _ADDRESS_FIELDS.items():
        if key in body:
            changes[attribute] = body[key].strip()
    if "line2" in body:
        line2 = body["line2"]
        changes["line2"] = line2.strip() if isinstance(line2, str) and line2.strip() else None
    if "accountManagerId" in body:
        changes["account_manager_id"] = body["accountManagerId"]
    if "primaryContactId" in body:
        changes["primary_contact_id"] = body["primaryContactId"]
    return Customer.model_validate({**current.model_dump(), **changes})


CUSTOMERS = ResourceDefinition(
    name="customers",
    table="customers",
    mapper=CUSTOMER_MAPPER,
    validate_create=validate_customer_create,
    validate_update=validate_customer_update,
    build=build_customer,
    apply_update=apply_customer_update,
    soft_delete=True,
)


__all__ = ["CUSTOMERS", "apply_customer_update", "build_customer"]
