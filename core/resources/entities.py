"""Domain entities persisted by the CRUD handlers."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

USER_ROLES = ("administrator", "sales", "operations")
UserStatus = Literal["active", "inactive"]
ServiceCategory = Literal["aerial-drone-services", "ground-machinery-services"]
CustomerStatus = Literal["active", "inactive", "prospect"]
ContactChannel = Literal["email", "text", "phone"]


class DomainModel(BaseModel):
    """Base model: snake_case attributes, camelCase on the wire and in payloads."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Entity(DomainModel):
    id: str = Field(..., min_length=1)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    deleted_at: Optional[datetime] = None


class User(Entity):
    """System identity with role-based membership."""

    display_name: str = Field(..., min_length=1)
    primary_email: str = Field(..., min_length=1)
    phone_number: str = Field(..., min_length=1)
    avatar_url: Optional[str] = None
    roles: list[str] = Field(default_factory=list)
    status: UserStatus = "active"


class Service(Entity):
    """Sellable operational offering identified by SKU."""

    name: str = Field(..., min_length=1)
    sku: str = Field(..., min_length=1)
    description: Optional[str] = None
    category: ServiceCategory
    required_asset_types: list[str] = Field(default_factory=list)
    notes: list[dict[str, Any]] = Field(default_factory=list)


class Contact(DomainModel):
    id: str = Field(..., min_length=1)
    customer_id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    email: Optional[str] = None
    phone: Optional[str] = None
    preferred_channel: Optional[ContactChannel] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class Customer(Entity):
    """Customer account; must always carry at least one contact."""

    name: str = Field(..., min_length=1)
    status: CustomerStatus
    line1: str = Field(..., min_length=1)
    line2: Optional[str] = None
    city: str = Field(..., min_length=1)
    state: str = Field(..., min_length=1)
    postal_code: str = Field(..., min_length=1)
    country: str = Field(..., min_length=1)
    account_manager_id: Optional[str] = None
    primary_contact_id: Optional[str] = None
    sites: list[dict[str, Any]] = Field(default_factory=list)
    contacts: list[Contact] = Field(..., min_length=1)
    notes: list[dict[str, Any]] = Field(default_factory=list)


__all__ = [
    "Contact",
    "Customer",
    "DomainModel",
    "Entity",
    "Service",
    "USER_ROLES",
    "User",
]
