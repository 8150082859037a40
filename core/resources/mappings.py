"""Row mappers for every persisted entity."""

from __future__ import annotations

from core.resources.entities import Customer, Service, User
from core.resources.mapper import ResourceMapper

USER_MAPPER: ResourceMapper[User] = ResourceMapper(User, entity="User")
SERVICE_MAPPER: ResourceMapper[Service] = ResourceMapper(Service, entity="Service")
CUSTOMER_MAPPER: ResourceMapper[Customer] = ResourceMapper(Customer, entity="Customer")


__all__ = ["CUSTOMER_MAPPER", "SERVICE_MAPPER", "USER_MAPPER"]
