"""API routes."""

from .crud import OPERATIONS, ResourceRoutes, ResourceDefinition
from .customers import CUSTOMERS
from .services import SERVICES
from .users import USERS

RESOURCES = (USERS, SERVICES, CUSTOMERS)

__all__ = ["CUSTOMERS", "OPERATIONS", "RESOURCES", "ResourceRoutes", "ResourceDefinition", "SERVICES", "USERS"]
