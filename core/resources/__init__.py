"""Generic resource contract: pagination, row mapping and entity validation."""

from .entities import Contact, Customer, Service, User
from .mapper import ResourceMapper
from .mappings import CUSTOMER_MAPPER, SERVICE_MAPPER, USER_MAPPER
from .pagination import Page, clamp_limit, compute_has_more, page_window, parse_cursor

__all__ = [
    "CUSTOMER_MAPPER",
    "Contact",
    "Customer",
    "Page",
    "ResourceMapper",
    "SERVICE_MAPPER",
    "Service",
    "USER_MAPPER",
    "User",
    "clamp_limit",
    "compute_has_more",
    "page_window",
    "parse_cursor",
]
