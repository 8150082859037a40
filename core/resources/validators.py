"""Input validation for create/update payloads.

Each validator returns a human-readable message for the first problem found,
or ``None`` when the payload is acceptable. Handlers turn a message into a
422 response.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional, get_args

from core.resources.entities import USER_ROLES, ContactChannel, CustomerStatus, ServiceCategory, UserStatus

USER_STATUSES = get_args(UserStatus)
SERVICE_CATEGORIES = get_args(ServiceCategory)
CUSTOMER_STATUSES = get_args(CustomerStatus)
CONTACT_CHANNELS = get_args(ContactChannel)


def is_non_empty_string(value: Any) -> bool:
    return isinstance(value, str) and bool(value.strip())


def is_id(value: Any) -> bool:
    return is_non_empty_string(value) and value == value.strip()


def is_id_array(value: Any) -> bool:
    return isinstance(value, list) and all(is_id(item) for item in value)


def is_role_array(value: Any) -> bool:
    return isinstance(value, list) and bool(value) and all(item in USER_ROLES for item in value)


def is_optional_string(value: Any) -> bool:
    return value is None or isinstance(value, str)


def _body(payload: Any) -> Optional[Mapping[str, Any]]:
    return payload if isinstance(payload, Mapping) else None


def validate_id_payload(payload: Any) -> Optional[str]:
    body = _body(payload)
    if body is None or not is_non_empty_string(body.get("id")):
        return "id is required"
    return None


# Users ---------------------------------------------------------------------

ROLES_MESSAGE = f"roles must be a non-empty array of valid roles ({', '.join(USER_ROLES)})"


def validate_user_create(payload: Any) -> Optional[str]:
    body = _body(payload)
    if body is None:
        return "Request body is required"
    if not is_non_empty_string(body.get("displayName")):
        return "displayName is required"
    if not is_non_empty_string(body.get("primaryEmail")):
        return "primaryEmail is required"
    if not is_non_empty_string(body.get("phoneNumber")):
        return "phoneNumber is required"
    if not is_role_array(body.get("roles")):
        return ROLES_MESSAGE
    if body.get("status") is not None and body["status"] not in USER_STATUSES:
        return "status must be active or inactive"
    if not is_optional_string(body.get("avatarUrl")):
        return "avatarUrl must be a string"
    return None


def validate_user_update(payload: Any) -> Optional[str]:
    body = _body(payload)
    if body is None:
        return "Request body is required"
    if not is_non_empty_string(body.get("id")):
        return "id is required"
    for key in ("displayName", "primaryEmail", "phoneNumber"):
        if key in body and not is_non_empty_string(body[key]):
            return f"{key} cannot be empty"
    if "roles" in body and not is_role_array(body["roles"]):
        return ROLES_MESSAGE
    if body.get("status") is not None and body["status"] not in USER_STATUSES:
        return "status must be active or inactive"
    if not is_optional_string(body.get("avatarUrl")):
        return "avatarUrl must be a string"
    return None


# Services ------------------------------------------------------------------


def validate_service_create(payload: Any) -> Optional[str]:
    body = _body(payload)
    if body is None:
        return "Request body is required"
    if not is_non_empty_string(body.get("name")):
        return "name is required"
    if not is_non_empty_string(body.get("sku")):
        return "sku is required"
    if body.get("category") not in SERVICE_CATEGORIES:
        return "category must be aerial-drone-services or ground-machinery-services"
    if not is_id_array(body.get("requiredAssetTypes")):
        return "requiredAssetTypes must be an array of IDs"
    if not is_optional_string(body.get("description")):
        return "description must be a string"
    return None


def validate_service_update(payload: Any) -> Optional[str]:
    body = _body(payload)
    if body is None:
        return "Request body is required"
    if not is_non_empty_string(body.get("id")):
        return "id is required"
    if "name" in body and not is_non_empty_string(body["name"]):
        return "name cannot be empty"
    if "sku" in body and not is_non_empty_string(body["sku"]):
        return "sku cannot be empty"
    if "category" in body and body["category"] not in SERVICE_CATEGORIES:
        return "category must be aerial-drone-services or ground-machinery-services"
    if "requiredAssetTypes" in body and not is_id_array(body["requiredAssetTypes"]):
        return "requiredAssetTypes must be an array of IDs"
    if not is_optional_string(body.get("description")):
        return "description must be a string"
    return None


# Customers -----------------------------------------------------------------

_CUSTOMER_ADDRESS_FIELDS = ("line1", "city", "state", "postalCode", "country")


def _validate_contact(contact: Any) -> Optional[str]:
    if not isinstance(contact, Mapping):
        return "primaryContact is required"
    if not is_non_empty_string(contact.get("name")):
        return "primaryContact.name is required"
    for key in ("email", "phone"):
        if not is_optional_string(contact.get(key)):
            return f"primaryContact.{key} must be a string"
    channel = contact.get("preferredChannel")
    if channel is not None and channel not in CONTACT_CHANNELS:
        return f"primaryContact.preferredChannel must be one of {', '.join(CONTACT_CHANNELS)}"
    return None


def validate_customer_create(payload: Any) -> Optional[str]:
    body = _body(payload)
    if body is None:
        return "Request body is required"
    if not is_non_empty_string(body.get("name")):
        return "name is required"
    if body.get("status") is not None and body["status"] not in CUSTOMER_STATUSES:
        return "status must be active, inactive, or prospect"
    for key in _CUSTOMER_ADDRESS_FIELDS:
        if not is_non_empty_string(body.get(key)):
            return f"{key} is required"
    if not is_optional_string(body.get("line2")):
        return "line2 must be a string"
    if body.get("accountManagerId") is not None and not is_id(body["accountManagerId"]):
        return "accountManagerId must be a valid Id"
    return _validate_contact(body.get("primaryContact"))


def validate_customer_update(payload: Any) -> Optional[str]:
    body = _body(payload)
    if body is None:
        return "Request body is required"
    if not is_non_empty_string(body.get("id")):
        return "id is required"
    if "name" in body and not is_non_empty_string(body["name"]):
        return "name cannot be empty"
    if "status" in body and body["status"] not in CUSTOMER_STATUSES:
        return "status must be active, inactive, or prospect"
    for key in _CUSTOMER_ADDRESS_FIELDS:
        if key in body and not is_non_empty_string(body[key]):
            return f"{key} cannot be empty"
    if not is_optional_string(body.get("line2")):
        return "line2 must be a string"
    for key in ("accountManagerId", "primaryContactId"):
        if key in body and not is_id(body[key]):
            return f"{key} must be a valid Id"
    return None


__all__ = [
    "ROLES_MESSAGE",
    "is_id",
    "is_id_array",
    "is_non_empty_string",
    "is_optional_string",
    "is_role_array",
    "validate_customer_create",
    "validate_customer_update",
    "validate_id_payload",
    "validate_service_create",
    "validate_service_update",
    "validate_user_create",
    "validate_user_update",
]
