"""User resource: construction and update rules."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Mapping

from apiserver.routes.crud import ResourceDefinition
from core.resources.entities import User
from core.resources.mappings import USER_MAPPER
from core.resources.validators import validate_user_create, validate_user_update


def _trimmed(value: Any) -> Any:
    return value.strip() if isinstance(value, str) else value


def build_user(body: Mapping[str, Any], user_id: str, now: datetime) -> User:
    return User(
        id=user_id,
        display_name=body["displayName"].strip(),
        primary_email=body["primaryEmail"].strip(),
        phone_number=body["phoneNumber"].strip(),
        avatar_url=_trimmed(body.get("avatarUrl")) or None,
        roles=list(body["roles"]),
        status=body.get("status") or "active",
        created_at=now,
        updated_at=now,
    )


def apply_user_update(current: User, body: Mapping[str, Any], now: datetime) -> User:
    changes: dict[str, Any] = {"updated_at": now}
    if body.get("displayName") is not None:
        changes["display_name"] = body["displayName"].strip()
    if body.get("primaryEmail") is not None:
        changes["primary_email"] = body["primaryEmail"].strip()
    if body.get("phoneNumber") is not None:
        changes["phone_number"] = body["phoneNumber"].strip()
    # An explicit null clears the avatar.
    if "avatarUrl" in body:
        changes["avatar_url"] = _trimmed(body["avatarUrl"]) or None
    if "roles" in body:
        changes["roles"] = list(body["roles"])
    if body.get("status") is not None:
        changes["status"] = body["status"]
    return User.model_validate({**current.model_dump(), **changes})


USERS = ResourceDefinition(
    name="users",
    table="users",
    mapper=USER_MAPPER,
    validate_create=validate_user_create,
    validate_update=validate_user_update,
    build=build_user,
    apply_update=apply_user_update,
    soft_delete=True,
)


__all__ = ["USERS", "apply_user_update", "build_user"]
