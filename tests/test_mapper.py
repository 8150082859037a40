"""Row mapping tests: the payload column is the source of truth."""

from __future__ import annotations

import json
from datetime import datetime, timezone

import pytest

from core.errors import MissingFields
from core.resources.entities import User
from core.resources.mappings import CUSTOMER_MAPPER, SERVICE_MAPPER, USER_MAPPER

NOW = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


def _user(**overrides) -> User:
    data = dict(
        id="u-1",
        display_name="Ada",
        primary_email="ada@example.com",
        phone_number="555-0100",
        roles=["sales"],
        created_at=NOW,
        updated_at=NOW,
    )
    data.update(overrides)
    return User(**data)


def test_to_row_writes_columns_and_payload():
    row = USER_MAPPER.to_row(_user())
    assert row["display_name"] == "Ada"
    assert row["roles"] == ["sales"]
    assert row["deleted_at"] is None
    assert row["payload"]["displayName"] == "Ada"
    assert "deletedAt" not in row["payload"]


def test_from_row_prefers_payload_over_columns():
    row = USER_MAPPER.to_row(_user())
    row["display_name"] = "Stale column"
    assert USER_MAPPER.from_row(row).display_name == "Ada"


def test_payload_may_be_json_text():
    row = USER_MAPPER.to_row(_user())
    row["payload"] = json.dumps(row["payload"])
    assert USER_MAPPER.from_row(row).model_dump() == _user().model_dump()


def test_falls_back_to_snake_case_columns():
    row = USER_MAPPER.to_row(_user())
    row["payload"] = {"displayName": "broken"}
    user = USER_MAPPER.from_row(row)
    assert user.id == "u-1"
    assert user.primary_email == "ada@example.com"
    assert user.created_at == NOW


def test_falls_back_to_camel_case_columns_and_decodes_json_lists():
    row = {
        "id": "s-1",
        "name": "Survey",
        "sku": "SKU-1",
        "category": "aerial-drone-services",
        "requiredAssetTypes": '["drone"]',
        "payload": None,
    }
    service = SERVICE_MAPPER.from_row(row)
    assert service.required_asset_types == ["drone"]


def test_missing_fields_names_the_entity():
    with pytest.raises(MissingFields) as excinfo:
        USER_MAPPER.from_row({"id": "u-1", "payload": "not json"})
    assert excinfo.value.entity == "User"
    assert "display_name" in excinfo.value.fields
    assert excinfo.value.message.startswith("User row is missing required fields")


def test_non_mapping_row_is_rejected():
    with pytest.raises(MissingFields):
        CUSTOMER_MAPPER.from_row(None)
