"""Store backend tests, including the RDS Data API SQL shape."""

from __future__ import annotations

import json

import pytest
from botocore.exceptions import ClientError

from core.config import StoreSettings
from core.errors import ConfigError, StoreError
from core.store import MemoryStore, RdsDataStore, build_store


class DummyRdsClient:
    def __init__(self, records: list[list[dict]] | None = None, error: Exception | None = None) -> None:
        self.calls: list[dict[str, object]] = []
        self.records = list(records or [])
        self.error = error

    def execute_statement(self, **kwargs):  # type: ignore[no-untyped-def]
        self.calls.append(kwargs)
        if self.error:
            raise self.error
        batch = self.records.pop(0) if self.records else []
        return {"formattedRecords": json.dumps(batch)}


def _rds(client: DummyRdsClient) -> RdsDataStore:
    return RdsDataStore(resource_arn="arn:cluster", secret_arn="arn:secret", database="app", client=client)


def test_memory_store_crud_and_soft_delete_visibility():
    store = MemoryStore()
    store.insert("users", {"id": "1", "deleted_at": None})
    store.insert("users", {"id": "2", "deleted_at": "2024-01-01T00:00:00Z"})

    assert store.get("users", "1") == {"id": "1", "deleted_at": None}
    assert store.get("users", "2") is None
    assert store.get("users", "2", include_deleted=True)["id"] == "2"

    rows, total = store.select_page("users", 0, 9)
    assert [row["id"] for row in rows] == ["1"]
    assert total == 1

    with pytest.raises(StoreError):
        store.insert("users", {"id": "1"})
    with pytest.raises(StoreError):
        store.update("users", "missing", {"id": "missing"})

    store.delete("users", "1")
    assert store.get("users", "1") is None


def test_memory_store_returns_copies():
    store = MemoryStore({"t": [{"id": "1", "tags": ["a"]}]})
    row = store.get("t", "1")
    row["tags"].append("b")
    assert store.get("t", "1")["tags"] == ["a"]


def test_memory_store_can_hide_count():
    store = MemoryStore({"t": [{"id": str(i)} for i in range(5)]}, count_mode="none")
    rows, total = store.select_page("t", 3, 7)
    assert [row["id"] for row in rows] == ["3", "4"]
    assert total is None


def test_rds_insert_uses_typed_parameters():
    client = DummyRdsClient()
    _rds(client).insert(
        "users",
        {"id": "1", "roles": ["sales"], "created_at": "2024-05-01T12:00:00Z", "deleted_at": None, "active": True},
    )
    call = client.calls[0]
    assert call["sql"] == (
        'INSERT INTO "users" ("id", "roles", "created_at", "deleted_at", "active") '
        "VALUES (:id, :roles, :created_at, :deleted_at, :active)"
    )
    assert call["formatRecordsAs"] == "JSON"
    params = {param["name"]: param for param in call["parameters"]}
    assert params["roles"] == {"name": "roles", "value": {"stringValue": '["sales"]'}, "typeHint": "JSON"}
    assert params["created_at"]["typeHint"] == "TIMESTAMP"
    assert params["created_at"]["value"] == {"stringValue": "2024-05-01 12:00:00.000"}
    assert params["deleted_at"]["value"] == {"isNull": True}
    assert params["active"]["value"] == {"booleanValue": True}


def test_rds_get_hides_deleted_rows():
    client = DummyRdsClient(records=[[{"id": "1", "payload": "{}"}]])
    row = _rds(client).get("users", "1")
    assert row == {"id": "1", "payload": "{}"}
    assert client.calls[0]["sql"] == 'SELECT * FROM "users" WHERE "id" = :row_id AND "deleted_at" IS NULL LIMIT 1'


def test_rds_select_page_runs_window_and_count():
    client = DummyRdsClient(records=[[{"id": "a"}, {"id": "b"}], [{"total": 12}]])
    rows, total = _rds(client).select_page("services", 10, 19)
    assert [row["id"] for row in rows] == ["a", "b"]
    assert total == 12
    window, count = client.calls
    assert "ORDER BY \"created_at\", \"id\" LIMIT :limit OFFSET :offset" in window["sql"]
    assert {param["name"]: param["value"] for param in window["parameters"]} == {
        "limit": {"longValue": 10},
        "offset": {"longValue": 10},
    }
    assert count["sql"] == 'SELECT count(*) AS total FROM "services" WHERE "deleted_at" IS NULL'


def test_rds_errors_become_store_errors():
    error = ClientError({"Error": {"Code": "BadRequestException", "Message": "nope"}}, "ExecuteStatement")
    with pytest.raises(StoreError):
        _rds(DummyRdsClient(error=error)).delete("users", "1")


def test_rds_rejects_unsafe_identifiers():
    with pytest.raises(StoreError):
        _rds(DummyRdsClient()).get('users"; drop table users; --', "1")


def test_build_store():
    assert isinstance(build_store(StoreSettings()), MemoryStore)
    with pytest.raises(ConfigError):
        build_store(StoreSettings(backend="rds-data", resource_arn="arn:cluster"))
    store = build_store(
        StoreSettings(backend="rds-data", resource_arn="arn:cluster", secret_arn="arn:secret", database="app"),
        client=DummyRdsClient(),
    )
    assert isinstance(store, RdsDataStore)
