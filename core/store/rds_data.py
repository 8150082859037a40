"""Aurora Data API backend (``boto3`` ``rds-data``) for the table store."""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Mapping, Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from core.errors import StoreError
from core.store.base import Row

logger = logging.getLogger(__name__)

_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")
DELETED_COLUMN = "deleted_at"
ORDER_BY = ('"created_at"', '"id"')
TIMESTAMP_COLUMNS = frozenset({"created_at", "updated_at", "deleted_at"})


def _quote(identifier: str) -> str:
    if not _IDENTIFIER.match(identifier):
        raise StoreError(f"Unsafe SQL identifier: {identifier!r}")
    return f'"{identifier}"'


def _parameter(name: str, value: Any) -> dict[str, Any]:
    if value is None:
        field: dict[str, Any] = {"isNull": True}
    elif isinstance(value, bool):
        field = {"booleanValue": value}
    elif isinstance(value, int):
        field = {"longValue": value}
    elif isinstance(value, float):
        field = {"doubleValue": value}
    elif isinstance(value, (dict, list)):
        return {"name": name, "value": {"stringValue": json.dumps(value)}, "typeHint": "JSON"}
    elif name in TIMESTAMP_COLUMNS and isinstance(value, (str, datetime)):
        return {"name": name, "value": {"stringValue": _timestamp(value)}, "typeHint": "TIMESTAMP"}
    else:
        field = {"stringValue": str(value)}
    return {"name": name, "value": field}


def _timestamp(value: str | datetime) -> str:
    # Data API wants "YYYY-MM-DD HH:MM:SS[.FFF]" in UTC, no offset.
    try:
        moment = datetime.fromisoformat(value) if isinstance(value, str) else value
    except ValueError as exc:
        raise StoreError(f"Invalid timestamp value: {value!r}") from exc
    if moment.tzinfo is not None:
        moment = moment.astimezone(timezone.utc).replace(tzinfo=None)
    return moment.strftime("%Y-%m-%d %H:%M:%S.%f")[:-3]


@dataclass(slots=True)
class RdsDataStore:
    """Run parameterised SQL through the RDS Data API.

    The client is created once when the store is built at boot and reused by
    every invocation of the Lambda sandbox.
    """

    resource_arn: str
    secret_arn: str
    database: str
    client: Any | None = None

    def __post_init__(self) -> None:
        if self.client is None:
            self.client = boto3.client("rds-data")

    def insert(self, table: str, row: Mapping[str, Any]) -> None:
        columns = list(row)
        sql = "INSERT INTO {table} ({columns}) VALUES ({values})".format(
            table=_quote(table),
            columns=", ".join(_quote(column) for column in columns),
            values=", ".join(f":{column}" for column in columns),
        )
        self._execute(sql, [_parameter(column, row[column]) for column in columns])

    def update(self, table: str, row_id: str, row: Mapping[str, Any]) -> None:
        columns = [column for column in row if column != "id"]
        sql = "UPDATE {table} SET {assignments} WHERE \"id\" = :row_id".format(
            table=_quote(table),
            assignments=", ".join(f"{_quote(column)} = :{column}" for column in columns),
        )
        parameters = [_parameter(column, row[column]) for column in columns]
        parameters.append(_parameter("row_id", row_id))
        self._execute(sql, parameters)

    def get(self, table: str, row_id: str, *, include_deleted: bool = False) -> Optional[Row]:
        sql = f'SELECT * FROM {_quote(table)} WHERE "id" = :row_id'
        if not include_deleted:
            sql += f" AND {_quote(DELETED_COLUMN)} IS NULL"
        records = self._execute(sql + " LIMIT 1", [_parameter("row_id", row_id)])
        return records[0] if records else None

    def delete(self, table: str, row_id: str) -> None:
        self._execute(f'DELETE FROM {_quote(table)} WHERE "id" = :row_id', [_parameter("row_id", row_id)])

    def select_page(
        self,
        table: str,
        start: int,
        end: int,
        *,
        include_deleted: bool = False,
    ) -> tuple[list[Row], Optional[int]]:
        where = "" if include_deleted else f" WHERE {_quote(DELETED_COLUMN)} IS NULL"
        limit = max(end - start + 1, 0)
        rows = self._execute(
            f"SELECT * FROM {_quote(table)}{where} ORDER BY {', '.join(ORDER_BY)} LIMIT :limit OFFSET :offset",
            [_parameter("limit", limit), _parameter("offset", start)],
        )
        counted = self._execute(f"SELECT count(*) AS total FROM {_quote(table)}{where}", [])
        total = counted[0].get("total") if counted else None
        return rows, int(total) if total is not None else None

    # ------------------------------------------------------------------
    def _execute(self, sql: str, parameters: list[dict[str, Any]]) -> list[Row]:
        try:
            response = self.client.execute_statement(
                resourceArn=self.resource_arn,
                secretArn=self.secret_arn,
                database=self.database,
                sql=sql,
                parameters=parameters,
                formatRecordsAs="JSON",
            )
        except (BotoCoreError, ClientError) as exc:
            logger.error("RDS Data API call failed: %s", exc)
            raise StoreError(str(exc)) from exc

        formatted = response.get("formattedRecords")
        if not formatted:
            return []
        try:
            records = json.loads(formatted)
        except ValueError as exc:
            raise StoreError(f"RDS Data API returned malformed records: {exc}") from exc
        return [record for record in records if isinstance(record, dict)]


__all__ = ["RdsDataStore"]
