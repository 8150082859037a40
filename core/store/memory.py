"""In-process store used for local runs and tests."""

from __future__ import annotations

import copy
from typing import Any, Mapping, Optional

from core.errors import StoreError
from core.store.base import Row

DELETED_COLUMN = "deleted_at"


class MemoryStore:
    """Dict-backed store keeping insertion order per table.

    ``count_mode="none"`` hides the exact total from ``select_page`` so callers
    fall back to the full-page heuristic.
    """

    def __init__(self, tables: Mapping[str, list[Row]] | None = None, count_mode: str = "exact") -> None:
        if count_mode not in {"exact", "none"}:
            raise ValueError("count_mode must be 'exact' or 'none'")
        self.count_mode = count_mode
        self.tables: dict[str, dict[str, Row]] = {}
        for table, rows in (tables or {}).items():
            for row in rows:
                self.insert(table, row)

    def insert(self, table: str, row: Mapping[str, Any]) -> None:
        row_id = row.get("id")
        if not row_id:
            raise StoreError(f"Cannot insert into {table}: row has no id")
        rows = self.tables.setdefault(table, {})
        if row_id in rows:
            raise StoreError(f"duplicate key value violates unique constraint on {table}.id")
        rows[str(row_id)] = copy.deepcopy(dict(row))

    def update(self, table: str, row_id: str, row: Mapping[str, Any]) -> None:
        rows = self.tables.get(table, {})
        if row_id not in rows:
            raise StoreError(f"No row {row_id} in {table}")
        rows[row_id] = copy.deepcopy(dict(row))

    def get(self, table: str, row_id: str, *, include_deleted: bool = False) -> Optional[Row]:
        row = self.tables.get(table, {}).get(row_id)
        if row is None or (not include_deleted and row.get(DELETED_COLUMN)):
            return None
        return copy.deepcopy(row)

    def delete(self, table: str, row_id: str) -> None:
        self.tables.get(table, {}).pop(row_id, None)

    def select_page(
        self,
        table: str,
        start: int,
        end: int,
        *,
        include_deleted: bool = False,
    ) -> tuple[list[Row], Optional[int]]:
        visible = [
            row for row in self.tables.get(table, {}).values() if include_deleted or not row.get(DELETED_COLUMN)
        ]
        window = [copy.deepcopy(row) for row in visible[start : end + 1]]
        total = len(visible) if self.count_mode == "exact" else None
        return window, total


__all__ = ["MemoryStore"]
