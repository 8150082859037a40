"""Contract every table store backend implements."""

from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol

Row = dict[str, Any]


class TableStore(Protocol):
    """Minimal row store used by the CRUD routes.

    ``select_page`` returns the rows of the inclusive ``[start, end]`` window
    and the exact total when the backend can report it, else ``None``.
    Backends raise :class:`core.errors.StoreError` on downstream failures.
    """

    def insert(self, table: str, row: Mapping[str, Any]) -> None: ...

    def update(self, table: str, row_id: str, row: Mapping[str, Any]) -> None: ...

    def get(self, table: str, row_id: str, *, include_deleted: bool = False) -> Optional[Row]: ...

    def delete(self, table: str, row_id: str) -> None: ...

    def select_page(
        self,
        table: str,
        start: int,
        end: int,
        *,
        include_deleted: bool = False,
    ) -> tuple[list[Row], Optional[int]]: ...


__all__ = ["Row", "TableStore"]
