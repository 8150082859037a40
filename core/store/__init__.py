"""Table store backends and the boot-time factory."""

from __future__ import annotations

from typing import Any

from core.config import StoreSettings
from core.errors import ConfigError

from .base import Row, TableStore
from .memory import MemoryStore
from .rds_data import RdsDataStore


def build_store(settings: StoreSettings, client: Any | None = None) -> TableStore:
    """Construct the store handle once; callers pass it into every handler."""
    if settings.backend == "memory":
        return MemoryStore()
    missing = [
        name
        for name, value in (
            ("resource_arn", settings.resource_arn),
            ("secret_arn", settings.secret_arn),
            ("database", settings.database),
        )
        if not value
    ]
    if missing:
        raise ConfigError(f"rds-data store requires: {', '.join(missing)}")
    return RdsDataStore(
        resource_arn=settings.resource_arn,
        secret_arn=settings.secret_arn,
        database=settings.database,
        client=client,
    )


__all__ = ["MemoryStore", "RdsDataStore", "Row", "TableStore", "build_store"]
