"""Output helpers for the edgecrud CLI."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from pydantic import BaseModel


def _default_serializer(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", by_alias=True)
    if isinstance(value, (set, frozenset)):
        return sorted(value)
    if isinstance(value, tuple):
        return list(value)
    if isinstance(value, Path):
        return str(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def emit(data: Any, fmt: str, output_path: Path | None = None) -> None:
    if fmt == "json":
        rendered = json.dumps(data, indent=2, default=_default_serializer)
    elif fmt == "table":
        rendered = _to_table(data)
    else:
        raise ValueError(f"Unsupported format: {fmt}")

    if output_path:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(rendered + ("\n" if not rendered.endswith("\n") else ""), encoding="utf-8")
    else:
        print(rendered)


def _cell(value: Any) -> str:
    if isinstance(value, (dict, list)):
        return json.dumps(value, default=_default_serializer)
    return str(value)


def _to_table(data: Any) -> str:
    if isinstance(data, list) and data and isinstance(data[0], dict):
        headers = sorted({key for row in data for key in row.keys()})
        widths = {header: max(len(header), *(len(_cell(row.get(header, ""))) for row in data)) for header in headers}
        header_line = " ".join(header.ljust(widths[header]) for header in headers)
        sep_line = " ".join("-" * widths[header] for header in headers)
        rows = [" ".join(_cell(row.get(header, "")).ljust(widths[header]) for header in headers) for row in data]
        return "\n".join([header_line, sep_line, *rows])
    if isinstance(data, dict):
        width = max(len(str(key)) for key in data.keys()) if data else 0
        return "\n".join(f"{str(key).ljust(width)} : {_cell(value)}" for key, value in data.items())
    if isinstance(data, list):
        return "\n".join(_cell(item) for item in data)
    return str(data)


__all__ = ["emit"]
