"""Command line interface for running edgecrud routes locally."""

from __future__ import annotations

import argparse
import json
import sys
from dataclasses import asdict
from pathlib import Path
from typing import Any, Iterable, Mapping

from apiserver.app import AppContext, build_context, dispatch
from cli import output
from core.config import Settings, load_settings
from core.errors import ConfigError, StoreError
from core.observability import configure_logging
from core.store import MemoryStore, build_store


class CLIError(Exception):
    def __init__(self, message: str, exit_code: int = 2) -> None:
        super().__init__(message)
        self.exit_code = exit_code


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="edgecrud", description="Serverless CRUD handlers, run locally")
    parser.add_argument("--config", type=Path, default=Path("edgecrud.yml"), help="Path to configuration file")
    parser.add_argument("--format", choices=["json", "table"], default="json", help="Output format")

    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("routes", help="List registered routes")
    subparsers.add_parser("config", help="Print effective settings")

    invoke_cmd = subparsers.add_parser("invoke", help="Run one request through the adapter pipeline")
    invoke_cmd.add_argument("method")
    invoke_cmd.add_argument("path")
    invoke_cmd.add_argument("--body", help="JSON text, or @path to read it from a file")
    invoke_cmd.add_argument("--query", action="append", default=[], metavar="KEY=VALUE")
    invoke_cmd.add_argument("--header", action="append", default=[], metavar="KEY=VALUE")
    invoke_cmd.add_argument("--seed", type=Path, help="JSON file of {table: [rows]} preloaded into the memory store")
    invoke_cmd.add_argument("--output", type=Path)

    return parser


def app(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = load_settings(args.config)
        if args.command == "config":
            return _cmd_config(settings, args.format)
        if args.command == "routes":
            return _cmd_routes(build_context(settings, MemoryStore()), args.format)
        if args.command == "invoke":
            return _cmd_invoke(args, settings)
    except CLIError as exc:
        print(exc, file=sys.stderr)
        return exc.exit_code
    except (ConfigError, StoreError) as exc:
        print(f"{exc.name}: {exc.message}", file=sys.stderr)
        return 2
    return 0


# ---------------------------------------------------------------------------
# Command implementations


def _cmd_config(settings: Settings, fmt: str) -> int:
    output.emit(asdict(settings), fmt)
    return 0


def _cmd_routes(app_context: AppContext, fmt: str) -> int:
    rows = [{"path": path, "handler": adapter.name} for path, adapter in sorted(app_context.routes.items())]
    output.emit(rows, fmt)
    return 0


def _cmd_invoke(args: argparse.Namespace, settings: Settings) -> int:
    configure_logging(settings.log_level, settings.service_name, settings.log_format)
    if args.seed:
        if settings.store.backend != "memory":
            raise CLIError("--seed only applies to the memory store")
        store = MemoryStore(tables=_load_seed(args.seed))
    else:
        store = build_store(settings.store)

    event = build_event(
        args.method,
        args.path,
        body=_read_body(args.body),
        query=_pairs(args.query, "--query"),
        headers=_pairs(args.header, "--header"),
    )
    response = dispatch(build_context(settings, store), event, None)
    output.emit(_decoded(response), args.format, output_path=args.output)
    return 0 if response["statusCode"] < 400 else 1


# ---------------------------------------------------------------------------
# Helpers


def build_event(
    method: str,
    path: str,
    body: str | None = None,
    query: Mapping[str, str] | None = None,
    headers: Mapping[str, str] | None = None,
) -> dict[str, Any]:
    """Assemble a REST-style proxy event like API Gateway would deliver."""
    event_headers = dict(headers or {})
    if body is not None and not any(key.lower() == "content-type" for key in event_headers):
        event_headers["Content-Type"] = "application/json"
    return {
        "httpMethod": method.upper(),
        "path": path,
        "headers": event_headers,
        "queryStringParameters": dict(query) if query else None,
        "body": body,
        "isBase64Encoded": False,
    }


def _read_body(value: str | None) -> str | None:
    if value is None:
        return None
    if value.startswith("@"):
        path = Path(value[1:])
        if not path.exists():
            raise CLIError(f"Body file not found: {path}")
        return path.read_text(encoding="utf-8")
    return value


def _pairs(values: Iterable[str], flag: str) -> dict[str, str]:
    pairs: dict[str, str] = {}
    for item in values:
        key, sep, value = item.partition("=")
        if not sep or not key:
            raise CLIError(f"{flag} expects KEY=VALUE, got {item!r}")
        pairs[key] = value
    return pairs


def _load_seed(path: Path) -> dict[str, list[dict[str, Any]]]:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        raise CLIError(f"Could not read seed file {path}: {exc}") from exc
    if not isinstance(data, dict) or not all(isinstance(rows, list) for rows in data.values()):
        raise CLIError("Seed file must map table names to lists of rows")
    return data


def _decoded(response: Mapping[str, Any]) -> dict[str, Any]:
    body = response.get("body") or ""
    try:
        parsed: Any = json.loads(body) if body else None
    except ValueError:
        parsed = body
    return {"statusCode": response["statusCode"], "headers": response.get("headers", {}), "body": parsed}


def main() -> None:
    raise SystemExit(app())


if __name__ == "__main__":
    main()
