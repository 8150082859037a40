"""CLI tests."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest

from cli.main import app, build_event


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers = handlers
    root.setLevel(level)


def test_routes_lists_every_resource_operation(tmp_path: Path, capsys):
    assert app(["--config", str(tmp_path / "none.yml"), "routes"]) == 0
    rows = json.loads(capsys.readouterr().out)
    paths = {row["path"] for row in rows}
    assert "/api/users/create" in paths
    assert "/api/customers/list" in paths
    assert len(paths) == 15


def test_config_prints_effective_settings(tmp_path: Path, capsys):
    assert app(["--config", str(tmp_path / "none.yml"), "--format", "table", "config"]) == 0
    out = capsys.readouterr().out
    assert "service_name" in out
    assert "edgecrud" in out


def test_invoke_runs_the_pipeline(tmp_path: Path, capsys):
    body = tmp_path / "body.json"
    body.write_text(json.dumps({"name": ""}), encoding="utf-8")
    code = app(["--config", str(tmp_path / "none.yml"), "invoke", "POST", "/api/services/create", "--body", f"@{body}"])
    assert code == 1
    result = json.loads(capsys.readouterr().out)
    assert result["statusCode"] == 422
    assert result["body"] == {"error": "name is required"}


def test_invoke_with_seed_and_query(tmp_path: Path, capsys):
    seed = tmp_path / "seed.json"
    seed.write_text(json.dumps({"services": []}), encoding="utf-8")
    code = app(
        [
            "--config",
            str(tmp_path / "none.yml"),
            "invoke",
            "GET",
            "/api/services/list",
            "--seed",
            str(seed),
            "--query",
            "limit=5",
        ]
    )
    assert code == 0
    assert json.loads(capsys.readouterr().out)["body"] == {"data": [], "cursor": 0, "hasMore": False}


def test_invoke_rejects_malformed_pairs(tmp_path: Path, capsys):
    code = app(["--config", str(tmp_path / "none.yml"), "invoke", "GET", "/api/users/list", "--query", "oops"])
    assert code == 2
    assert "--query expects KEY=VALUE" in capsys.readouterr().err


def test_build_event_sets_json_content_type():
    event = build_event("post", "/api/users/create", body="{}")
    assert event["httpMethod"] == "POST"
    assert event["headers"] == {"Content-Type": "application/json"}
    assert event["queryStringParameters"] is None
