"""Logging configuration tests."""

from __future__ import annotations

import json
import logging

import pytest

from core.observability import bind_request_id, configure_logging, current_request_id, reset_request_id


@pytest.fixture()
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers = handlers
    root.setLevel(level)


def test_json_records_carry_service_and_request_id(restore_root_logger, capsys):
    configure_logging("INFO", service_name="edgecrud-test", fmt="json")
    token = bind_request_id("req-9")
    try:
        logging.getLogger("edgecrud.test").info("hello")
    finally:
        reset_request_id(token)

    record = json.loads(capsys.readouterr().err.strip().splitlines()[-1])
    assert record["message"] == "hello"
    assert record["service"] == "edgecrud-test"
    assert record["request_id"] == "req-9"
    assert record["level"] == "INFO"
    assert record["logger"] == "edgecrud.test"
    assert current_request_id() == ""


def test_invalid_level_is_rejected(restore_root_logger):
    with pytest.raises(ValueError):
        configure_logging("LOUD")
