"""Error serialization tests."""

from __future__ import annotations

import json

from core.errors import MissingFields, StoreError
from core.http.errors import CIRCULAR, extract_error_message, serialize_error, to_safe_json


class Weird:
    def __str__(self) -> str:
        raise RuntimeError("cannot render")


def test_exceptions_keep_their_name():
    assert serialize_error(ValueError("boom")) == {"name": "ValueError", "message": "boom"}
    assert serialize_error(StoreError("down")) == {"name": "StoreError", "message": "down"}


def test_named_error_extra_attributes_are_merged():
    info = serialize_error(MissingFields("User", ["display_name"]))
    assert info["name"] == "MissingFields"
    assert info["entity"] == "User"
    assert info["fields"] == ["display_name"]


def test_non_exception_values():
    assert serialize_error("plain")["message"] == "plain"
    assert serialize_error(None) == {"name": "Error", "message": "Unknown error"}
    assert serialize_error({"name": "Custom", "message": "hi", "code": 7}) == {
        "name": "Custom",
        "message": "hi",
        "code": 7,
    }


def test_cyclic_values_do_not_raise():
    err = ValueError("loop")
    err.context = {"self": None}
    err.context["self"] = err.context
    info = serialize_error(err)
    assert info["context"]["self"] == CIRCULAR
    json.dumps(info)


def test_unprintable_values_fall_back():
    info = serialize_error(Weird())
    assert info["name"] == "Error"
    assert info["message"].startswith("<")


def test_to_safe_json_handles_floats_and_depth():
    assert to_safe_json({"x": float("inf")}) == {"x": "inf"}
    nested: list = [1]
    for _ in range(10):
        nested = [nested]
    assert "[Truncated]" in json.dumps(to_safe_json(nested, max_depth=3))


def test_extract_error_message():
    assert extract_error_message(RuntimeError("x")) == "x"
    assert extract_error_message({"message": "y"}) == "y"
    assert extract_error_message("z") == "z"
