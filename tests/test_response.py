"""Response builder and CORS policy tests."""

from __future__ import annotations

import json

from core.config import AdapterConfig, CorsOptions
from core.http.cors import build_cors_headers, is_preflight
from core.http.response import build_error_response, build_response


def test_json_body_gets_content_type():
    response = build_response(200, {"data": {"id": "1"}})
    assert response == {
        "statusCode": 200,
        "headers": {"content-type": "application/json"},
        "body": '{"data": {"id": "1"}}',
    }


def test_none_body_serializes_to_null():
    assert build_response(200)["body"] == "null"


def test_no_body_statuses_return_empty_string():
    config = AdapterConfig(cors=True)
    response = build_response(204, {"data": 1}, {"X-Extra": "1"}, config)
    assert response["body"] == ""
    assert response["headers"]["x-extra"] == "1"
    assert response["headers"]["access-control-allow-origin"] == "*"
    assert "content-type" not in response["headers"]
    assert build_response(304, None)["body"] == ""


def test_caller_headers_override_cors_headers():
    config = AdapterConfig(cors=True)
    response = build_response(200, {"data": 1}, {"Access-Control-Allow-Origin": "https://app.example"}, config)
    assert response["headers"]["access-control-allow-origin"] == "https://app.example"


def test_unserializable_body_becomes_invalid_response():
    cyclic: dict = {}
    cyclic["self"] = cyclic
    for body in ({"data": object()}, {"data": float("nan")}, cyclic):
        response = build_response(200, body)
        assert response["statusCode"] == 500
        assert json.loads(response["body"])["error"] == "InvalidResponse"


def test_custom_content_type_requires_string_body():
    ok = build_response(200, "a,b", {"Content-Type": "text/csv"})
    assert ok["body"] == "a,b"
    assert ok["headers"] == {"content-type": "text/csv"}

    bad = build_response(200, {"rows": []}, {"Content-Type": "text/csv"})
    assert bad["statusCode"] == 500
    assert json.loads(bad["body"]) == {
        "error": "InvalidResponse",
        "details": "Non-JSON responses must provide a string body",
    }


def test_error_response_omits_empty_details():
    assert json.loads(build_error_response(404, "Route not found")["body"]) == {"error": "Route not found"}
    assert json.loads(build_error_response(400, "InvalidJSON", "bad")["body"]) == {
        "error": "InvalidJSON",
        "details": "bad",
    }


def test_cors_headers():
    assert build_cors_headers(False) == {}
    default = build_cors_headers(True)
    assert default["access-control-allow-methods"] == "GET, POST, PUT, PATCH, DELETE, OPTIONS"
    assert default["vary"] == "Origin"
    assert "access-control-allow-credentials" not in default

    custom = build_cors_headers(CorsOptions(origin="https://app.example", headers=("X-Api-Key",), credentials=True))
    assert custom["access-control-allow-origin"] == "https://app.example"
    assert custom["access-control-allow-headers"] == "X-Api-Key"
    assert custom["access-control-allow-credentials"] == "true"


def test_preflight_only_when_cors_enabled():
    assert is_preflight("OPTIONS", AdapterConfig(cors=True))
    assert not is_preflight("OPTIONS", AdapterConfig())
    assert not is_preflight("GET", AdapterConfig(cors=True))


def test_out_of_range_status_becomes_invalid_response():
    for status in (999, 99, True, "200"):
        response = build_response(status, {"data": 1})
        assert response["statusCode"] == 500
        body = json.loads(response["body"])
        assert body["error"] == "InvalidResponse"
        assert body["details"] == f"Invalid status code {status!r}"
