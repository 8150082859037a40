"""Pagination contract tests."""

from __future__ import annotations

from core.resources.pagination import Page, clamp_limit, compute_has_more, page_window, parse_cursor


def test_clamp_limit():
    assert clamp_limit(None) == 25
    assert clamp_limit("0") == 25
    assert clamp_limit("-5") == 25
    assert clamp_limit("abc") == 25
    assert clamp_limit("10abc") == 10
    assert clamp_limit("3.7") == 3
    assert clamp_limit("+7") == 7
    assert clamp_limit("1") == 1
    assert clamp_limit(" 40 ") == 40
    assert clamp_limit("500") == 100


def test_parse_cursor():
    assert parse_cursor(None) == 0
    assert parse_cursor("-1") == 0
    assert parse_cursor("x") == 0
    assert parse_cursor("30") == 30
    assert parse_cursor(7) == 7
    assert parse_cursor("42x") == 42
    assert parse_cursor(" 12.9 ") == 12


def test_page_window_is_inclusive():
    assert page_window(10, 100) == (10, 109)
    assert page_window(0, 1) == (0, 0)


def test_has_more_prefers_exact_count():
    assert compute_has_more(10, 5, 100, total=15) is False
    assert compute_has_more(0, 25, 25, total=25) is False
    assert compute_has_more(0, 25, 25, total=26) is True


def test_has_more_heuristic_without_count():
    assert compute_has_more(0, 25, 25) is True
    assert compute_has_more(0, 24, 25) is False


def test_page_body_reports_next_cursor():
    page = Page(items=["a", "b"], cursor=4, limit=2, total=10)
    assert page.to_body() == {"data": ["a", "b"], "cursor": 6, "hasMore": True}
