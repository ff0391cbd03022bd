"""Unit tests for core/pagination.py."""

import pytest

from app.core.pagination import (
    PageRequest,
    build_links,
    build_meta,
    clamp_limit,
    normalize_page,
    total_pages,
)

ROUTE = "/api/v1/users"


class TestClamping:
    """Tests for limit/page normalization."""

    @pytest.mark.parametrize(
        ("requested", "expected"),
        [(150, 100), (100, 100), (10, 10), (1, 1), (0, 1), (-5, 1)],
    )
    def test_clamp_limit(self, requested, expected):
        assert clamp_limit(requested) == expected

    def test_clamp_limit_custom_max(self):
        assert clamp_limit(60, max_limit=50) == 50

    @pytest.mark.parametrize(("requested", "expected"), [(0, 1), (-3, 1), (1, 1), (4, 4)])
    def test_normalize_page(self, requested, expected):
        assert normalize_page(requested) == expected

    def test_page_request_from_query(self):
        req = PageRequest.from_query(page=0, limit=150)
        assert req == PageRequest(page=1, limit=100)

    def test_offset(self):
        assert PageRequest(page=1, limit=10).offset == 0
        assert PageRequest(page=3, limit=25).offset == 50


class TestTotalPages:
    """Tests for page count arithmetic."""

    @pytest.mark.parametrize(
        ("total", "limit", "expected"),
        [(0, 10, 0), (1, 10, 1), (10, 10, 1), (11, 10, 2), (250, 100, 3)],
    )
    def test_ceil(self, total, limit, expected):
        assert total_pages(total, limit) == expected

    def test_zero_limit(self):
        assert total_pages(5, 0) == 0


class TestBuildMeta:
    """Tests for page metadata."""

    def test_meta_fields(self):
        meta = build_meta(PageRequest(page=2, limit=10), item_count=3, total_items=13)
        assert meta.current_page == 2
        assert meta.item_count == 3
        assert meta.items_per_page == 10
        assert meta.total_items == 13
        assert meta.total_pages == 2

    def test_empty(self):
        meta = build_meta(PageRequest(page=1, limit=10), item_count=0, total_items=0)
        assert meta.total_pages == 0
        assert meta.item_count == 0


class TestBuildLinks:
    """Tests for navigation links."""

    def test_middle_page(self):
        links = build_links(ROUTE, PageRequest(page=2, limit=10), pages=3)
        assert links.first == f"{ROUTE}?limit=10"
        assert links.previous == f"{ROUTE}?page=1&limit=10"
        assert links.next == f"{ROUTE}?page=3&limit=10"
        assert links.last == f"{ROUTE}?page=3&limit=10"

    def test_first_page_has_no_previous(self):
        links = build_links(ROUTE, PageRequest(page=1, limit=10), pages=3)
        assert links.previous == ""
        assert links.next == f"{ROUTE}?page=2&limit=10"

    def test_last_page_has_no_next(self):
        links = build_links(ROUTE, PageRequest(page=3, limit=10), pages=3)
        assert links.next == ""
        assert links.last == f"{ROUTE}?page=3&limit=10"

    def test_no_pages(self):
        links = build_links(ROUTE, PageRequest(page=1, limit=10), pages=0)
        assert links.first == f"{ROUTE}?limit=10"
        assert links.previous == ""
        assert links.next == ""
        assert links.last == ""

    def test_page_beyond_last(self):
        links = build_links(ROUTE, PageRequest(page=7, limit=10), pages=3)
        assert links.previous == f"{ROUTE}?page=6&limit=10"
        assert links.next == ""
