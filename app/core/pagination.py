"""Deterministic page arithmetic for offset-based listings.

Usage::

    req = PageRequest.from_query(page=3, limit=150)   # limit clamped to 100
    items, total = await repo.get_page(skip=req.offset, take=req.limit)
    meta = build_meta(req, len(items), total)
    links = build_links("/api/v1/users", req, meta.total_pages)
"""

from dataclasses import dataclass
from math import ceil

from app.schemas.user import PageLinks, PageMeta

MAX_PAGE_SIZE = 100


def clamp_limit(limit: int, max_limit: int = MAX_PAGE_SIZE) -> int:
    """Clamp *limit* into ``[1, max_limit]``."""
    return max(1, min(limit, max_limit))


def normalize_page(page: int) -> int:
    """Pages are 1-based; anything below 1 means the first page."""
    return max(1, page)


def total_pages(total_items: int, limit: int) -> int:
    return ceil(total_items / limit) if limit > 0 else 0


@dataclass(frozen=True)
class PageRequest:
    """A normalized ``(page, limit)`` pair."""

    page: int
    limit: int

    @classmethod
    def from_query(
        cls, page: int = 1, limit: int = 10, max_limit: int = MAX_PAGE_SIZE
    ) -> "PageRequest":
        return cls(page=normalize_page(page), limit=clamp_limit(limit, max_limit))

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


def build_meta(request: PageRequest, item_count: int, total_items: int) -> PageMeta:
    return PageMeta(
        current_page=request.page,
        item_count=item_count,
        items_per_page=request.limit,
        total_items=total_items,
        total_pages=total_pages(total_items, request.limit),
    )


def build_links(route: str, request: PageRequest, pages: int) -> PageLinks:
    """Build first/previous/next/last links off *route*.

    A link that would point outside ``[1, pages]`` is rendered as ``""``.
    """
    page, limit = request.page, request.limit
    return PageLinks(
        first=f"{route}?limit={limit}",
        previous=f"{route}?page={page - 1}&limit={limit}" if page > 1 else "",
        next=f"{route}?page={page + 1}&limit={limit}" if page < pages else "",
        last=f"{route}?page={pages}&limit={limit}" if pages > 0 else "",
    )
