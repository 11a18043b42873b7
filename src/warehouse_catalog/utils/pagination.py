"""
Pagination arithmetic.

Pure functions, no I/O. Out-of-range input is corrected, never rejected:

| Input               | Result                  |
| ------------------- | ----------------------- |
| page None / < 1     | 1                       |
| limit None          | DEFAULT_LIMIT (20)      |
| limit < 1           | 1                       |
| limit > 100         | MAX_LIMIT (100)         |
"""
from ..schemas.pagination import PaginationMeta, PaginationQuery

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 20
MIN_LIMIT = 1
MAX_LIMIT = 100


def normalize_page(page: int | None) -> int:
    if page is None:
        return DEFAULT_PAGE
    return max(page, 1)


def clamp_limit(limit: int | None) -> int:
    if limit is None:
        return DEFAULT_LIMIT
    return min(max(limit, MIN_LIMIT), MAX_LIMIT)


def validate_pagination(query: PaginationQuery | None) -> tuple[int, int]:
    """Return the effective `(page, limit)` for a list query."""
    if query is None:
        return DEFAULT_PAGE, DEFAULT_LIMIT
    return normalize_page(query.page), clamp_limit(query.limit)


def calculate_offset(page: int, limit: int) -> int:
    return (max(page, 1) - 1) * max(limit, 1)


def calculate_total_pages(total: int, limit: int) -> int:
    """Ceiling of total / limit; 0 when limit is not positive."""
    if limit <= 0:
        return 0
    return (total + limit - 1) // limit


def build_pagination_meta(total: int, page: int, limit: int) -> PaginationMeta:
    total_pages = calculate_total_pages(total, limit)
    return PaginationMeta(
        total=total,
        page=page,
        limit=limit,
        total_pages=total_pages,
        has_next=page < total_pages,
        has_prev=page > 1,
    )


__all__ = [
    "DEFAULT_PAGE",
    "DEFAULT_LIMIT",
    "MAX_LIMIT",
    "normalize_page",
    "clamp_limit",
    "validate_pagination",
    "calculate_offset",
    "calculate_total_pages",
    "build_pagination_meta",
]
