"""Pagination query, metadata and paged result schemas."""
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, field_validator

T = TypeVar("T")


class PaginationQuery(BaseModel):
    """
    List parameters as received from the caller.

    `page` and `limit` are kept raw-ish: values that do not parse as integers
    become None and fall back to the defaults in `validate_pagination`, they
    never fail the request.
    """

    page: int | None = None
    limit: int | None = None
    search: str | None = None
    sort_by: str | None = None
    sort_order: str | None = None

    @field_validator("page", "limit", mode="before")
    @classmethod
    def lenient_int(cls, value: Any) -> int | None:
        if value is None or isinstance(value, bool):
            return None
        if isinstance(value, int):
            return value
        try:
            return int(str(value).strip())
        except ValueError:
            return None

    @property
    def search_term(self) -> str | None:
        """Trimmed search term, or None when there is nothing to search for."""
        if self.search is None:
            return None
        term = self.search.strip()
        return term or None

    @property
    def descending(self) -> bool:
        return (self.sort_order or "").strip().upper() == "DESC"


class PaginationMeta(BaseModel):
    total: int
    page: int
    limit: int
    total_pages: int
    has_next: bool
    has_prev: bool


class Page(BaseModel, Generic[T]):
    """One page of a list result: `{data: [...], pagination: {...}}`."""

    data: list[T]
    pagination: PaginationMeta
