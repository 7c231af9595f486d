"""
Pagination policy shared by every list endpoint.

``page`` is 1-based; anything below 1 is treated as the first page when
computing the offset.  ``page_size`` is taken as-is: a size of 0 is a
legal request that yields an empty page and ``total_pages == 0``.
"""

from __future__ import annotations

from typing import Any, List

from pydantic import BaseModel, Field


def total_pages(total: int, limit: int) -> int:
    """``ceil(total / limit)``, defined as 0 when ``limit`` is 0."""
    if limit <= 0:
        return 0
    return -(-total // limit)


class Pagination(BaseModel):
    page: int = 1
    page_size: int = Field(10, ge=0)

    def offset(self) -> int:
        return (max(self.page, 1) - 1) * self.page_size

    def limit(self) -> int:
        return self.page_size


class PageInfo(BaseModel):
    page: int
    page_size: int
    total: int
    total_pages: int

    @classmethod
    def build(cls, pagination: Pagination, total: int) -> "PageInfo":
        return cls(
            page=pagination.page,
            page_size=pagination.page_size,
            total=total,
            total_pages=total_pages(total, pagination.limit()),
        )


class PagedResult(BaseModel):
    list: List[Any] = Field(default_factory=list)
    pagination: PageInfo
