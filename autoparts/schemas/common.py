"""
Shared response schemas.
"""
from typing import Generic, List, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class Page(BaseModel, Generic[T]):
    """One page of a filtered, sorted listing."""
    items: List[T]
    total: int
    page: int
    page_size: int
    pages: int

    @classmethod
    def from_paginated(cls, paginated):
        return cls(
            items=paginated.items,
            total=paginated.total,
            page=paginated.page,
            page_size=paginated.page_size,
            pages=paginated.pages,
        )
