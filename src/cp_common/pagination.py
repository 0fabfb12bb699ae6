"""Page/limit pagination shared by list endpoints."""

import math
from typing import Any

from pydantic import BaseModel, Field


class PageParams(BaseModel):
    page: int = Field(1, ge=1)
    limit: int = Field(10, ge=1, le=100)

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


class Page(BaseModel):
    items: list[Any]
    total: int
    page: int
    limit: int
    total_pages: int

    @classmethod
    def build(cls, items: list[Any], total: int, params: PageParams) -> "Page":
        return cls(
            items=items,
            total=total,
            page=params.page,
            limit=params.limit,
            total_pages=math.ceil(total / params.limit) if total else 0,
        )
