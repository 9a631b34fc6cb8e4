"""Page/limit pagination shared by list endpoints."""

from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(slots=True, frozen=True)
class PageRequest:
    page: int = 1
    limit: int = 10

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


@dataclass(slots=True, frozen=True)
class Pagination:
    page: int
    limit: int
    total: int
    pages: int
    has_next: bool
    has_prev: bool

    @classmethod
    def build(cls, request: PageRequest, total: int, returned: int) -> "Pagination":
        return cls(
            page=request.page,
            limit=request.limit,
            total=total,
            pages=math.ceil(total / request.limit) if request.limit else 0,
            has_next=request.offset + returned < total,
            has_prev=request.page > 1,
        )
