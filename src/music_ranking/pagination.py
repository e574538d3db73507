"""Offset pagination for list endpoints."""

import math
from dataclasses import dataclass, field
from typing import Any

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession


@dataclass
class Page:
    """One page of results plus the numbers the API exposes as ``meta``."""

    items: list[Any] = field(default_factory=list)
    total: int = 0
    page: int = 1
    per_page: int = 15

    @property
    def last_page(self) -> int:
        return max(1, math.ceil(self.total / self.per_page))

    @property
    def from_item(self) -> int | None:
        if not self.items:
            return None
        return (self.page - 1) * self.per_page + 1

    @property
    def to_item(self) -> int | None:
        if not self.items:
            return None
        return (self.page - 1) * self.per_page + len(self.items)

    def meta(self) -> dict:
        return {
            "current_page": self.page,
            "from": self.from_item,
            "last_page": self.last_page,
            "per_page": self.per_page,
            "to": self.to_item,
            "total": self.total,
        }


async def paginate(session: AsyncSession, stmt: Select, page: int, per_page: int) -> Page:
    """Run ``stmt`` for one page and count the full result set."""
    page = max(1, page)
    count_stmt = select(func.count()).select_from(stmt.order_by(None).subquery())
    total = (await session.execute(count_stmt)).scalar_one()

    result = await session.scalars(stmt.limit(per_page).offset((page - 1) * per_page))
    return Page(items=list(result.all()), total=total, page=page, per_page=per_page)
