"""Source Adapters — PageSource implementations over memory and SQLAlchemy.

Invariants:
    - skip()/take() return new sources; the original view is never mutated
    - Negative skip/take arguments are treated as 0
    - skip after take shrinks the remaining limit (take(10).skip(3) yields at most 7)
    - count() reports the size of the current window
    - SelectSource never sends OFFSET/LIMIT beyond a signed 64-bit integer: a window
      starting past that bound is empty without querying

Design Decisions:
    - Window arithmetic shared by both adapters so they slice identically
    - SelectSource counts over a subquery with ORDER BY stripped: ordering is
      irrelevant to cardinality and some backends reject it in subqueries
"""

from collections.abc import Sequence
from dataclasses import dataclass, replace
from typing import Generic, TypeVar

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

T = TypeVar("T")

MAX_SQL_INTEGER = 2**63 - 1


@dataclass(frozen=True)
class Window:
    """Offset/limit pair accumulated by skip() and take() calls."""
    offset: int = 0
    limit: int | None = None

    def skip(self, n: int) -> "Window":
        n = max(n, 0)
        limit = None if self.limit is None else max(self.limit - n, 0)
        return Window(offset=self.offset + n, limit=limit)

    def take(self, n: int) -> "Window":
        n = max(n, 0)
        limit = n if self.limit is None else min(self.limit, n)
        return Window(offset=self.offset, limit=limit)

    def clip(self, total: int) -> int:
        """Number of rows this window selects out of total."""
        remaining = max(total - self.offset, 0)
        if self.limit is None:
            return remaining
        return min(remaining, self.limit)


class SequenceSource(Generic[T]):
    """PageSource over an in-memory sequence."""

    def __init__(self, items: Sequence[T], window: Window | None = None):
        self._items = items
        self._window = window or Window()

    async def count(self) -> int:
        return self._window.clip(len(self._items))

    def skip(self, n: int) -> "SequenceSource[T]":
        return SequenceSource(self._items, self._window.skip(n))

    def take(self, n: int) -> "SequenceSource[T]":
        return SequenceSource(self._items, self._window.take(n))

    async def materialize(self) -> list[T]:
        start = self._window.offset
        stop = None if self._window.limit is None else start + self._window.limit
        return list(self._items[start:stop])


@dataclass(frozen=True)
class SelectSource(Generic[T]):
    """PageSource over a SQLAlchemy Select executed on an AsyncSession.

    The statement must select a single ORM entity (or column) and carry the
    ordering the caller wants paged; no ordering is added here.
    """
    db: AsyncSession
    statement: Select
    window: Window = Window()

    async def count(self) -> int:
        counted = select(func.count()).select_from(
            self.statement.order_by(None).subquery(),
        )
        total = (await self.db.execute(counted)).scalar_one()
        return self.window.clip(total)

    def skip(self, n: int) -> "SelectSource[T]":
        return replace(self, window=self.window.skip(n))

    def take(self, n: int) -> "SelectSource[T]":
        return replace(self, window=self.window.take(n))

    async def materialize(self) -> list[T]:
        if self.window.offset > MAX_SQL_INTEGER:
            return []
        stmt = self.statement
        if self.window.offset:
            stmt = stmt.offset(self.window.offset)
        if self.window.limit is not None and self.window.limit <= MAX_SQL_INTEGER:
            stmt = stmt.limit(self.window.limit)
        result = await self.db.execute(stmt)
        return list(result.scalars().all())
