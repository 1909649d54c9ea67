"""Source Protocols — the contract between the paging engine and data access.

Invariants:
    - skip() and take() never touch the backing store; they return a new view
    - count() and materialize() are the only IO points (both async)
    - count() reports the cardinality of the current view, not of the backing store

Design Decisions:
    - Protocol over ABC: adapters satisfy the contract structurally
    - Async in Protocol: implementations do IO; the in-memory adapter is async too
      so the engine has a single calling convention
"""

from typing import Protocol, TypeVar

T = TypeVar("T", covariant=True)


class PageSource(Protocol[T]):
    """Ordered, countable, sliceable, materializable view over some storage."""

    async def count(self) -> int: ...

    def skip(self, n: int) -> "PageSource[T]": ...

    def take(self, n: int) -> "PageSource[T]": ...

    async def materialize(self) -> list[T]: ...
