"""Paging Primitives — page requests, page results, and the arithmetic between them.

Invariants:
    - Effective page_size is always >= 1 (values < 1 replaced by the caller's default)
    - Effective page_number is always >= 1 (values < 1 treated as 1)
    - total_pages == ceil(total_count / page_size), and 0 iff total_count == 0
    - PageResult echoes EFFECTIVE values only (page_size and current_page)

Design Decisions:
    - Frozen dataclasses: results are created once per query and handed to the API layer
    - Items stored as a tuple so a PageResult is immutable end to end
    - Integer ceiling division over math.ceil: exact for arbitrarily large counts
"""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class PageRequest:
    """Caller-supplied paging parameters. May be out of range until normalized."""
    page_number: int
    page_size: int

    def normalized(self, default_page_size: int) -> "PageRequest":
        """Return the effective request used for slicing."""
        if default_page_size < 1:
            raise ValueError(
                f"default_page_size must be positive, got {default_page_size}",
            )
        return PageRequest(
            page_number=self.page_number if self.page_number >= 1 else 1,
            page_size=self.page_size if self.page_size >= 1 else default_page_size,
        )

    @property
    def offset(self) -> int:
        return (self.page_number - 1) * self.page_size


@dataclass(frozen=True)
class PageResult(Generic[T]):
    """One page of items plus pagination metadata."""
    items: Sequence[T]
    total_count: int
    page_size: int
    current_page: int
    total_pages: int

    @property
    def has_next(self) -> bool:
        return self.current_page < self.total_pages

    @property
    def has_previous(self) -> bool:
        return self.current_page > 1


def count_pages(total_count: int, page_size: int) -> int:
    """Number of pages needed for total_count items. page_size must be >= 1."""
    if total_count <= 0:
        return 0
    return (total_count + page_size - 1) // page_size


def build_page_result(
    items: Sequence[T], total_count: int, request: PageRequest,
) -> PageResult[T]:
    """Assemble a PageResult from an already-normalized request. Pure, no IO."""
    return PageResult(
        items=tuple(items),
        total_count=total_count,
        page_size=request.page_size,
        current_page=request.page_number,
        total_pages=count_pages(total_count, request.page_size),
    )
