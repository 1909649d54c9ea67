"""Page Schemas — the JSON envelope for paged listings.

Invariants:
    - Serialized keys are camelCase (items, totalCount, pageSize, currentPage,
      totalPages, hasNext, hasPrevious)
    - Built only from a PageResult, so metadata always reflects effective values

Design Decisions:
    - Generic BaseModel: one envelope, parametrized per resource in response_model
    - Core PageResult stays a plain dataclass; serialization lives at the API boundary
"""

from collections.abc import Callable
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from pagequery.core.paging import PageResult

T = TypeVar("T")


class PageResponse(BaseModel, Generic[T]):
    """Page of items plus pagination metadata."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    items: list[T]
    total_count: int = Field(ge=0)
    page_size: int = Field(ge=1)
    current_page: int = Field(ge=1)
    total_pages: int = Field(ge=0)
    has_next: bool
    has_previous: bool

    @classmethod
    def from_result(
        cls, result: PageResult, convert: Callable[[Any], T],
    ) -> "PageResponse[T]":
        return cls(
            items=[convert(item) for item in result.items],
            total_count=result.total_count,
            page_size=result.page_size,
            current_page=result.current_page,
            total_pages=result.total_pages,
            has_next=result.has_next,
            has_previous=result.has_previous,
        )
