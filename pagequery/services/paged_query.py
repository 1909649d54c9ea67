"""Paged Query Engine — one count and one bounded fetch against a PageSource.

Invariants:
    - Never raises for out-of-range page_number/page_size (normalized in core/paging.py)
    - Exactly one source.count() followed by one source.skip().take().materialize()
    - Source exceptions propagate unchanged: no wrapping, retry, or suppression
    - Stateless: safe to call concurrently against independent sources

Design Decisions:
    - Async orchestration around pure core functions (normalize -> IO -> build_page_result)
    - default_page_size is an explicit argument, never read from settings here
    - Count and fetch are separate accesses; snapshot consistency is the source's job
"""

import logging

from pagequery.core.paging import PageRequest, PageResult, build_page_result
from pagequery.core.source_protocols import PageSource

logger = logging.getLogger(__name__)


async def compute_page(
    source: PageSource,
    page_number: int,
    page_size: int,
    default_page_size: int,
) -> PageResult:
    """Fetch one page from source, normalizing out-of-range paging input.

    page_number and page_size may be any integers. default_page_size must be
    positive: a value below 1 raises ValueError before the source is touched.
    Exceptions from source.count() or materialize() propagate unchanged.
    """
    return await compute_page_for(
        source, PageRequest(page_number, page_size), default_page_size,
    )


async def compute_page_for(
    source: PageSource,
    request: PageRequest,
    default_page_size: int,
) -> PageResult:
    """Same as compute_page, for callers that already hold a PageRequest."""
    effective = request.normalized(default_page_size)

    total_count = await source.count()
    items = await source.skip(effective.offset).take(effective.page_size).materialize()

    logger.debug(
        f"Computed page {effective.page_number} ({len(items)} of {total_count} items)",
        extra={
            "page_number": effective.page_number,
            "page_size": effective.page_size,
            "total_count": total_count,
        },
    )
    return build_page_result(items, total_count, effective)
