"""Products — paged catalog listing plus single-item read and create.

Invariants:
    - pageNumber/pageSize come from the query string; absent values fall back to
      1 and settings.default_page_size
    - Out-of-range values (<= 0) are passed through and normalized by the paging engine
    - pageSize above settings.max_page_size is clamped before reaching the engine
    - Listing order is (created_at, id): a stable total order
    - Listings page against a read-only snapshot session (count + fetch share it)

Design Decisions:
    - Thin routes: paging lives in services/paged_query.py, slicing in SelectSource
    - Duplicate SKU surfaces as ConflictError (409), not a generic database failure
"""

import logging

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from pagequery.config import Settings, get_settings
from pagequery.core.errors import ConflictError, ResourceNotFoundError
from pagequery.infrastructure.database import get_db, get_snapshot_db
from pagequery.infrastructure.sources import SelectSource
from pagequery.models.product import Product
from pagequery.schemas.page import PageResponse
from pagequery.schemas.product import ProductCreate, ProductResponse
from pagequery.services.paged_query import compute_page

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/products", tags=["products"])


def resolve_page_size(page_size: int | None, settings: Settings) -> int:
    """Apply the API-level default for an absent pageSize and the upper bound."""
    if page_size is None:
        return settings.default_page_size
    return min(page_size, settings.max_page_size)


@router.get("", response_model=PageResponse[ProductResponse])
async def list_products(
    page_number: int = Query(1, alias="pageNumber"),
    page_size: int | None = Query(None, alias="pageSize"),
    db: AsyncSession = Depends(get_snapshot_db),
    settings: Settings = Depends(get_settings),
):
    """List products one page at a time."""
    statement = select(Product).order_by(Product.created_at, Product.id)
    page = await compute_page(
        SelectSource(db, statement),
        page_number,
        resolve_page_size(page_size, settings),
        settings.default_page_size,
    )
    return PageResponse[ProductResponse].from_result(
        page, ProductResponse.model_validate,
    )


@router.get("/{product_id}", response_model=ProductResponse)
async def get_product(product_id: int, db: AsyncSession = Depends(get_db)):
    """Get a single product."""
    product = await db.get(Product, product_id)
    if product is None:
        raise ResourceNotFoundError("Product", str(product_id))
    return ProductResponse.model_validate(product)


@router.post(
    "", response_model=ProductResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_product(
    body: ProductCreate, db: AsyncSession = Depends(get_db),
):
    """Create a product. SKUs are unique."""
    product = Product(
        sku=body.sku, name=body.name, price_cents=body.price_cents,
    )
    db.add(product)
    try:
        await db.commit()
    except IntegrityError as e:
        await db.rollback()
        logger.warning(
            f"Duplicate SKU rejected: {body.sku}",
            extra={"resource_id": body.sku},
        )
        raise ConflictError(f"Product with SKU '{body.sku}' already exists") from e
    await db.refresh(product)
    return ProductResponse.model_validate(product)
