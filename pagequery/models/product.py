"""Product ORM — the catalog entity exposed through the paged listing endpoint.

Invariants:
    - id is an autoincrement integer primary key
    - sku is unique and non-nullable
    - price_cents is a non-negative integer (no float money)
    - (created_at, id) is a stable total order for paging
"""

from datetime import datetime, timezone

from sqlalchemy import (
    CheckConstraint, DateTime, Index, Integer, String, UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column

from pagequery.db.base import Base


class Product(Base):
    """A sellable catalog item."""
    __tablename__ = "products"
    __table_args__ = (
        UniqueConstraint("sku", name="uq_products_sku"),
        Index("ix_products_created_at_id", "created_at", "id"),
        CheckConstraint("price_cents >= 0", name="ck_products_price_non_negative"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    sku: Mapped[str] = mapped_column(String(64), nullable=False)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    price_cents: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
