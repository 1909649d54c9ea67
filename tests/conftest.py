"""Root conftest — shared test configuration and database fixtures.

Invariants:
    - Tests never reach a real PostgreSQL: DATABASE_URL points at SQLite
    - Every test that asks for test_engine gets a fresh in-memory database
"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

from datetime import datetime, timedelta, timezone  # noqa: E402

import pytest  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.pool import StaticPool  # noqa: E402

from pagequery.db.base import Base  # noqa: E402
from pagequery.models.product import Product  # noqa: E402

BASE_TIME = datetime(2026, 1, 1, tzinfo=timezone.utc)


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False, poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
def make_products(test_db):
    """Insert n products with strictly increasing created_at (SKU-000, SKU-001, ...)."""
    async def _make(n: int) -> list[Product]:
        products = [
            Product(
                sku=f"SKU-{i:03d}",
                name=f"Product {i}",
                price_cents=100 * i,
                created_at=BASE_TIME + timedelta(seconds=i),
            )
            for i in range(n)
        ]
        test_db.add_all(products)
        await test_db.commit()
        return products
    return _make
