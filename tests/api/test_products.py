"""Products API — paged listing envelope, query-string handling, and CRUD errors.

Invariants:
    - Envelope keys are camelCase and carry effective paging values
    - Absent pageNumber/pageSize use 1 and the configured default
    - Non-positive values are normalized, never rejected
    - pageSize above max_page_size is clamped
    - Non-integer parameters produce the structured 400 validation error
"""

import logging

import pytest

from pagequery.config import Settings, get_settings
from pagequery.main import app


@pytest.fixture
def small_pages():
    """Configure default_page_size=5, max_page_size=10 for one test."""
    app.dependency_overrides[get_settings] = lambda: Settings(
        default_page_size=5, max_page_size=10,
    )


def _skus(body: dict) -> list[str]:
    return [item["sku"] for item in body["items"]]


async def test_first_page_envelope(client, make_products):
    await make_products(25)
    res = await client.get("/api/v1/products", params={"pageNumber": 1, "pageSize": 10})
    assert res.status_code == 200
    body = res.json()
    assert body["totalCount"] == 25
    assert body["pageSize"] == 10
    assert body["currentPage"] == 1
    assert body["totalPages"] == 3
    assert body["hasNext"] is True
    assert body["hasPrevious"] is False
    assert _skus(body) == [f"SKU-{i:03d}" for i in range(10)]


async def test_items_are_camel_case(client, make_products):
    await make_products(1)
    res = await client.get("/api/v1/products")
    item = res.json()["items"][0]
    assert set(item) == {"id", "sku", "name", "priceCents", "createdAt"}


async def test_last_partial_page(client, make_products):
    await make_products(25)
    res = await client.get("/api/v1/products", params={"pageNumber": 3, "pageSize": 10})
    body = res.json()
    assert _skus(body) == [f"SKU-{i:03d}" for i in range(20, 25)]
    assert body["hasNext"] is False
    assert body["hasPrevious"] is True


async def test_absent_parameters_use_defaults(client, make_products):
    await make_products(25)
    res = await client.get("/api/v1/products")
    body = res.json()
    assert body["currentPage"] == 1
    assert body["pageSize"] == 20
    assert len(body["items"]) == 20
    assert body["totalPages"] == 2


async def test_zero_page_size_uses_default(client, make_products):
    await make_products(25)
    res = await client.get("/api/v1/products", params={"pageSize": 0})
    body = res.json()
    assert res.status_code == 200
    assert body["pageSize"] == 20
    assert len(body["items"]) == 20


async def test_negative_page_number_is_first_page(client, make_products):
    await make_products(25)
    res = await client.get("/api/v1/products", params={"pageNumber": -5, "pageSize": 10})
    body = res.json()
    assert body["currentPage"] == 1
    assert _skus(body)[0] == "SKU-000"


async def test_page_beyond_data_is_empty(client, make_products):
    await make_products(25)
    res = await client.get("/api/v1/products", params={"pageNumber": 9, "pageSize": 10})
    body = res.json()
    assert res.status_code == 200
    assert body["items"] == []
    assert body["currentPage"] == 9
    assert body["totalPages"] == 3


async def test_empty_catalog(client):
    res = await client.get("/api/v1/products")
    body = res.json()
    assert body["items"] == []
    assert body["totalCount"] == 0
    assert body["totalPages"] == 0
    assert body["hasNext"] is False


async def test_configured_default_page_size(client, make_products, small_pages):
    await make_products(12)
    res = await client.get("/api/v1/products")
    body = res.json()
    assert body["pageSize"] == 5
    assert body["totalPages"] == 3


async def test_page_size_is_clamped_to_max(client, make_products, small_pages):
    await make_products(12)
    res = await client.get("/api/v1/products", params={"pageSize": 500})
    body = res.json()
    assert body["pageSize"] == 10
    assert len(body["items"]) == 10
    assert body["totalPages"] == 2


async def test_non_integer_page_number_is_400(client):
    res = await client.get("/api/v1/products", params={"pageNumber": "abc"})
    assert res.status_code == 400
    error = res.json()["error"]
    assert error["code"] == "VALIDATION_ERROR"
    assert error["details"][0]["field"] == "query.pageNumber"


async def test_get_product(client, make_products):
    products = await make_products(3)
    res = await client.get(f"/api/v1/products/{products[1].id}")
    assert res.status_code == 200
    assert res.json()["sku"] == "SKU-001"


async def test_get_missing_product_is_404(client):
    res = await client.get("/api/v1/products/9999")
    assert res.status_code == 404
    assert res.json()["error"]["code"] == "RESOURCE_NOT_FOUND"


async def test_create_product(client):
    res = await client.post(
        "/api/v1/products",
        json={"sku": " ab-1 ", "name": "  Widget ", "priceCents": 1299},
    )
    assert res.status_code == 201
    body = res.json()
    assert body["sku"] == "AB-1"
    assert body["name"] == "Widget"
    assert body["priceCents"] == 1299

    listing = (await client.get("/api/v1/products")).json()
    assert listing["totalCount"] == 1


async def test_create_duplicate_sku_is_409(client):
    payload = {"sku": "DUP-1", "name": "Widget"}
    assert (await client.post("/api/v1/products", json=payload)).status_code == 201
    res = await client.post("/api/v1/products", json=payload)
    assert res.status_code == 409
    assert res.json()["error"]["code"] == "CONFLICT"


async def test_create_rejects_negative_price(client):
    res = await client.post(
        "/api/v1/products", json={"sku": "NEG", "name": "Widget", "priceCents": -1},
    )
    assert res.status_code == 400


async def test_page_number_past_any_offset_is_empty(client, make_products):
    await make_products(3)
    res = await client.get("/api/v1/products", params={"pageNumber": 10**20, "pageSize": 10})
    assert res.status_code == 200
    body = res.json()
    assert body["items"] == []
    assert body["currentPage"] == 10**20
    assert body["totalCount"] == 3
    assert body["totalPages"] == 1


async def test_validation_log_carries_paging_params(client, caplog):
    with caplog.at_level(logging.WARNING, logger="pagequery.api.error_handlers"):
        await client.get("/api/v1/products", params={"pageNumber": "abc", "pageSize": 5})
    record = [r for r in caplog.records if r.name == "pagequery.api.error_handlers"][-1]
    assert record.page_number == "abc"
    assert record.page_size == "5"
    assert record.path == "/api/v1/products"
    assert record.error_code == "VALIDATION_ERROR"
