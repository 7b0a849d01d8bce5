"""
Test product API endpoints
"""
import uuid

import pytest
from httpx import AsyncClient

from app.core.config import settings


@pytest.fixture
async def brand(client: AsyncClient) -> dict:
    response = await client.post("/v1/brands", json={"brand_name": "Acme"})
    return response.json()["data"]


@pytest.fixture
async def product(client: AsyncClient, brand, sample_product_data) -> dict:
    response = await client.post("/v1/products", json={**sample_product_data, "brand_id": brand["id"]})
    assert response.status_code == 201
    return response.json()["data"]


class TestCreateProduct:
    async def test_create(self, client: AsyncClient, brand, sample_product_data):
        response = await client.post("/v1/products", json={**sample_product_data, "brand_id": brand["id"]})

        assert response.status_code == 201
        body = response.json()
        assert body["message"] == "Product created successfully"
        assert body["data"]["product_name"] == "Widget"
        assert body["data"]["price"] == 9.99
        assert body["data"]["qty"] == 5
        assert body["data"]["brand_id"] == brand["id"]
        assert body["data"]["brand_name"] == "Acme"

    async def test_unknown_brand(self, client: AsyncClient, sample_product_data):
        response = await client.post("/v1/products", json={**sample_product_data, "brand_id": str(uuid.uuid4())})

        assert response.status_code == 400
        assert response.json()["error"]["message"] == "brand not found"
        assert (await client.get("/v1/products")).json()["data"]["total"] == 0

    @pytest.mark.parametrize(
        "override",
        [
            {"product_name": ""},
            {"product_name": "   "},
            {"price": 0},
            {"price": -1},
            {"qty": -1},
            {"brand_id": "not-a-uuid"},
        ],
    )
    async def test_invalid_body(self, client: AsyncClient, brand, sample_product_data, override):
        payload = {**sample_product_data, "brand_id": brand["id"], **override}

        response = await client.post("/v1/products", json=payload)

        assert response.status_code == 400
        assert response.json()["error"]["type"] == "BadRequestError"


class TestGetProduct:
    async def test_get(self, client: AsyncClient, product):
        response = await client.get(f"/v1/products/{product['id']}")

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Product retrieved successfully"
        assert body["data"]["id"] == product["id"]
        assert body["data"]["brand_name"] == "Acme"

    async def test_missing(self, client: AsyncClient):
        response = await client.get(f"/v1/products/{uuid.uuid4()}")

        assert response.status_code == 404
        assert response.json()["error"]["message"] == "product not found"

    async def test_malformed_id(self, client: AsyncClient):
        response = await client.get("/v1/products/42")

        assert response.status_code == 400


class TestListProducts:
    async def test_empty(self, client: AsyncClient):
        response = await client.get("/v1/products")

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Products retrieved successfully"
        assert body["data"] == {"products": [], "total": 0, "page": 1, "limit": 10, "total_pages": 0}

    async def test_paging(self, client: AsyncClient, brand):
        for i in range(3):
            await client.post(
                "/v1/products",
                json={"product_name": f"Item {i}", "price": 1, "qty": i, "brand_id": brand["id"]},
            )

        response = await client.get("/v1/products", params={"page": 2, "limit": 2})

        data = response.json()["data"]
        assert data["total"] == 3
        assert data["page"] == 2
        assert data["limit"] == 2
        assert data["total_pages"] == 2
        assert [p["product_name"] for p in data["products"]] == ["Item 0"]

    @pytest.mark.parametrize(
        "params, page, limit",
        [
            ({"page": "abc", "limit": "xyz"}, 1, 10),
            ({"page": 0, "limit": 0}, 1, 10),
            ({"page": -3, "limit": 1000}, 1, 10),
            ({"limit": 100}, 1, 100),
            ({"page": "99999999999999999999", "limit": 10}, 1, 10),
            ({"page": "-99999999999999999999"}, 1, 10),
            ({"limit": "99999999999999999999"}, 1, 10),
        ],
    )
    async def test_lenient_parameters(self, client: AsyncClient, product, params, page, limit):
        response = await client.get("/v1/products", params=params)

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["page"] == page
        assert data["limit"] == limit
        assert data["total"] == 1
        assert data["total_pages"] == 1

    async def test_page_past_the_end(self, client: AsyncClient, product):
        response = await client.get("/v1/products", params={"page": 5})

        data = response.json()["data"]
        assert data["products"] == []
        assert data["total"] == 1
        assert data["page"] == 5

    async def test_largest_page_keeps_offset_in_range(self, client: AsyncClient, product):
        response = await client.get("/v1/products", params={"page": str(2**63 - 1), "limit": 10})

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["products"] == []
        assert data["total"] == 1
        assert data["page"] == (2**63 - 1) // 10


class TestUpdateProduct:
    async def test_partial_update(self, client: AsyncClient, product):
        response = await client.put(f"/v1/products/{product['id']}", json={"price": 12.5})

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Product updated successfully"
        assert body["data"]["price"] == 12.5
        assert body["data"]["product_name"] == "Widget"
        assert body["data"]["qty"] == 5

    async def test_empty_update_succeeds(self, client: AsyncClient, product):
        response = await client.put(f"/v1/products/{product['id']}", json={})

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["price"] == product["price"]
        assert data["qty"] == product["qty"]

    async def test_move_to_another_brand(self, client: AsyncClient, product):
        other = (await client.post("/v1/brands", json={"brand_name": "Globex"})).json()["data"]

        response = await client.put(f"/v1/products/{product['id']}", json={"brand_id": other["id"]})

        assert response.status_code == 200
        assert response.json()["data"]["brand_name"] == "Globex"

    async def test_unknown_brand(self, client: AsyncClient, product):
        response = await client.put(f"/v1/products/{product['id']}", json={"brand_id": str(uuid.uuid4())})

        assert response.status_code == 400
        assert response.json()["error"]["message"] == "brand not found"
        assert (await client.get(f"/v1/products/{product['id']}")).json()["data"]["brand_name"] == "Acme"

    async def test_missing_product(self, client: AsyncClient):
        response = await client.put(f"/v1/products/{uuid.uuid4()}", json={"price": 1})

        assert response.status_code == 404

    async def test_blank_name_is_rejected(self, client: AsyncClient, product):
        response = await client.put(f"/v1/products/{product['id']}", json={"product_name": "   "})

        assert response.status_code == 400
        assert (await client.get(f"/v1/products/{product['id']}")).json()["data"]["product_name"] == "Widget"

    async def test_zero_price_is_rejected(self, client: AsyncClient, product):
        response = await client.put(f"/v1/products/{product['id']}", json={"price": 0})

        assert response.status_code == 400
        assert (await client.get(f"/v1/products/{product['id']}")).json()["data"]["price"] == 9.99

    async def test_legacy_mode_ignores_zero_price(self, client: AsyncClient, product, monkeypatch):
        monkeypatch.setattr(settings, "partial_update_mode", "legacy")

        response = await client.put(f"/v1/products/{product['id']}", json={"price": 0, "product_name": "Gadget"})

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["price"] == 9.99
        assert data["product_name"] == "Gadget"
        # An absent qty reads as 0 and is written
        assert data["qty"] == 0


class TestDeleteProduct:
    async def test_delete(self, client: AsyncClient, product):
        response = await client.delete(f"/v1/products/{product['id']}")

        assert response.status_code == 200
        assert response.json() == {"message": "Product deleted successfully"}
        assert (await client.get(f"/v1/products/{product['id']}")).status_code == 404

    async def test_missing(self, client: AsyncClient):
        response = await client.delete(f"/v1/products/{uuid.uuid4()}")

        assert response.status_code == 404
        assert response.json()["error"]["message"] == "product not found"
