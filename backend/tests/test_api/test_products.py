"""
API tests for the products endpoints

Author: TM3
Date: 2025-10-17
"""
from storefront.repositories.product_repository import ProductRepository


def _product_id(store, sku):
    return ProductRepository(store).find_by_sku(sku).id


class TestProductsAPI:
    """Test /api/v1/products"""

    def test_list_products(self, client):
        response = client.get("/api/v1/products/")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "success"
        assert body["total"] == 4
        assert [p["name"] for p in body["data"]] == ["Biscuits", "Cheese", "Scratch Card", "TV"]

    def test_list_products_filtered(self, client):
        response = client.get("/api/v1/products/", params={"shippable": "false"})

        assert [p["sku"] for p in response.json()["data"]] == ["SCRATCH_CARD"]

    def test_get_product(self, client, seeded_store):
        product_id = _product_id(seeded_store, "TV")

        response = client.get(f"/api/v1/products/{product_id}")

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["name"] == "TV"
        assert data["weight_kg"] == 10.0
        assert data["is_shippable"] is True
        assert data["is_expirable"] is False

    def test_get_unknown_product_returns_404(self, client):
        response = client.get("/api/v1/products/missing")

        assert response.status_code == 404

    def test_create_product(self, client):
        payload = {
            "sku": "RADIO",
            "name": "Radio",
            "unit_price": "80.00",
            "stock_quantity": 4,
            "weight_kg": "1.5",
        }

        response = client.post("/api/v1/products/", json=payload)

        assert response.status_code == 201
        data = response.json()["data"]
        assert data["is_shippable"] is True
        assert data["is_digital"] is False
        assert data["min_stock"] == 5
        assert data["is_low_stock"] is True

    def test_create_duplicate_sku_returns_409(self, client):
        payload = {"sku": "TV", "name": "Another TV", "unit_price": "10"}

        response = client.post("/api/v1/products/", json=payload)

        assert response.status_code == 409

    def test_create_invalid_product_returns_422(self, client):
        payload = {"sku": "BAD", "name": "Bad", "unit_price": "-1"}

        response = client.post("/api/v1/products/", json=payload)

        assert response.status_code == 422

    def test_restock(self, client, seeded_store):
        product_id = _product_id(seeded_store, "TV")

        response = client.post(f"/api/v1/products/{product_id}/restock", json={"quantity": 2})

        assert response.status_code == 200
        assert response.json()["data"]["stock_quantity"] == 5

    def test_restock_unknown_product_returns_404(self, client):
        response = client.post("/api/v1/products/missing/restock", json={"quantity": 2})

        assert response.status_code == 404

    def test_stats(self, client):
        response = client.get("/api/v1/products/stats")

        assert response.status_code == 200
        assert response.json()["data"]["totals"]["digital"] == 1

    def test_low_stock_with_threshold(self, client):
        response = client.get("/api/v1/products/low-stock", params={"threshold": 5})

        assert response.status_code == 200
        assert [p["sku"] for p in response.json()["data"]] == ["TV", "BISCUITS"]

    def test_low_stock_uses_min_stock_by_default(self, client):
        client.post(
            "/api/v1/products/",
            json={"sku": "RADIO", "name": "Radio", "unit_price": "80", "stock_quantity": 4}
        )

        response = client.get("/api/v1/products/low-stock")

        assert response.json()["count"] == 1
        assert response.json()["data"][0]["sku"] == "RADIO"
