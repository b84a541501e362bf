"""Tests for the Products HTTP endpoints.

These tests verify:
- Status codes and bodies for every route
- Known gaps kept as-is (zero-row writes answer 204, Location echoes the submitted id)
- Malformed input answers 400, store faults answer 500
"""

import sqlite3

import pytest
from fastapi.testclient import TestClient

from product_api.api import create_app
from product_api.config import AppConfig, DatabaseConfig, LoggingConfig, ServerConfig

PEN = {"name": "Pen", "description": "Blue ink", "price": 1.50, "category": "Office"}


@pytest.fixture
def db_path(tmp_path):
    return str(tmp_path / "products.db")


@pytest.fixture
def client(db_path):
    """TestClient over an app wired to a fresh SQLite file."""
    config = AppConfig(
        database=DatabaseConfig(connection_string=db_path),
        logging=LoggingConfig(level="DEBUG"),
        server=ServerConfig(host="127.0.0.1", port=8000, cors_origins=["*"]),
    )
    with TestClient(create_app(config)) as client:
        yield client


class TestReadEndpoints:

    def test_list_empty_store(self, client):
        response = client.get("/api/products")

        assert response.status_code == 200
        assert response.json() == []

    def test_get_missing_product_is_404_with_empty_body(self, client):
        response = client.get("/api/products/1")

        assert response.status_code == 404
        assert response.content == b""

    def test_list_returns_created_products(self, client):
        client.post("/api/products", json=PEN)
        client.post("/api/products", json={**PEN, "name": "Pencil", "price": 0.75})

        response = client.get("/api/products")

        assert response.status_code == 200
        body = response.json()
        assert [product["name"] for product in body] == ["Pen", "Pencil"]
        assert body[1] == {
            "id": 2,
            "name": "Pencil",
            "description": "Blue ink",
            "price": 0.75,
            "category": "Office",
        }

    def test_health_check(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}


class TestCreateEndpoint:

    def test_create_echoes_submitted_product(self, client):
        response = client.post("/api/products", json=PEN)

        assert response.status_code == 201
        assert response.json() == {"id": 0, **PEN}

    def test_location_uses_submitted_id(self, client):
        """The store-assigned id is not read back, so Location echoes the body id."""
        response = client.post("/api/products", json={"id": 9, **PEN})

        assert response.status_code == 201
        assert response.headers["location"].endswith("/api/products/9")
        assert client.get("/api/products/9").status_code == 404
        assert client.get("/api/products/1").status_code == 200

    def test_create_without_description(self, client):
        payload = {"name": "Eraser", "price": 0.5, "category": "Office"}

        response = client.post("/api/products", json=payload)

        assert response.status_code == 201
        assert client.get("/api/products/1").json()["description"] is None

    @pytest.mark.parametrize(
        "body",
        [
            {"name": "Pen", "category": "Office"},
            {**PEN, "price": "not a number"},
            ["Pen"],
        ],
    )
    def test_malformed_body_is_400(self, client, body):
        response = client.post("/api/products", json=body)

        assert response.status_code == 400
        assert "detail" in response.json()
        assert client.get("/api/products").json() == []

    @pytest.mark.parametrize(
        "content",
        [
            b'{"name": "X", "price": NaN, "category": "c"}',
            b'{"name": "X", "price": Infinity, "category": "c"}',
        ],
    )
    def test_non_finite_price_is_400(self, client, content):
        response = client.post(
            "/api/products", content=content, headers={"Content-Type": "application/json"}
        )

        assert response.status_code == 400
        assert "detail" in response.json()

    @pytest.mark.parametrize("price", [1e30, 12345678901234567.0, 1.505])
    def test_price_outside_decimal_18_2_is_400(self, client, price):
        response = client.post("/api/products", json={**PEN, "price": price})

        assert response.status_code == 400
        list_response = client.get("/api/products")
        assert list_response.status_code == 200
        assert list_response.json() == []

    def test_wide_in_range_price_is_accepted(self, client):
        response = client.post("/api/products", json={**PEN, "price": 99999999999999.5})

        assert response.status_code == 201
        assert client.get("/api/products").status_code == 200

    def test_non_json_body_is_400(self, client):
        response = client.post(
            "/api/products", content=b"{not json", headers={"Content-Type": "application/json"}
        )

        assert response.status_code == 400


class TestUpdateEndpoint:

    def test_update_existing_product(self, client):
        client.post("/api/products", json=PEN)

        response = client.put("/api/products/1", json={"id": 1, **PEN, "name": "Pen XL"})

        assert response.status_code == 204
        assert response.content == b""
        assert client.get("/api/products/1").json()["name"] == "Pen XL"

    def test_id_mismatch_is_400_and_changes_nothing(self, client):
        for index in range(7):
            client.post("/api/products", json={**PEN, "name": f"Item {index + 1}"})

        response = client.put("/api/products/5", json={"id": 7, **PEN, "name": "Changed"})

        assert response.status_code == 400
        assert client.get("/api/products/5").json()["name"] == "Item 5"
        assert client.get("/api/products/7").json()["name"] == "Item 7"

    def test_update_missing_product_still_204(self, client):
        """Zero affected rows is not reported to the caller."""
        response = client.put("/api/products/3", json={"id": 3, **PEN})

        assert response.status_code == 204
        assert client.get("/api/products/3").status_code == 404

    def test_non_integer_path_id_is_400(self, client):
        response = client.put("/api/products/abc", json={"id": 1, **PEN})

        assert response.status_code == 400


class TestOutOfRangeIds:
    """Ids beyond the SQLite INTEGER range are rejected before reaching the store."""

    TOO_LARGE = 2**70

    def test_get_out_of_range_id_is_400(self, client):
        assert client.get(f"/api/products/{self.TOO_LARGE}").status_code == 400
        assert client.get(f"/api/products/{-(2**70)}").status_code == 400

    def test_put_out_of_range_id_is_400(self, client):
        response = client.put(f"/api/products/{self.TOO_LARGE}", json={"id": self.TOO_LARGE, **PEN})

        assert response.status_code == 400

    def test_delete_out_of_range_id_is_400(self, client):
        assert client.delete(f"/api/products/{self.TOO_LARGE}").status_code == 400

    def test_largest_sqlite_id_is_404(self, client):
        assert client.get(f"/api/products/{2**63 - 1}").status_code == 404


class TestDeleteEndpoint:

    def test_delete_existing_product(self, client):
        client.post("/api/products", json=PEN)

        response = client.delete("/api/products/1")

        assert response.status_code == 204
        assert client.get("/api/products/1").status_code == 404

    def test_delete_missing_product_still_204(self, client):
        """Known gap: deleting an unknown id is indistinguishable from success."""
        response = client.delete("/api/products/404")

        assert response.status_code == 204
        assert response.content == b""


class TestProductLifecycle:

    def test_create_read_update_delete(self, client):
        response = client.post("/api/products", json=PEN)
        assert response.status_code == 201

        response = client.get("/api/products/1")
        assert response.status_code == 200
        assert response.json() == {"id": 1, **PEN}

        response = client.put(
            "/api/products/1",
            json={"id": 1, "name": "Pen XL", "description": "Blue ink", "price": 1.50, "category": "Office"},
        )
        assert response.status_code == 204

        response = client.get("/api/products/1")
        assert response.json()["name"] == "Pen XL"

        assert client.delete("/api/products/1").status_code == 204
        assert client.get("/api/products/1").status_code == 404


class TestStoreFaults:

    def test_store_error_is_500(self, client, db_path):
        """A store fault surfaces as a generic server error."""
        connection = sqlite3.connect(db_path)
        connection.execute("DROP TABLE Products")
        connection.commit()
        connection.close()

        response = client.get("/api/products")

        assert response.status_code == 500
        assert response.json() == {"detail": "Internal Server Error"}
