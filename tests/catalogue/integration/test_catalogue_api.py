"""Integration tests for catalogue endpoints via TestClient."""

from pathlib import Path

from protean import current_domain

from storefront.catalogue.product.product import Product
from storefront.settings import get_settings


def _create_category(client, headers, name="Ceramics"):
    response = client.post("/categories", json={"name": name}, headers=headers)
    assert response.status_code == 201
    return response.json()["category_id"]


def _create_product(client, headers, category_id, **overrides):
    body = {
        "name": "Stoneware Mug",
        "description": "Hand-thrown mug",
        "price": 24.0,
        "quantity": 10,
        "images": ["/uploads/mug.jpg"],
        "category_id": category_id,
    }
    body.update(overrides)
    response = client.post("/products", json=body, headers=headers)
    assert response.status_code == 201
    return response.json()["product_id"]


class TestCategoryEndpoints:
    def test_admin_creates_category(self, client, admin):
        category_id = _create_category(client, admin["headers"])
        response = client.get(f"/categories/{category_id}")
        assert response.status_code == 200
        assert response.json()["name"] == "Ceramics"

    def test_list_is_public(self, client, admin):
        _create_category(client, admin["headers"], "Textiles")
        _create_category(client, admin["headers"], "Ceramics")
        response = client.get("/categories")
        assert [category["name"] for category in response.json()] == ["Ceramics", "Textiles"]

    def test_shopper_cannot_create_category(self, client, shopper):
        response = client.post("/categories", json={"name": "Ceramics"}, headers=shopper["headers"])
        assert response.status_code == 403

    def test_anonymous_cannot_create_category(self, client):
        response = client.post("/categories", json={"name": "Ceramics"})
        assert response.status_code == 401

    def test_duplicate_name_is_a_bad_request(self, client, admin):
        _create_category(client, admin["headers"])
        response = client.post("/categories", json={"name": "Ceramics"}, headers=admin["headers"])
        assert response.status_code == 400
        assert response.json() == {"error": {"name": ["Category name already exists"]}}

    def test_delete_refused_while_products_remain(self, client, admin):
        category_id = _create_category(client, admin["headers"])
        _create_product(client, admin["headers"], category_id)
        response = client.delete(f"/categories/{category_id}", headers=admin["headers"])
        assert response.json() == {"deleted": False}

    def test_unknown_category_is_not_found(self, client):
        response = client.get("/categories/does-not-exist")
        assert response.status_code == 404


class TestProductEndpoints:
    def test_get_product_includes_category(self, client, admin):
        category_id = _create_category(client, admin["headers"])
        product_id = _create_product(client, admin["headers"], category_id, has_discount=True, discount_price=20.0)

        response = client.get(f"/products/{product_id}")
        assert response.status_code == 200
        data = response.json()
        assert data["effective_price"] == 20.0
        assert data["images"] == ["/uploads/mug.jpg"]
        assert data["category"]["name"] == "Ceramics"

    def test_list_products_with_filters(self, client, admin):
        category_id = _create_category(client, admin["headers"])
        _create_product(client, admin["headers"], category_id, name="Stoneware Mug", price=24.0)
        _create_product(client, admin["headers"], category_id, name="Tea Bowl", price=18.0)

        response = client.get("/products", params={"name": "bowl", "limit": 5})
        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 1
        assert data["total_pages"] == 1
        assert data["items"][0]["name"] == "Tea Bowl"

    def test_invalid_sort_field_is_a_bad_request(self, client):
        response = client.get("/products", params={"sort_field": "secret"})
        assert response.status_code == 400

    def test_update_product(self, client, admin):
        category_id = _create_category(client, admin["headers"])
        product_id = _create_product(client, admin["headers"], category_id)

        response = client.put(f"/products/{product_id}", json={"quantity": 3}, headers=admin["headers"])
        assert response.status_code == 200
        assert response.json()["quantity"] == 3

    def test_delete_product(self, client, admin):
        category_id = _create_category(client, admin["headers"])
        product_id = _create_product(client, admin["headers"], category_id)

        response = client.delete(f"/products/{product_id}", headers=admin["headers"])
        assert response.json() == {"deleted": True}
        assert current_domain.repository_for(Product).count_all() == 0


class TestImageUpload:
    def test_upload_stores_file(self, client, admin):
        response = client.post(
            "/products/images",
            files={"file": ("mug photo.jpg", b"jpeg-bytes", "image/jpeg")},
            headers=admin["headers"],
        )
        assert response.status_code == 201
        url = response.json()["url"]
        assert url.startswith("/uploads/")
        assert url.endswith("-mug_photo.jpg")

        stored = Path(get_settings().upload_dir) / url.removeprefix("/uploads/")
        assert stored.read_bytes() == b"jpeg-bytes"

    def test_upload_requires_admin(self, client, shopper):
        response = client.post(
            "/products/images",
            files={"file": ("mug.jpg", b"jpeg-bytes", "image/jpeg")},
            headers=shopper["headers"],
        )
        assert response.status_code == 403
