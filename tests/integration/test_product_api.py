"""Integration tests for Product API endpoints.

Covers:
- Catalogue listing with effective prices via /api/v1/products/.
- CRUD operations and logical delete.
- Domain exception mapping (400, 404).
- Authentication enforcement (401 without token).
"""

from __future__ import annotations

from decimal import Decimal

import pytest

from modules.pricing.models import CustomerProductPrice
from modules.products.models import Product

pytestmark = pytest.mark.integration

MISSING_ID = "00000000-0000-0000-0000-000000000000"


# ===========================================================================
# Authentication
# ===========================================================================


class TestProductAPIAuth:
    def test_unauthenticated_returns_401(self, api_client):
        response = api_client.get("/api/v1/products/")
        assert response.status_code == 401


# ===========================================================================
# LIST
# ===========================================================================


class TestProductList:
    def test_list_empty(self, auth_client):
        response = auth_client.get("/api/v1/products/")
        assert response.status_code == 200
        assert response.data == []

    def test_list_returns_active_products_with_base_price(
        self, auth_client, product, product_b, inactive_product
    ):
        response = auth_client.get("/api/v1/products/")
        assert response.status_code == 200
        names = [row["name"] for row in response.data]
        assert names == ["Bidon 20 L", "Bidon 7 L"]
        assert response.data[0]["price"] == "10.00"
        assert response.data[0]["base_price"] == "10.00"

    def test_list_for_customer_applies_override(self, auth_client, customer, product, product_b):
        CustomerProductPrice.objects.create(
            customer=customer, product=product, price=Decimal("8.50")
        )
        response = auth_client.get(f"/api/v1/products/?customer_id={customer.id}")
        assert response.status_code == 200
        prices = {row["name"]: (row["price"], row["base_price"]) for row in response.data}
        assert prices["Bidon 20 L"] == ("8.50", "10.00")
        assert prices["Bidon 7 L"] == ("5.50", "5.50")

    def test_inactive_override_is_ignored(self, auth_client, customer, product):
        CustomerProductPrice.objects.create(
            customer=customer, product=product, price=Decimal("8.50"), is_active=False
        )
        response = auth_client.get(f"/api/v1/products/?customer_id={customer.id}")
        assert response.data[0]["price"] == "10.00"

    def test_override_does_not_leak_to_other_customers(
        self, auth_client, customer, other_customer, product
    ):
        CustomerProductPrice.objects.create(
            customer=customer, product=product, price=Decimal("8.50")
        )
        response = auth_client.get(f"/api/v1/products/?customer_id={other_customer.id}")
        assert response.data[0]["price"] == "10.00"

    def test_unknown_customer_returns_404(self, auth_client, product):
        response = auth_client.get(f"/api/v1/products/?customer_id={MISSING_ID}")
        assert response.status_code == 404

    def test_malformed_customer_id_returns_400(self, auth_client):
        response = auth_client.get("/api/v1/products/?customer_id=not-a-uuid")
        assert response.status_code == 400
        assert response.data["type"] == "validation_error"

    def test_search_by_name(self, auth_client, product, product_b):
        response = auth_client.get("/api/v1/products/?search=7 L")
        assert [row["name"] for row in response.data] == ["Bidon 7 L"]


# ===========================================================================
# RETRIEVE
# ===========================================================================


class TestProductRetrieve:
    def test_retrieve_success(self, auth_client, product):
        response = auth_client.get(f"/api/v1/products/{product.id}/")
        assert response.status_code == 200
        assert response.data["name"] == "Bidon 20 L"
        assert response.data["id"] == str(product.id)
        assert response.data["capacity_liters"] == "20.00"

    def test_retrieve_inactive_product(self, auth_client, inactive_product):
        response = auth_client.get(f"/api/v1/products/{inactive_product.id}/")
        assert response.status_code == 200
        assert response.data["is_active"] is False

    def test_retrieve_not_found(self, auth_client):
        response = auth_client.get(f"/api/v1/products/{MISSING_ID}/")
        assert response.status_code == 404


# ===========================================================================
# CREATE
# ===========================================================================


class TestProductCreate:
    def test_create_success(self, auth_client):
        payload = {"name": "Bidon 10 L", "price": "7.00", "capacity_liters": "10"}
        response = auth_client.post("/api/v1/products/", payload, format="json")
        assert response.status_code == 201
        assert response.data["name"] == "Bidon 10 L"
        assert response.data["is_active"] is True
        assert Product.objects.filter(id=response.data["id"]).exists()

    def test_create_missing_price_returns_400(self, auth_client):
        response = auth_client.post("/api/v1/products/", {"name": "Incomplete"}, format="json")
        assert response.status_code == 400

    def test_create_blank_name_returns_400(self, auth_client):
        response = auth_client.post(
            "/api/v1/products/", {"name": "  ", "price": "5.00"}, format="json"
        )
        assert response.status_code == 400
        assert response.data["errors"][0]["attr"] == "name"

    @pytest.mark.parametrize("price", ["0", "-5.00", "1.234"])
    def test_create_invalid_price_returns_400(self, auth_client, price):
        response = auth_client.post(
            "/api/v1/products/", {"name": "Bad Price", "price": price}, format="json"
        )
        assert response.status_code == 400
        assert Product.objects.count() == 0

    def test_non_object_body_returns_400(self, auth_client):
        response = auth_client.post(
            "/api/v1/products/", [{"name": "Bidon 20 L", "price": "8.00"}], format="json"
        )
        assert response.status_code == 400
        assert response.data["type"] == "validation_error"
        assert Product.objects.count() == 0


# ===========================================================================
# UPDATE
# ===========================================================================


class TestProductUpdate:
    def test_patch_price(self, auth_client, product):
        response = auth_client.patch(
            f"/api/v1/products/{product.id}/", {"price": "12.00"}, format="json"
        )
        assert response.status_code == 200
        assert response.data["price"] == "12.00"
        assert response.data["name"] == "Bidon 20 L"

    def test_patch_not_found(self, auth_client):
        response = auth_client.patch(
            f"/api/v1/products/{MISSING_ID}/", {"name": "Ghost"}, format="json"
        )
        assert response.status_code == 404

    def test_put_replaces_all_fields(self, auth_client, product):
        response = auth_client.put(
            f"/api/v1/products/{product.id}/",
            {"name": "Bidon 20 L retornable", "price": "9.00"},
            format="json",
        )
        assert response.status_code == 200
        assert response.data["name"] == "Bidon 20 L retornable"
        assert response.data["capacity_liters"] is None
        assert response.data["is_active"] is True

    def test_patch_deactivate(self, auth_client, product):
        response = auth_client.patch(
            f"/api/v1/products/{product.id}/", {"is_active": False}, format="json"
        )
        assert response.status_code == 200
        assert response.data["is_active"] is False

    def test_patch_non_object_body_returns_400(self, auth_client, product):
        response = auth_client.patch(f"/api/v1/products/{product.id}/", ["12.00"], format="json")
        assert response.status_code == 400
        product.refresh_from_db()
        assert product.price == Decimal("10.00")


# ===========================================================================
# DESTROY
# ===========================================================================


class TestProductDestroy:
    def test_destroy_is_logical(self, auth_client, product):
        response = auth_client.delete(f"/api/v1/products/{product.id}/")
        assert response.status_code == 204
        product.refresh_from_db()
        assert product.is_active is False

        listing = auth_client.get("/api/v1/products/")
        assert listing.data == []

    def test_destroy_not_found(self, auth_client):
        response = auth_client.delete(f"/api/v1/products/{MISSING_ID}/")
        assert response.status_code == 404
