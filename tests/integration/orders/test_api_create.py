"""Integration tests for POST /api/v1/orders/."""

from __future__ import annotations

from decimal import Decimal
from uuid import uuid4

import pytest

from modules.orders.constants import MAX_ITEM_QUANTITY
from modules.orders.models import Order, OrderItem, OrderStatusHistory
from modules.pricing.models import CustomerProductPrice

pytestmark = pytest.mark.integration

URL = "/api/v1/orders/"


@pytest.fixture()
def payload(customer, address, product):
    return {
        "customer_id": str(customer.id),
        "address_id": str(address.id),
        "items": [{"product_id": str(product.id), "quantity": 3}],
        "notes": "ring twice",
    }


class TestCreateOrderAPI:
    def test_unauthenticated_returns_401(self, api_client, payload):
        response = api_client.post(URL, payload, format="json")
        assert response.status_code == 401

    def test_returns_order_id(self, auth_client, payload):
        response = auth_client.post(URL, payload, format="json")

        assert response.status_code == 201
        order = Order.objects.get(id=response.data["order_id"])
        assert order.subtotal == Decimal("30.00")
        assert order.notes == "ring twice"

    def test_uses_customer_override(self, auth_client, payload, customer, product):
        CustomerProductPrice.objects.create(
            customer=customer, product=product, price=Decimal("8.50")
        )
        payload["items"][0]["quantity"] = 2

        response = auth_client.post(URL, payload, format="json")

        assert response.status_code == 201
        item = OrderItem.objects.get(order_id=response.data["order_id"])
        assert item.unit_price == Decimal("8.50")
        assert Order.objects.get(id=response.data["order_id"]).subtotal == Decimal("17.00")

    def test_empty_items_rejected(self, auth_client, payload):
        payload["items"] = []
        response = auth_client.post(URL, payload, format="json")

        assert response.status_code == 400
        assert response.data["type"] == "validation_error"
        assert response.data["errors"][0]["attr"].startswith("items")
        assert Order.objects.count() == 0

    def test_zero_quantity_rejected(self, auth_client, payload):
        payload["items"][0]["quantity"] = 0
        response = auth_client.post(URL, payload, format="json")

        assert response.status_code == 400
        assert response.data["errors"][0]["attr"] == "items.0.quantity"

    @pytest.mark.parametrize("quantity", [MAX_ITEM_QUANTITY + 1, 10**20])
    def test_oversized_quantity_rejected(self, auth_client, payload, quantity):
        payload["items"][0]["quantity"] = quantity
        response = auth_client.post(URL, payload, format="json")

        assert response.status_code == 400
        assert response.data["errors"][0]["attr"] == "items.0.quantity"
        assert Order.objects.count() == 0

    def test_amount_too_large_rejected_and_reads_unaffected(
        self, auth_client, payload, customer, product
    ):
        existing = auth_client.post(URL, payload, format="json").data["order_id"]
        CustomerProductPrice.objects.create(
            customer=customer, product=product, price=Decimal("99999999.99")
        )
        payload["items"][0]["quantity"] = 1000

        response = auth_client.post(URL, payload, format="json")

        assert response.status_code == 400
        assert response.data["type"] == "validation_error"
        assert Order.objects.count() == 1
        assert auth_client.get(URL).status_code == 200
        assert auth_client.get(f"{URL}{existing}/").status_code == 200

    def test_missing_address_rejected(self, auth_client, payload):
        del payload["address_id"]
        response = auth_client.post(URL, payload, format="json")
        assert response.status_code == 400
        assert response.data["errors"][0]["attr"] == "address_id"

    def test_unknown_customer_404(self, auth_client, payload):
        payload["customer_id"] = str(uuid4())
        response = auth_client.post(URL, payload, format="json")
        assert response.status_code == 404
        assert response.data["type"] == "not_found"

    def test_foreign_address_404(self, auth_client, payload, other_customer):
        payload["customer_id"] = str(other_customer.id)
        response = auth_client.post(URL, payload, format="json")
        assert response.status_code == 404

    def test_inactive_product_404_and_nothing_written(
        self, auth_client, payload, inactive_product
    ):
        payload["items"].append({"product_id": str(inactive_product.id), "quantity": 1})
        response = auth_client.post(URL, payload, format="json")

        assert response.status_code == 404
        assert str(inactive_product.id) in response.data["errors"][0]["detail"]
        assert Order.objects.count() == 0
        assert OrderItem.objects.count() == 0
        assert OrderStatusHistory.objects.count() == 0
