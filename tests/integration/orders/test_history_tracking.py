"""Integration tests for GET /api/v1/orders/{id}/history/."""

from __future__ import annotations

from uuid import uuid4

import pytest

from modules.orders.models import OrderStatusHistory

pytestmark = pytest.mark.integration


@pytest.fixture()
def order_id(auth_client, customer, address, product):
    response = auth_client.post(
        "/api/v1/orders/",
        {
            "customer_id": str(customer.id),
            "address_id": str(address.id),
            "items": [{"product_id": str(product.id), "quantity": 2}],
        },
        format="json",
    )
    return response.data["order_id"]


class TestHistoryAPI:
    def test_creation_entry(self, auth_client, order_id, customer):
        response = auth_client.get(f"/api/v1/orders/{order_id}/history/")

        assert response.status_code == 200
        assert len(response.data) == 1
        entry = response.data[0]
        assert entry["old_status"] is None
        assert entry["new_status"] == "pending"
        assert str(entry["changed_by"]) == str(customer.id)
        assert entry["note"] == "order created"
        assert entry["changed_at"]

    def test_chronological_after_transitions(self, auth_client, order_id, driver):
        auth_client.patch(
            f"/api/v1/orders/{order_id}/assign/", {"driver_id": str(driver.id)}, format="json"
        )
        auth_client.patch(
            f"/api/v1/orders/{order_id}/status/",
            {"new_status": "en_route", "changed_by": str(driver.id), "note": "left depot"},
            format="json",
        )

        response = auth_client.get(f"/api/v1/orders/{order_id}/history/")

        assert [(e["old_status"], e["new_status"]) for e in response.data] == [
            (None, "pending"),
            ("pending", "assigned"),
            ("assigned", "en_route"),
        ]
        assert response.data[1]["note"] == "assigned to driver"
        assert str(response.data[1]["changed_by"]) == str(driver.id)
        assert response.data[2]["note"] == "left depot"

    def test_rejected_transition_leaves_no_entry(self, auth_client, order_id, driver):
        auth_client.patch(
            f"/api/v1/orders/{order_id}/status/",
            {"new_status": "delivered", "changed_by": str(driver.id)},
            format="json",
        )
        assert OrderStatusHistory.objects.filter(order_id=order_id).count() == 1

    def test_unknown_order_404(self, auth_client):
        response = auth_client.get(f"/api/v1/orders/{uuid4()}/history/")
        assert response.status_code == 404
