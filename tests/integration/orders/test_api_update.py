"""Integration tests for PATCH /orders/{id}/assign/ and /orders/{id}/status/."""

from __future__ import annotations

from uuid import uuid4

import pytest

from modules.orders.constants import OrderStatus
from modules.orders.models import Order

pytestmark = pytest.mark.integration


@pytest.fixture()
def order_id(auth_client, customer, address, product):
    response = auth_client.post(
        "/api/v1/orders/",
        {
            "customer_id": str(customer.id),
            "address_id": str(address.id),
            "items": [{"product_id": str(product.id), "quantity": 1}],
        },
        format="json",
    )
    return response.data["order_id"]


def _assign(client, order_id, driver_id):
    return client.patch(
        f"/api/v1/orders/{order_id}/assign/", {"driver_id": str(driver_id)}, format="json"
    )


def _status(client, order_id, new_status, actor, note=None):
    body = {"new_status": new_status, "changed_by": str(actor.id)}
    if note is not None:
        body["note"] = note
    return client.patch(f"/api/v1/orders/{order_id}/status/", body, format="json")


class TestAssignAPI:
    def test_assigns_driver(self, auth_client, order_id, driver):
        response = _assign(auth_client, order_id, driver.id)

        assert response.status_code == 200
        assert response.data["status"] == OrderStatus.ASSIGNED
        assert str(response.data["assigned_driver_id"]) == str(driver.id)

    def test_second_assignment_is_invalid_transition(self, auth_client, order_id, driver):
        _assign(auth_client, order_id, driver.id)
        response = _assign(auth_client, order_id, driver.id)

        assert response.status_code == 400
        assert response.data["type"] == "invalid_transition"
        assert "'assigned'" in response.data["errors"][0]["detail"]

    def test_non_driver_404(self, auth_client, order_id, customer):
        response = _assign(auth_client, order_id, customer.id)
        assert response.status_code == 404
        assert Order.objects.get(id=order_id).status == OrderStatus.PENDING

    def test_unknown_order_404(self, auth_client, driver):
        response = _assign(auth_client, uuid4(), driver.id)
        assert response.status_code == 404

    def test_missing_driver_id_400(self, auth_client, order_id):
        response = auth_client.patch(f"/api/v1/orders/{order_id}/assign/", {}, format="json")
        assert response.status_code == 400
        assert response.data["errors"][0]["attr"] == "driver_id"


class TestStatusAPI:
    def test_lifecycle_to_delivered(self, auth_client, order_id, driver):
        _assign(auth_client, order_id, driver.id)
        en_route = _status(auth_client, order_id, "en_route", driver)
        delivered = _status(auth_client, order_id, "delivered", driver, "signed by guard")

        assert en_route.status_code == 200
        assert en_route.data["delivered_at"] is None
        assert delivered.status_code == 200
        assert delivered.data["status"] == OrderStatus.DELIVERED
        assert delivered.data["delivered_at"] is not None

    def test_cancel_pending(self, auth_client, order_id, customer):
        response = _status(auth_client, order_id, "cancelled", customer, "changed my mind")
        assert response.status_code == 200
        assert response.data["status"] == OrderStatus.CANCELLED

    def test_assigned_via_status_endpoint_rejected(self, auth_client, order_id, manager):
        response = _status(auth_client, order_id, "assigned", manager)

        assert response.status_code == 400
        assert "/assign/" in response.data["errors"][0]["detail"]
        assert Order.objects.get(id=order_id).status == OrderStatus.PENDING

    def test_illegal_transition_names_both_statuses(self, auth_client, order_id, manager):
        response = _status(auth_client, order_id, "delivered", manager)

        assert response.status_code == 400
        assert response.data["type"] == "invalid_transition"
        detail = response.data["errors"][0]["detail"]
        assert "'pending'" in detail
        assert "'delivered'" in detail

    def test_terminal_order_rejects_everything(self, auth_client, order_id, manager):
        _status(auth_client, order_id, "cancelled", manager)
        response = _status(auth_client, order_id, "cancelled", manager)
        assert response.status_code == 400
        assert response.data["type"] == "invalid_transition"

    def test_unknown_status_400(self, auth_client, order_id, manager):
        response = _status(auth_client, order_id, "shipped", manager)
        assert response.status_code == 400
        assert response.data["type"] == "validation_error"
        assert response.data["errors"][0]["attr"] == "new_status"

    def test_unknown_actor_404(self, auth_client, order_id):
        response = auth_client.patch(
            f"/api/v1/orders/{order_id}/status/",
            {"new_status": "cancelled", "changed_by": str(uuid4())},
            format="json",
        )
        assert response.status_code == 404
        assert Order.objects.get(id=order_id).status == OrderStatus.PENDING

    def test_changed_by_required(self, auth_client, order_id):
        response = auth_client.patch(
            f"/api/v1/orders/{order_id}/status/", {"new_status": "cancelled"}, format="json"
        )
        assert response.status_code == 400
