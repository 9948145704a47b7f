"""Unit tests for PricingService.

Covers:
- Resolution precedence: active override, else base price.
- Inactive overrides are ignored but kept.
- Unknown or inactive products have no effective price.
- Bulk listing and point reads agree.
- Override upsert is idempotent and keyed by (customer, product).
- Override removal is a no-op when absent.
"""

from __future__ import annotations

from decimal import Decimal
from uuid import uuid4

import pytest

from modules.pricing.dtos import UpsertPriceOverrideDTO
from modules.pricing.models import CustomerProductPrice
from modules.pricing.repositories import PriceOverrideDjangoRepository
from modules.pricing.services import PricingService
from modules.products.exceptions import ProductNotFound
from modules.products.repositories.django_repository import ProductDjangoRepository
from modules.users.exceptions import CustomerNotFound
from modules.users.repositories.django_repository import UserDjangoRepository

pytestmark = pytest.mark.unit


@pytest.fixture()
def service():
    return PricingService(
        override_repository=PriceOverrideDjangoRepository(),
        product_repository=ProductDjangoRepository(),
        user_repository=UserDjangoRepository(),
    )


def _override(customer, product, price, is_active=True):
    return UpsertPriceOverrideDTO(
        customer_id=customer.id,
        product_id=product.id,
        price=Decimal(price),
        is_active=is_active,
    )


class TestResolveEffectivePrice:
    def test_base_price_without_override(self, service, customer, product):
        assert service.resolve_effective_price(customer.id, product.id) == Decimal("10.00")

    def test_active_override_wins(self, service, customer, product):
        service.set_override(_override(customer, product, "8.50"))
        assert service.resolve_effective_price(customer.id, product.id) == Decimal("8.50")

    def test_override_applies_only_to_its_customer(
        self, service, customer, other_customer, product
    ):
        service.set_override(_override(customer, product, "8.50"))
        assert service.resolve_effective_price(other_customer.id, product.id) == Decimal(
            "10.00"
        )

    def test_inactive_override_falls_back_to_base_price(self, service, customer, product):
        service.set_override(_override(customer, product, "8.50", is_active=False))

        assert service.resolve_effective_price(customer.id, product.id) == Decimal("10.00")
        assert CustomerProductPrice.objects.filter(customer=customer, product=product).exists()

    def test_reactivating_override_restores_its_price(self, service, customer, product):
        service.set_override(_override(customer, product, "8.50", is_active=False))
        service.set_override(_override(customer, product, "8.50", is_active=True))
        assert service.resolve_effective_price(customer.id, product.id) == Decimal("8.50")

    def test_base_price_change_is_seen_without_override(self, service, customer, product):
        product.price = Decimal("11.00")
        product.save()
        assert service.resolve_effective_price(customer.id, product.id) == Decimal("11.00")

    def test_unknown_product_raises(self, service, customer):
        with pytest.raises(ProductNotFound):
            service.resolve_effective_price(customer.id, uuid4())

    def test_inactive_product_raises_even_with_override(
        self, service, customer, inactive_product
    ):
        service.set_override(_override(customer, inactive_product, "3.00"))
        with pytest.raises(ProductNotFound):
            service.resolve_effective_price(customer.id, inactive_product.id)

    def test_malformed_product_id_raises(self, service, customer):
        with pytest.raises(ProductNotFound):
            service.resolve_effective_price(customer.id, "not-a-uuid")


class TestListEffectivePrices:
    def test_base_prices_without_customer(self, service, product, product_b, inactive_product):
        prices = {p.id: p.effective_price for p in service.list_effective_prices()}
        assert prices == {product.id: Decimal("10.00"), product_b.id: Decimal("5.50")}

    def test_overrides_overlaid_for_customer(self, service, customer, product, product_b):
        service.set_override(_override(customer, product, "8.50"))
        service.set_override(_override(customer, product_b, "4.00", is_active=False))

        rows = {p.id: p for p in service.list_effective_prices(customer.id)}

        assert rows[product.id].effective_price == Decimal("8.50")
        assert rows[product.id].base_price == Decimal("10.00")
        assert rows[product_b.id].effective_price == Decimal("5.50")

    def test_bulk_and_point_reads_agree(self, service, customer, product, product_b):
        service.set_override(_override(customer, product_b, "4.75"))
        for row in service.list_effective_prices(customer.id):
            assert row.effective_price == service.resolve_effective_price(customer.id, row.id)

    def test_unknown_customer_raises(self, service, product):
        with pytest.raises(CustomerNotFound):
            service.list_effective_prices(uuid4())


class TestSetOverride:
    def test_creates_single_row(self, service, customer, product):
        override = service.set_override(_override(customer, product, "8.50"))
        assert override.price == Decimal("8.50")
        assert override.is_active is True
        assert CustomerProductPrice.objects.count() == 1

    def test_replaces_existing_row_in_place(self, service, customer, product):
        first = service.set_override(_override(customer, product, "8.50"))
        second = service.set_override(_override(customer, product, "7.25", is_active=False))

        assert second.id == first.id
        row = CustomerProductPrice.objects.get()
        assert row.price == Decimal("7.25")
        assert row.is_active is False

    def test_identical_resubmission_changes_nothing(self, service, customer, product):
        first = service.set_override(_override(customer, product, "8.50"))
        stamp = CustomerProductPrice.objects.get().updated_at

        again = service.set_override(_override(customer, product, "8.50"))

        assert again.id == first.id
        assert CustomerProductPrice.objects.count() == 1
        assert CustomerProductPrice.objects.get().updated_at == stamp
        assert service.resolve_effective_price(customer.id, product.id) == Decimal("8.50")

    def test_inactive_product_may_carry_override(self, service, customer, inactive_product):
        service.set_override(_override(customer, inactive_product, "3.00"))
        assert CustomerProductPrice.objects.filter(product=inactive_product).exists()

    def test_unknown_customer_raises(self, service, product):
        dto = UpsertPriceOverrideDTO(customer_id=uuid4(), product_id=product.id, price="8.50")
        with pytest.raises(CustomerNotFound):
            service.set_override(dto)
        assert CustomerProductPrice.objects.count() == 0

    def test_unknown_product_raises(self, service, customer):
        dto = UpsertPriceOverrideDTO(customer_id=customer.id, product_id=uuid4(), price="8.50")
        with pytest.raises(ProductNotFound):
            service.set_override(dto)


class TestRemoveOverride:
    def test_removes_row_and_reverts_to_base(self, service, customer, product):
        service.set_override(_override(customer, product, "8.50"))
        service.remove_override(customer.id, product.id)

        assert CustomerProductPrice.objects.count() == 0
        assert service.resolve_effective_price(customer.id, product.id) == Decimal("10.00")

    def test_absent_row_is_noop(self, service, customer, product):
        service.remove_override(customer.id, product.id)
        assert CustomerProductPrice.objects.count() == 0

    def test_list_overrides_includes_inactive(self, service, customer, product, product_b):
        service.set_override(_override(customer, product, "8.50"))
        service.set_override(_override(customer, product_b, "4.00", is_active=False))

        overrides = list(service.list_overrides(customer.id))

        assert {(o.product_id, o.is_active) for o in overrides} == {
            (product.id, True),
            (product_b.id, False),
        }
