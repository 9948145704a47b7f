from decimal import Decimal

import pytest
from django.contrib.auth import get_user_model
from rest_framework.test import APIClient

from modules.addresses.models import Address
from modules.products.models import Product
from modules.users.models import User, UserRole

AuthUser = get_user_model()


@pytest.fixture(autouse=True)
def _use_db(db):
    """Automatically use the test database for all tests."""


@pytest.fixture()
def api_client():
    """DRF APIClient for testing API endpoints."""
    return APIClient()


@pytest.fixture()
def api_client_with_correlation(api_client):
    """APIClient pre-configured with a known correlation ID header."""
    cid = "test-correlation-id-fixture"
    api_client.defaults["HTTP_X_REQUEST_ID"] = cid
    return api_client, cid


@pytest.fixture()
def auth_client():
    """APIClient with a force-authenticated Django user."""
    client = APIClient()
    user = AuthUser.objects.create_user(username="apiuser", password="testpass123")
    client.force_authenticate(user=user)
    return client


# ---------------------------------------------------------------------------
# Domain fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def customer():
    return User.objects.create(
        full_name="Rosa Quispe",
        role=UserRole.CUSTOMER,
        phone="987654321",
        email="rosa@example.com",
        num_doc="45678912",
    )


@pytest.fixture()
def other_customer():
    return User.objects.create(
        full_name="Luis Mamani",
        role=UserRole.CUSTOMER,
        email="luis@example.com",
    )


@pytest.fixture()
def driver():
    return User.objects.create(
        full_name="Jorge Huaman",
        role=UserRole.DRIVER,
        email="jorge@example.com",
    )


@pytest.fixture()
def manager():
    return User.objects.create(
        full_name="Ana Torres",
        role=UserRole.MANAGER,
        email="ana@example.com",
    )


@pytest.fixture()
def address(customer):
    return Address.objects.create(
        user=customer,
        label="Casa",
        street="Av. Arequipa 1234",
        is_default=True,
    )


@pytest.fixture()
def product():
    """Base price 10.00."""
    return Product.objects.create(
        name="Bidon 20 L",
        capacity_liters=Decimal("20.00"),
        price=Decimal("10.00"),
    )


@pytest.fixture()
def product_b():
    return Product.objects.create(
        name="Bidon 7 L",
        capacity_liters=Decimal("7.00"),
        price=Decimal("5.50"),
    )


@pytest.fixture()
def inactive_product():
    return Product.objects.create(
        name="Bidon descontinuado",
        price=Decimal("8.00"),
        is_active=False,
    )
