from __future__ import annotations

import random
from decimal import Decimal

from decouple import config
from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand

from modules.addresses.models import Address
from modules.addresses.repositories.django_repository import AddressDjangoRepository
from modules.orders.constants import OrderStatus
from modules.orders.dtos import (
    AssignOrderDTO,
    CreateOrderDTO,
    CreateOrderItemDTO,
    UpdateStatusDTO,
)
from modules.orders.models import Order
from modules.orders.repositories.django_repository import OrderDjangoRepository
from modules.orders.services import OrderService
from modules.pricing.dtos import UpsertPriceOverrideDTO
from modules.pricing.views import build_pricing_service
from modules.products.models import Product
from modules.users.models import User, UserRole
from modules.users.repositories.django_repository import UserDjangoRepository


class Command(BaseCommand):
    help = "Seed database with a small development catalogue, customers and orders."

    def handle(self, *args, **options):
        random.seed(42)
        self.stdout.write("Seeding development data...")

        api_users = self._seed_api_user()
        customers, drivers = self._seed_users()
        products = self._seed_products()
        overrides = self._seed_overrides(customers, products)
        orders_created = self._seed_orders(customers, drivers, products)

        self.stdout.write(
            self.style.SUCCESS(
                "Seed completed: "
                f"api_users={api_users}, "
                f"customers={len(customers)}, "
                f"drivers={len(drivers)}, "
                f"products={len(products)}, "
                f"overrides={overrides}, "
                f"orders={orders_created}"
            )
        )

    def _seed_api_user(self) -> int:
        """API login account; the password comes from the environment, never a default."""
        password = config("SEED_ADMIN_PASSWORD", default="")
        if not password:
            self.stdout.write(
                self.style.WARNING("SEED_ADMIN_PASSWORD not set; skipping API user.")
            )
            return 0
        AuthUser = get_user_model()
        if AuthUser.objects.filter(username="admin").exists():
            return 0
        AuthUser.objects.create_superuser("admin", password=password)
        return 1

    def _seed_users(self) -> tuple[list[User], list[User]]:
        self.stdout.write("Creating users...")
        people = [
            ("Rosa Quispe", UserRole.CUSTOMER, "rosa@example.com", "Av. Arequipa 1234"),
            ("Luis Mamani", UserRole.CUSTOMER, "luis@example.com", "Jr. Huallaga 560"),
            ("Bodega Don Pepe", UserRole.CUSTOMER, "pepe@example.com", "Calle Lima 88"),
            ("Carmen Flores", UserRole.CUSTOMER, "carmen@example.com", "Av. Brasil 2100"),
            ("Jorge Huamán", UserRole.DRIVER, "jorge@example.com", None),
            ("Pedro Condori", UserRole.DRIVER, "pedro@example.com", None),
            ("Ana Torres", UserRole.MANAGER, "ana@example.com", None),
        ]
        customers: list[User] = []
        drivers: list[User] = []
        for full_name, role, email, street in people:
            user, _ = User.objects.get_or_create(
                email=email,
                defaults={"full_name": full_name, "role": role, "is_active": True},
            )
            if street:
                Address.objects.get_or_create(
                    user=user,
                    street=street,
                    defaults={"label": "Casa", "is_default": True},
                )
            if role == UserRole.CUSTOMER:
                customers.append(user)
            elif role == UserRole.DRIVER:
                drivers.append(user)
        self.stdout.write(self.style.SUCCESS("Creating users... Done!"))
        return customers, drivers

    def _seed_products(self) -> list[Product]:
        self.stdout.write("Creating products...")
        catalog = [
            ("Bidón 20 L", Decimal("20.00"), Decimal("10.00")),
            ("Bidón 7 L", Decimal("7.00"), Decimal("5.50")),
            ("Recarga 20 L", Decimal("20.00"), Decimal("7.00")),
            ("Dispensador manual", None, Decimal("15.00")),
        ]
        products: list[Product] = []
        for name, capacity, price in catalog:
            product, _ = Product.objects.get_or_create(
                name=name,
                defaults={"capacity_liters": capacity, "price": price},
            )
            products.append(product)
        self.stdout.write(self.style.SUCCESS("Creating products... Done!"))
        return products

    def _seed_overrides(self, customers: list[User], products: list[Product]) -> int:
        """Wholesale price for the shop customer on refills."""
        pricing = build_pricing_service()
        shops = [c for c in customers if c.full_name.startswith("Bodega")]
        refills = [p for p in products if p.name.startswith("Recarga")]
        for customer in shops:
            for product in refills:
                pricing.set_override(
                    UpsertPriceOverrideDTO(
                        customer_id=customer.id,
                        product_id=product.id,
                        price=product.price - Decimal("1.00"),
                    )
                )
        return len(shops) * len(refills)

    def _seed_orders(
        self, customers: list[User], drivers: list[User], products: list[Product]
    ) -> int:
        self.stdout.write("Creating orders...")
        if Order.objects.exists():
            self.stdout.write(self.style.WARNING("Orders already present; skipping."))
            return 0
        if not customers or not drivers or not products:
            self.stdout.write(self.style.WARNING("Skipping orders (no users/products)."))
            return 0

        service = OrderService(
            order_repository=OrderDjangoRepository(),
            user_repository=UserDjangoRepository(),
            address_repository=AddressDjangoRepository(),
            pricing_service=build_pricing_service(),
        )
        final_states = [
            OrderStatus.PENDING,
            OrderStatus.ASSIGNED,
            OrderStatus.EN_ROUTE,
            OrderStatus.DELIVERED,
            OrderStatus.CANCELLED,
        ]

        created = 0
        for i in range(20):
            customer = random.choice(customers)
            address = customer.addresses.first()
            items = [
                CreateOrderItemDTO(product_id=product.id, quantity=random.randint(1, 4))
                for product in random.sample(products, k=random.randint(1, 2))
            ]
            order = service.create_order(
                CreateOrderDTO(
                    customer_id=customer.id,
                    address_id=address.id,
                    items=items,
                    notes=f"Seed order {i + 1}",
                )
            )
            created += 1

            target = random.choice(final_states)
            if target == OrderStatus.PENDING:
                continue
            if target == OrderStatus.CANCELLED:
                service.update_status(
                    str(order.id),
                    UpdateStatusDTO(
                        new_status=OrderStatus.CANCELLED,
                        changed_by=customer.id,
                        note="customer cancelled",
                    ),
                )
                continue

            driver = random.choice(drivers)
            service.assign_order(str(order.id), AssignOrderDTO(driver_id=driver.id))
            for step in (OrderStatus.EN_ROUTE, OrderStatus.DELIVERED):
                if final_states.index(step) > final_states.index(target):
                    break
                service.update_status(
                    str(order.id),
                    UpdateStatusDTO(new_status=step, changed_by=driver.id),
                )

        self.stdout.write(self.style.SUCCESS("Creating orders... Done!"))
        return created
