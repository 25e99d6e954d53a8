"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.  It also owns the
register's configuration defaults and the demo data a fresh store is
seeded with.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, timedelta

from pos.domain.model.customer import Customer, CustomerTier
from pos.domain.model.product import Product, ProductCategory
from pos.domain.model.value_objects import Money, Rate
from pos.infrastructure.persistence.in_memory_customer_repository import (
    InMemoryCustomerRepository,
)
from pos.infrastructure.persistence.in_memory_product_repository import (
    InMemoryProductRepository,
)
from pos.infrastructure.persistence.in_memory_transaction_repository import (
    InMemoryTransactionRepository,
)

logger = logging.getLogger(__name__)

DEFAULT_TAX_RATE = "0.08"
DEFAULT_CASHIER_ID = "CASHIER01"


@dataclass
class Settings:
    """Register settings; the CLI fills them from options / env vars."""

    tax_rate: Rate
    cashier_id: str

    @staticmethod
    def of(tax_rate: str = DEFAULT_TAX_RATE, cashier_id: str = DEFAULT_CASHIER_ID) -> Settings:
        return Settings(tax_rate=Rate.of(tax_rate), cashier_id=cashier_id)


@dataclass
class Store:
    """Everything one register session works against."""

    products: InMemoryProductRepository
    customers: InMemoryCustomerRepository
    transactions: InMemoryTransactionRepository
    settings: Settings


def build_store(settings: Settings | None = None, seed: bool = True) -> Store:
    store = Store(
        products=InMemoryProductRepository(),
        customers=InMemoryCustomerRepository(),
        transactions=InMemoryTransactionRepository(),
        settings=settings or Settings.of(),
    )
    if seed:
        seed_demo_data(store)
    return store


def seed_demo_data(store: Store, today: date | None = None) -> None:
    today = today or date.today()
    for product in _demo_products(today):
        store.products.save(product)
    for first, last, tier in (
        ("John", "Doe", CustomerTier.REGULAR),
        ("Jane", "Smith", CustomerTier.PREMIUM),
        ("Bob", "Johnson", CustomerTier.VIP),
    ):
        store.customers.save(
            Customer(
                id=store.customers.next_id(),
                first_name=first,
                last_name=last,
                email=f"{first.lower()}.{last.lower()}@email.com",
                phone=f"+123456789{len(store.customers.list_all())}",
                tier=tier,
            )
        )
    logger.debug(
        "Seeded %s products and %s customers",
        len(store.products.list_all()), len(store.customers.list_all()),
    )


def _demo_products(today: date) -> list[Product]:
    return [
        Product.standard(
            id="P001",
            name="Coca Cola 330ml",
            base_price=Money.of("2.50"),
            cost_price=Money.of("1.20"),
            stock=50,
            markup="0.3",
            category=ProductCategory.BEVERAGES,
            supplier="Coca Cola Co",
            description="Classic Coca Cola can",
        ),
        Product.standard(
            id="P002",
            name="Lay's Chips Original",
            base_price=Money.of("3.00"),
            cost_price=Money.of("1.50"),
            stock=30,
            markup="0.25",
            category=ProductCategory.SNACKS,
            supplier="Frito-Lay",
            description="Crispy potato chips",
        ),
        Product.perishable(
            id="P003",
            name="Fresh Milk 1L",
            base_price=Money.of("4.00"),
            cost_price=Money.of("2.50"),
            stock=15,
            expiration_date=today + timedelta(days=7),
            shelf_life_days=7,
            category=ProductCategory.DAIRY,
            supplier="Dairy Farm",
            description="Whole milk",
        ),
        Product.bulk(
            id="P004",
            name="Rice Premium",
            price_per_unit=Money.of("2.50"),
            cost_price=Money.of("1.80"),
            stock=100,
            unit="kg",
            minimum_quantity="0.5",
            category=ProductCategory.OTHER,
            supplier="Rice Supplier",
            description="Premium jasmine rice",
        ),
        Product.standard(
            id="P005",
            name="Chocolate Bar",
            base_price=Money.of("2.00"),
            cost_price=Money.of("1.00"),
            stock=8,
            markup="0.4",
            category=ProductCategory.SNACKS,
            supplier="Chocolate Co",
            description="Dark chocolate bar",
        ),
    ]
