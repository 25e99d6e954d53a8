"""Application queries: store reports.

Every report is a read-only view assembled from the repositories and
the inventory service; nothing here mutates state.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal

from pos.application.dto import (
    CategoryLineDTO,
    CustomerAnalyticsDTO,
    CustomerLineDTO,
    FinancialSummaryDTO,
    InventoryReportDTO,
    ProductLineDTO,
    SalesReportDTO,
)
from pos.domain.model.customer import Customer, CustomerTier
from pos.domain.model.product import Product, ProductCategory
from pos.domain.model.transaction import TransactionStatus
from pos.domain.model.value_objects import Money
from pos.domain.repository.customer_repository import CustomerRepository
from pos.domain.repository.product_repository import ProductRepository
from pos.domain.repository.transaction_repository import TransactionRepository
from pos.domain.service.inventory_service import InventoryService

TOP_CUSTOMER_COUNT = 5

_REFUNDED = (TransactionStatus.REFUNDED, TransactionStatus.PARTIALLY_REFUNDED)


def _money(amount: Decimal) -> str:
    """Format a signed amount; Money itself never goes negative."""
    if amount < 0:
        return f"-{Money(-amount)}"
    return str(Money(amount))


def product_line(product: Product, today: date | None = None) -> ProductLineDTO:
    return ProductLineDTO(
        id=product.id,
        name=product.name,
        product_type=product.product_type,
        category=product.category.value,
        selling_price=str(product.selling_price(today)),
        stock=product.current_stock,
        min_stock=product.min_stock_level,
        restock=product.restock_recommendation,
        is_active=product.is_active,
    )


def customer_line(customer: Customer) -> CustomerLineDTO:
    return CustomerLineDTO(
        id=customer.id,
        name=customer.full_name,
        tier=customer.tier.value,
        total_spent=_money(customer.total_spent),
        transactions=customer.transaction_count,
        loyalty_points=f"{customer.loyalty_points:.2f}",
        upgrade_eligible=customer.is_eligible_for_upgrade,
    )


def _completed_sales(transaction_repo: TransactionRepository) -> Money:
    total = Money.zero()
    for transaction in transaction_repo.list_all():
        if transaction.status is TransactionStatus.COMPLETED:
            total = total + transaction.final_total
    return total


class InventoryReportHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo
        self._inventory = InventoryService(product_repo)

    def handle(self, today: date | None = None) -> InventoryReportDTO:
        products = self._product_repo.list_all()
        categories = []
        for category in ProductCategory:
            members = self._inventory.by_category(category)
            if members:
                categories.append(
                    CategoryLineDTO(
                        category=category.value,
                        product_count=len(members),
                        value=str(self._inventory.category_value(category, today)),
                    )
                )

        return InventoryReportDTO(
            total_products=len(products),
            active_products=self._inventory.active_count(),
            total_value=str(self._inventory.total_value(today)),
            total_cost=str(self._inventory.total_cost()),
            potential_profit=_money(self._inventory.potential_profit(today)),
            low_stock_count=len(self._inventory.low_stock()),
            out_of_stock_count=len(self._inventory.out_of_stock()),
            overstocked_count=len(self._inventory.overstocked()),
            categories=categories,
            products=[product_line(p, today) for p in products],
        )


class LowStockReportHandler:
    """Active products at or below their minimum level, with restock advice."""

    def __init__(self, product_repo: ProductRepository) -> None:
        self._inventory = InventoryService(product_repo)

    def handle(self, today: date | None = None) -> list[ProductLineDTO]:
        return [product_line(p, today) for p in self._inventory.low_stock()]


class SalesReportHandler:

    def __init__(self, transaction_repo: TransactionRepository) -> None:
        self._transaction_repo = transaction_repo

    def handle(self) -> SalesReportDTO:
        transactions = self._transaction_repo.list_all()
        total_sales = Money.zero()
        total_tax = Money.zero()
        completed = 0
        refunded = 0
        for transaction in transactions:
            if transaction.status is TransactionStatus.COMPLETED:
                total_sales = total_sales + transaction.final_total
                total_tax = total_tax + transaction.tax
                completed += 1
            elif transaction.status in _REFUNDED:
                refunded += 1

        average = Money(total_sales.amount / completed) if completed else Money.zero()
        return SalesReportDTO(
            total_transactions=len(transactions),
            completed=completed,
            refunded=refunded,
            total_sales=str(total_sales),
            total_tax=str(total_tax),
            average_sale=str(average),
        )


class CustomerAnalyticsHandler:

    def __init__(self, customer_repo: CustomerRepository) -> None:
        self._customer_repo = customer_repo

    def handle(self) -> CustomerAnalyticsDTO:
        customers = self._customer_repo.list_all()
        spending = sum((c.total_spent for c in customers), Decimal("0"))
        return CustomerAnalyticsDTO(
            total_customers=len(customers),
            total_spending=_money(spending),
            top_customers=[
                customer_line(c)
                for c in self._customer_repo.top_spenders(TOP_CUSTOMER_COUNT)
            ],
            tier_distribution={
                tier.value: len(self._customer_repo.list_by_tier(tier))
                for tier in CustomerTier
            },
        )


class FinancialSummaryHandler:

    def __init__(
        self,
        product_repo: ProductRepository,
        customer_repo: CustomerRepository,
        transaction_repo: TransactionRepository,
    ) -> None:
        self._inventory = InventoryService(product_repo)
        self._customer_repo = customer_repo
        self._transaction_repo = transaction_repo

    def handle(self, today: date | None = None) -> FinancialSummaryDTO:
        value = self._inventory.total_value(today)
        cost = self._inventory.total_cost()
        profit = self._inventory.potential_profit(today)

        margin = None
        if not cost.is_zero:
            margin = f"{profit / cost.amount * 100:.1f}%"

        spending = sum(
            (c.total_spent for c in self._customer_repo.list_all()), Decimal("0")
        )
        return FinancialSummaryDTO(
            inventory_value=str(value),
            inventory_cost=str(cost),
            potential_profit=_money(profit),
            profit_margin=margin,
            sales_revenue=str(_completed_sales(self._transaction_repo)),
            customer_spending=_money(spending),
        )
