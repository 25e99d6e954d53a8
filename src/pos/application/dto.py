"""Data Transfer Objects: plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.  Monetary values are
pre-formatted strings (e.g. "$15.00").
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal


# --- Inputs -------------------------------------------------------------------


@dataclass(frozen=True)
class NewProductSpec:
    """Input: a product to add to the catalog.

    ``kind`` is one of "standard", "perishable" or "bulk"; only the fields
    of that kind are read.
    """

    kind: str
    name: str
    cost_price: str
    stock: int
    category: str = "Other"
    supplier: str = ""
    description: str = ""
    base_price: str = "0"
    markup: str = "0.30"
    expiration_date: date | None = None
    shelf_life_days: int = 0
    near_expiry_discount: str = "0.20"
    unit: str = ""
    price_per_unit: str = "0"
    minimum_quantity: str = "0.1"
    min_stock_level: int | None = None
    max_stock_level: int | None = None
    tags: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class SaleItemSpec:
    """Input: one product the customer brought to the till."""

    product_id: str
    quantity: Decimal
    discount: Decimal = Decimal("0")
    notes: str = ""


# --- Outputs ------------------------------------------------------------------


@dataclass(frozen=True)
class SaleResultDTO:
    transaction_id: int
    status: str
    final_total: str
    change_due: str
    points_earned: str
    receipt: str


@dataclass(frozen=True)
class TransactionSummaryDTO:
    id: int
    final_total: str
    payment_method: str
    status: str
    customer_name: str | None
    created_at: str


@dataclass(frozen=True)
class ProductLineDTO:
    id: str
    name: str
    product_type: str
    category: str
    selling_price: str
    stock: int
    min_stock: int
    restock: int
    is_active: bool


@dataclass(frozen=True)
class CustomerLineDTO:
    id: str
    name: str
    tier: str
    total_spent: str
    transactions: int
    loyalty_points: str
    upgrade_eligible: bool


# --- Reports ------------------------------------------------------------------


@dataclass(frozen=True)
class CategoryLineDTO:
    category: str
    product_count: int
    value: str


@dataclass(frozen=True)
class InventoryReportDTO:
    total_products: int
    active_products: int
    total_value: str
    total_cost: str
    potential_profit: str
    low_stock_count: int
    out_of_stock_count: int
    overstocked_count: int
    categories: list[CategoryLineDTO]
    products: list[ProductLineDTO]


@dataclass(frozen=True)
class SalesReportDTO:
    total_transactions: int
    completed: int
    refunded: int
    total_sales: str
    total_tax: str
    average_sale: str


@dataclass(frozen=True)
class CustomerAnalyticsDTO:
    total_customers: int
    total_spending: str
    top_customers: list[CustomerLineDTO]
    tier_distribution: dict[str, int]


@dataclass(frozen=True)
class FinancialSummaryDTO:
    inventory_value: str
    inventory_cost: str
    potential_profit: str
    profit_margin: str | None
    sales_revenue: str
    customer_spending: str
