"""Product aggregate.

Products live in the catalog independently of sales.  Every product
carries exactly one pricing policy (standard markup, perishable with a
near-expiry markdown, or bulk priced by quantity) and derives its selling
price purely from its own fields.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Union

from pos.domain.exceptions import ValidationError
from pos.domain.model.value_objects import Money, Rate, decimal_of

logger = logging.getLogger(__name__)

NEAR_EXPIRY_SHELF_FRACTION = Decimal("0.2")
OVERSTOCK_FRACTION = Decimal("0.9")


class ProductCategory(Enum):
    BEVERAGES = "Beverages"
    SNACKS = "Snacks"
    DAIRY = "Dairy"
    BAKERY = "Bakery"
    HOUSEHOLD = "Household"
    ELECTRONICS = "Electronics"
    HEALTH_BEAUTY = "Health & Beauty"
    OTHER = "Other"

    @staticmethod
    def from_label(label: str) -> ProductCategory:
        """Resolve a display label; unknown labels fall back to OTHER."""
        for category in ProductCategory:
            if category.value.lower() == label.strip().lower():
                return category
        return ProductCategory.OTHER


# ---------------------------------------------------------------------------
# Pricing policies
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class StandardPricing:
    markup: Decimal = Decimal("0.30")

    def __post_init__(self) -> None:
        if self.markup < 0:
            raise ValidationError("Markup cannot be negative")


@dataclass(frozen=True)
class PerishablePricing:
    expiration_date: date
    shelf_life_days: int
    near_expiry_discount: Rate = Rate(Decimal("0.20"))

    def __post_init__(self) -> None:
        if self.shelf_life_days <= 0:
            raise ValidationError("Shelf life must be at least one day")


@dataclass(frozen=True)
class BulkPricing:
    unit: str
    price_per_unit: Money
    minimum_quantity: Decimal = Decimal("0.1")

    def __post_init__(self) -> None:
        if not self.unit or not self.unit.strip():
            raise ValidationError("Bulk products need a unit (kg, lbs, liters...)")
        if self.minimum_quantity <= 0:
            raise ValidationError("Minimum quantity must be positive")


PricingPolicy = Union[StandardPricing, PerishablePricing, BulkPricing]


@dataclass
class Product:
    """A product in the catalog.

    Invariants:
    - ``0 <= current_stock <= max_stock_level``
    - the selling price is a function of the product's own fields only
    """

    id: str
    name: str
    pricing: PricingPolicy
    base_price: Money
    cost_price: Money
    current_stock: int
    category: ProductCategory = ProductCategory.OTHER
    supplier: str = ""
    description: str = ""
    min_stock_level: int = 10
    max_stock_level: int = 1000
    is_active: bool = True
    tags: list[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.id or not self.id.strip():
            raise ValidationError("Product ID is required")
        if not self.name or not self.name.strip():
            raise ValidationError("Product name is required")
        if self.min_stock_level < 0 or self.max_stock_level <= 0:
            raise ValidationError("Stock levels must be positive")
        if not 0 <= self.current_stock <= self.max_stock_level:
            raise ValidationError(
                f"Stock for {self.name} must be between 0 and "
                f"{self.max_stock_level}, got {self.current_stock}"
            )

    # --- Pricing --------------------------------------------------------------

    @property
    def is_bulk(self) -> bool:
        return isinstance(self.pricing, BulkPricing)

    @property
    def is_perishable(self) -> bool:
        return isinstance(self.pricing, PerishablePricing)

    @property
    def product_type(self) -> str:
        if isinstance(self.pricing, BulkPricing):
            return "Bulk"
        if isinstance(self.pricing, PerishablePricing):
            return "Perishable"
        return "Standard"

    def selling_price(self, today: date | None = None) -> Money:
        policy = self.pricing
        if isinstance(policy, StandardPricing):
            return self.cost_price * (Decimal("1") + policy.markup)
        if isinstance(policy, PerishablePricing):
            if self.is_near_expiration(today):
                return self.base_price * policy.near_expiry_discount.complement
            return self.base_price
        return policy.price_per_unit

    def price_for_quantity(self, quantity: Decimal, today: date | None = None) -> Money:
        """Price a quantity of this product.

        Bulk products charge at least ``minimum_quantity``: asking for less
        is silently billed as the minimum.  Cart validation rejects such
        orders instead; see ``Transaction.add_line``.
        """
        policy = self.pricing
        if isinstance(policy, BulkPricing):
            billed = max(quantity, policy.minimum_quantity)
            return policy.price_per_unit * billed
        return self.selling_price(today) * quantity

    # --- Expiration -----------------------------------------------------------

    def days_until_expiration(self, today: date | None = None) -> int | None:
        if not isinstance(self.pricing, PerishablePricing):
            return None
        today = today or date.today()
        return (self.pricing.expiration_date - today).days

    def is_near_expiration(self, today: date | None = None) -> bool:
        if not isinstance(self.pricing, PerishablePricing):
            return False
        days_left = self.days_until_expiration(today)
        return days_left <= self.pricing.shelf_life_days * NEAR_EXPIRY_SHELF_FRACTION

    def is_expired(self, today: date | None = None) -> bool:
        days_left = self.days_until_expiration(today)
        return days_left is not None and days_left < 0

    # --- Stock ----------------------------------------------------------------

    def reduce_stock(self, quantity: int) -> bool:
        """Take units out of stock; all-or-nothing."""
        if quantity <= 0 or quantity > self.current_stock:
            logger.warning(
                "Cannot reduce stock of %s by %s (have %s)",
                self.id, quantity, self.current_stock,
            )
            return False
        self.current_stock -= quantity
        return True

    def add_stock(self, quantity: int) -> None:
        """Put units back on the shelf, never beyond ``max_stock_level``."""
        if quantity <= 0:
            return
        new_level = self.current_stock + quantity
        if new_level > self.max_stock_level:
            logger.info(
                "Restock of %s clamped at max level %s (requested %s)",
                self.id, self.max_stock_level, new_level,
            )
            new_level = self.max_stock_level
        self.current_stock = new_level

    @property
    def is_low_stock(self) -> bool:
        return self.current_stock <= self.min_stock_level

    @property
    def is_overstocked(self) -> bool:
        return self.current_stock >= self.max_stock_level * OVERSTOCK_FRACTION

    @property
    def is_out_of_stock(self) -> bool:
        return self.current_stock == 0

    @property
    def restock_recommendation(self) -> int:
        if self.is_low_stock:
            return self.max_stock_level - self.current_stock
        return 0

    def has_stock_for(self, quantity: Decimal) -> bool:
        return self.current_stock >= math.ceil(quantity)

    # --- Valuation ------------------------------------------------------------

    def profit_margin(self, today: date | None = None) -> Decimal:
        """Margin over cost, in percent."""
        if self.cost_price.is_zero:
            return Decimal("0")
        selling = self.selling_price(today).amount
        return (selling - self.cost_price.amount) / self.cost_price.amount * 100

    def inventory_value(self, today: date | None = None) -> Money:
        return self.selling_price(today) * self.current_stock

    def inventory_cost(self) -> Money:
        return self.cost_price * self.current_stock

    # --- Catalog metadata -----------------------------------------------------

    @property
    def barcode(self) -> str:
        return f"BAR{self.id}"

    def add_tag(self, tag: str) -> None:
        if tag not in self.tags:
            self.tags.append(tag)

    def remove_tag(self, tag: str) -> None:
        self.tags = [t for t in self.tags if t != tag]

    def has_tag(self, tag: str) -> bool:
        return tag in self.tags

    def deactivate(self) -> None:
        self.is_active = False

    def activate(self) -> None:
        self.is_active = True

    # --- Factories ------------------------------------------------------------

    @staticmethod
    def standard(
        id: str,
        name: str,
        base_price: Money,
        cost_price: Money,
        stock: int,
        markup: Decimal = Decimal("0.30"),
        **kwargs,
    ) -> Product:
        return Product(
            id=id,
            name=name,
            pricing=StandardPricing(markup=decimal_of(markup)),
            base_price=base_price,
            cost_price=cost_price,
            current_stock=stock,
            **kwargs,
        )

    @staticmethod
    def perishable(
        id: str,
        name: str,
        base_price: Money,
        cost_price: Money,
        stock: int,
        expiration_date: date,
        shelf_life_days: int,
        near_expiry_discount: Decimal = Decimal("0.20"),
        **kwargs,
    ) -> Product:
        kwargs.setdefault("min_stock_level", 5)
        kwargs.setdefault("max_stock_level", 500)
        return Product(
            id=id,
            name=name,
            pricing=PerishablePricing(
                expiration_date=expiration_date,
                shelf_life_days=shelf_life_days,
                near_expiry_discount=Rate.of(near_expiry_discount),
            ),
            base_price=base_price,
            cost_price=cost_price,
            current_stock=stock,
            **kwargs,
        )

    @staticmethod
    def bulk(
        id: str,
        name: str,
        price_per_unit: Money,
        cost_price: Money,
        stock: int,
        unit: str,
        minimum_quantity: Decimal = Decimal("0.1"),
        **kwargs,
    ) -> Product:
        return Product(
            id=id,
            name=name,
            pricing=BulkPricing(
                unit=unit,
                price_per_unit=price_per_unit,
                minimum_quantity=decimal_of(minimum_quantity),
            ),
            base_price=price_per_unit,
            cost_price=cost_price,
            current_stock=stock,
            **kwargs,
        )
