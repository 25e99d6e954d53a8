"""Domain service: catalog-wide inventory queries.

Stock alerts and valuation span every product in the catalog, so they
live in a service over the repository rather than on the Product
aggregate.  Inactive products stay in the catalog but are left out of
alerts and valuation.
"""

from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal

from pos.domain.model.product import Product, ProductCategory
from pos.domain.model.value_objects import Money
from pos.domain.repository.product_repository import ProductRepository

logger = logging.getLogger(__name__)


class InventoryService:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    # --- Stock alerts ---------------------------------------------------------

    def low_stock(self) -> list[Product]:
        return [p for p in self._active() if p.is_low_stock]

    def overstocked(self) -> list[Product]:
        return [p for p in self._active() if p.is_overstocked]

    def out_of_stock(self) -> list[Product]:
        return [p for p in self._active() if p.is_out_of_stock]

    # --- Valuation ------------------------------------------------------------

    def total_value(self, today: date | None = None) -> Money:
        total = Money.zero()
        for product in self._active():
            total = total + product.inventory_value(today)
        return total

    def total_cost(self) -> Money:
        total = Money.zero()
        for product in self._active():
            total = total + product.inventory_cost()
        return total

    def potential_profit(self, today: date | None = None) -> Decimal:
        """Selling value minus cost; negative when stock is priced below cost."""
        return self.total_value(today).amount - self.total_cost().amount

    def category_value(self, category: ProductCategory, today: date | None = None) -> Money:
        total = Money.zero()
        for product in self.by_category(category):
            if product.is_active:
                total = total + product.inventory_value(today)
        return total

    # --- Lookups --------------------------------------------------------------

    def by_category(self, category: ProductCategory) -> list[Product]:
        return [p for p in self._product_repo.list_all() if p.category is category]

    def by_supplier(self, supplier: str) -> list[Product]:
        return [p for p in self._product_repo.list_all() if p.supplier == supplier]

    def suppliers(self) -> list[str]:
        return sorted({p.supplier for p in self._product_repo.list_all() if p.supplier})

    def search(self, term: str) -> list[Product]:
        """Products whose name contains ``term`` or that carry it as a tag."""
        matches = self._product_repo.find_by_name(term)
        seen = {p.id for p in matches}
        for product in self._product_repo.find_by_tag(term):
            if product.id not in seen:
                matches.append(product)
                seen.add(product.id)
        return matches

    def active_count(self) -> int:
        return len(self._active())

    # --- Maintenance ----------------------------------------------------------

    def deactivate_expired(self, today: date | None = None) -> list[Product]:
        """Take expired perishables off sale; returns the products deactivated."""
        expired = [p for p in self._active() if p.is_expired(today)]
        for product in expired:
            product.deactivate()
            self._product_repo.save(product)
            logger.info("Deactivated expired product %s (%s)", product.id, product.name)
        return expired

    def _active(self) -> list[Product]:
        return [p for p in self._product_repo.list_all() if p.is_active]
