"""Application service: Adjust Stock use case (manual restock or write-off)."""

from __future__ import annotations

from pos.domain.exceptions import EntityNotFoundError, ValidationError
from pos.domain.repository.product_repository import ProductRepository


class AdjustStockHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, product_id: str, delta: int) -> int:
        """Add (positive ``delta``) or remove (negative) units; returns the new level.

        Additions are clamped at the product's maximum stock level.
        """
        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise EntityNotFoundError(f"Product with ID '{product_id}' not found")
        if delta == 0:
            raise ValidationError("Stock adjustment must be non-zero")

        if delta > 0:
            product.add_stock(delta)
        elif not product.reduce_stock(-delta):
            raise ValidationError(
                f"Insufficient stock for {product.name} "
                f"(remove {-delta}, have {product.current_stock})"
            )

        self._product_repo.save(product)
        return product.current_stock
