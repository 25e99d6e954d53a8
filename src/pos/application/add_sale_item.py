"""Application service: Add Sale Item use case.

Resolves a product ID against the catalog and hands it to the pending
transaction, which does all the pricing and validation.
"""

from __future__ import annotations

from pos.application.dto import SaleItemSpec
from pos.domain.exceptions import EntityNotFoundError, ValidationError
from pos.domain.model.transaction import Transaction, TransactionLine
from pos.domain.model.value_objects import decimal_of
from pos.domain.repository.product_repository import ProductRepository


class AddSaleItemHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, transaction: Transaction, spec: SaleItemSpec) -> TransactionLine:
        product = self._product_repo.get_by_id(spec.product_id)
        if product is None:
            raise EntityNotFoundError(f"Product not found: '{spec.product_id}'")

        if not transaction.add_line(product, spec.quantity, spec.discount, spec.notes):
            raise ValidationError(self._explain(product, spec))
        return transaction.lines[-1]

    @staticmethod
    def _explain(product, spec: SaleItemSpec) -> str:
        try:
            quantity = decimal_of(spec.quantity)
            decimal_of(spec.discount)
        except ValidationError as exc:
            return str(exc)
        if not product.is_active:
            return f"Product '{product.name}' is not active"
        if quantity <= 0:
            return "Quantity must be positive"
        if not product.has_stock_for(quantity):
            return (
                f"Insufficient stock for {product.name}. "
                f"Available: {product.current_stock}"
            )
        if product.is_bulk and quantity < product.pricing.minimum_quantity:
            return (
                f"Minimum quantity for {product.name} is "
                f"{product.pricing.minimum_quantity} {product.pricing.unit}"
            )
        return f"Could not add '{product.name}' to the sale"
