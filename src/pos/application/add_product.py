"""Application service: Add Product use case."""

from __future__ import annotations

from pos.application.dto import NewProductSpec
from pos.domain.exceptions import ValidationError
from pos.domain.model.product import Product, ProductCategory
from pos.domain.model.value_objects import Money
from pos.domain.repository.product_repository import ProductRepository


class AddProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, spec: NewProductSpec) -> Product:
        """Add a new standard, perishable or bulk product to the catalog."""
        if not spec.name or not spec.name.strip():
            raise ValidationError("Product name is required")

        for existing in self._product_repo.find_by_name(spec.name.strip()):
            if existing.name.lower() == spec.name.strip().lower():
                raise ValidationError(f"Product '{spec.name}' already exists")

        common = {
            "id": self._product_repo.next_id(),
            "name": spec.name.strip(),
            "cost_price": Money.of(spec.cost_price),
            "stock": spec.stock,
            "category": ProductCategory.from_label(spec.category),
            "supplier": spec.supplier,
            "description": spec.description,
            "tags": list(spec.tags),
        }
        if spec.min_stock_level is not None:
            common["min_stock_level"] = spec.min_stock_level
        if spec.max_stock_level is not None:
            common["max_stock_level"] = spec.max_stock_level

        kind = spec.kind.lower()
        if kind == "standard":
            product = Product.standard(
                base_price=Money.of(spec.base_price), markup=spec.markup, **common
            )
        elif kind == "perishable":
            if spec.expiration_date is None:
                raise ValidationError("Perishable products need an expiration date")
            product = Product.perishable(
                base_price=Money.of(spec.base_price),
                expiration_date=spec.expiration_date,
                shelf_life_days=spec.shelf_life_days,
                near_expiry_discount=spec.near_expiry_discount,
                **common,
            )
        elif kind == "bulk":
            product = Product.bulk(
                price_per_unit=Money.of(spec.price_per_unit),
                unit=spec.unit,
                minimum_quantity=spec.minimum_quantity,
                **common,
            )
        else:
            raise ValidationError(f"Unknown product type '{spec.kind}'")

        self._product_repo.save(product)
        return product
