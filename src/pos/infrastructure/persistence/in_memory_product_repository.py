"""Dict-backed implementation of ProductRepository.

The store keeps data for the lifetime of the process only.
"""

from __future__ import annotations

from pos.domain.model.product import Product
from pos.domain.repository.product_repository import ProductRepository


class InMemoryProductRepository(ProductRepository):

    def __init__(self, products: list[Product] | None = None) -> None:
        self._store: dict[str, Product] = {}
        for product in products or []:
            self._store[product.id] = product

    # --- ProductRepository interface ------------------------------------------

    def next_id(self) -> str:
        numbers = [int(pid[1:]) for pid in self._store if pid[1:].isdigit()]
        return f"P{max(numbers, default=0) + 1:03d}"

    def get_by_id(self, product_id: str) -> Product | None:
        return self._store.get(product_id)

    def find_by_name(self, fragment: str) -> list[Product]:
        needle = fragment.lower()
        return [p for p in self._store.values() if needle in p.name.lower()]

    def find_by_tag(self, tag: str) -> list[Product]:
        return [p for p in self._store.values() if p.has_tag(tag)]

    def list_all(self) -> list[Product]:
        return list(self._store.values())

    def save(self, product: Product) -> None:
        self._store[product.id] = product

    def remove(self, product_id: str) -> bool:
        return self._store.pop(product_id, None) is not None
