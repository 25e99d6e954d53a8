"""Abstract repository for the Product catalog.

Defined in the domain layer so the domain never depends on
infrastructure.  The catalog owns every Product; transactions only hold
references to them.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from pos.domain.model.product import Product


class ProductRepository(ABC):

    @abstractmethod
    def next_id(self) -> str:
        """Generate the next unique product ID (``P001``, ``P002``...)."""

    @abstractmethod
    def get_by_id(self, product_id: str) -> Product | None:
        """Return a product by its ID, or None if not found."""

    @abstractmethod
    def find_by_name(self, fragment: str) -> list[Product]:
        """Return products whose name contains ``fragment`` (case-insensitive)."""

    @abstractmethod
    def find_by_tag(self, tag: str) -> list[Product]:
        """Return products carrying exactly ``tag``."""

    @abstractmethod
    def list_all(self) -> list[Product]:
        """Return every product in the catalog, active or not."""

    @abstractmethod
    def save(self, product: Product) -> None:
        """Store a new or updated product."""

    @abstractmethod
    def remove(self, product_id: str) -> bool:
        """Drop a product from the catalog; False if it was not there."""
