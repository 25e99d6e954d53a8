"""Abstract repository for the Customer directory."""

from __future__ import annotations

from abc import ABC, abstractmethod

from pos.domain.model.customer import Customer, CustomerTier


class CustomerRepository(ABC):

    @abstractmethod
    def next_id(self) -> str:
        """Generate the next unique customer ID (``C1001``, ``C1002``...)."""

    @abstractmethod
    def get_by_id(self, customer_id: str) -> Customer | None:
        """Return a customer by ID, or None if not found."""

    @abstractmethod
    def find_by_email(self, email: str) -> Customer | None:
        """Return the customer with this email, or None."""

    @abstractmethod
    def find_by_phone(self, phone: str) -> Customer | None:
        """Return the customer with this phone number, or None."""

    @abstractmethod
    def list_by_tier(self, tier: CustomerTier) -> list[Customer]:
        """Return every customer of the given tier."""

    @abstractmethod
    def top_spenders(self, count: int = 10) -> list[Customer]:
        """Return up to ``count`` customers, highest total spend first."""

    @abstractmethod
    def list_all(self) -> list[Customer]:
        """Return every customer."""

    @abstractmethod
    def save(self, customer: Customer) -> None:
        """Store a new or updated customer."""
