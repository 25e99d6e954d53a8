"""Dict-backed implementation of CustomerRepository."""

from __future__ import annotations

from pos.domain.model.customer import Customer, CustomerTier
from pos.domain.repository.customer_repository import CustomerRepository

FIRST_CUSTOMER_NUMBER = 1001


class InMemoryCustomerRepository(CustomerRepository):

    def __init__(self, customers: list[Customer] | None = None) -> None:
        self._store: dict[str, Customer] = {}
        self._next_number = FIRST_CUSTOMER_NUMBER
        for customer in customers or []:
            self.save(customer)

    # --- CustomerRepository interface -----------------------------------------

    def next_id(self) -> str:
        customer_id = f"C{self._next_number}"
        self._next_number += 1
        return customer_id

    def get_by_id(self, customer_id: str) -> Customer | None:
        return self._store.get(customer_id)

    def find_by_email(self, email: str) -> Customer | None:
        for customer in self._store.values():
            if customer.email and customer.email.lower() == email.lower():
                return customer
        return None

    def find_by_phone(self, phone: str) -> Customer | None:
        for customer in self._store.values():
            if customer.phone and customer.phone == phone:
                return customer
        return None

    def list_by_tier(self, tier: CustomerTier) -> list[Customer]:
        return [c for c in self._store.values() if c.tier is tier]

    def top_spenders(self, count: int = 10) -> list[Customer]:
        ranked = sorted(self._store.values(), key=lambda c: c.total_spent, reverse=True)
        return ranked[:max(count, 0)]

    def list_all(self) -> list[Customer]:
        return list(self._store.values())

    def save(self, customer: Customer) -> None:
        self._store[customer.id] = customer
        # Keep the sequence ahead of any externally assigned C#### id
        number = customer.id[1:]
        if number.isdigit() and int(number) >= self._next_number:
            self._next_number = int(number) + 1
