"""Application service: Register Customer use case."""

from __future__ import annotations

from pos.domain.exceptions import ValidationError
from pos.domain.model.customer import Customer, CustomerTier
from pos.domain.repository.customer_repository import CustomerRepository


class RegisterCustomerHandler:

    def __init__(self, customer_repo: CustomerRepository) -> None:
        self._customer_repo = customer_repo

    def handle(
        self,
        first_name: str,
        last_name: str,
        email: str = "",
        phone: str = "",
        tier: CustomerTier = CustomerTier.REGULAR,
    ) -> Customer:
        """Add a customer to the directory under the next ``C####`` id."""
        if email and self._customer_repo.find_by_email(email) is not None:
            raise ValidationError(f"A customer with email '{email}' already exists")

        customer = Customer(
            id=self._customer_repo.next_id(),
            first_name=first_name.strip(),
            last_name=last_name.strip(),
            email=email.strip(),
            phone=phone.strip(),
            tier=tier,
        )
        self._customer_repo.save(customer)
        return customer
