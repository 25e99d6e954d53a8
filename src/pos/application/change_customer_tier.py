"""Application service: Change Customer Tier use case.

Tier changes are always a deliberate staff action; the upgrade
eligibility flag on the customer is advisory only.
"""

from __future__ import annotations

from pos.domain.exceptions import EntityNotFoundError
from pos.domain.model.customer import Customer, CustomerTier
from pos.domain.repository.customer_repository import CustomerRepository


class ChangeCustomerTierHandler:

    def __init__(self, customer_repo: CustomerRepository) -> None:
        self._customer_repo = customer_repo

    def handle(self, customer_id: str, tier: CustomerTier) -> Customer:
        customer = self._customer_repo.get_by_id(customer_id)
        if customer is None:
            raise EntityNotFoundError(f"Customer '{customer_id}' not found")
        customer.change_tier(tier)
        self._customer_repo.save(customer)
        return customer
