"""Application service: Start Sale use case.

Opens a PENDING transaction, optionally bound to a registered customer.
The transaction is only recorded in the ledger once it completes.
"""

from __future__ import annotations

from pos.domain.exceptions import EntityNotFoundError
from pos.domain.model.transaction import Transaction
from pos.domain.repository.customer_repository import CustomerRepository
from pos.domain.repository.transaction_repository import TransactionRepository


class StartSaleHandler:

    def __init__(
        self,
        transaction_repo: TransactionRepository,
        customer_repo: CustomerRepository,
    ) -> None:
        self._transaction_repo = transaction_repo
        self._customer_repo = customer_repo

    def handle(self, customer_id: str | None, cashier_id: str) -> Transaction:
        customer = None
        if customer_id:
            customer = self._customer_repo.get_by_id(customer_id)
            if customer is None:
                raise EntityNotFoundError(f"Customer '{customer_id}' not found")

        return Transaction(
            id=self._transaction_repo.next_id(),
            customer=customer,
            cashier_id=cashier_id,
        )
