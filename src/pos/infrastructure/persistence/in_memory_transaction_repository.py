"""Dict-backed implementation of TransactionRepository."""

from __future__ import annotations

from pos.domain.model.transaction import Transaction
from pos.domain.repository.transaction_repository import TransactionRepository

FIRST_TRANSACTION_ID = 10001


class InMemoryTransactionRepository(TransactionRepository):

    def __init__(self) -> None:
        self._store: dict[int, Transaction] = {}
        self._next_id = FIRST_TRANSACTION_ID

    # --- TransactionRepository interface --------------------------------------

    def next_id(self) -> int:
        """Hand out a fresh ID; IDs of abandoned sales are never reused."""
        transaction_id = self._next_id
        self._next_id += 1
        return transaction_id

    def get_by_id(self, transaction_id: int) -> Transaction | None:
        return self._store.get(transaction_id)

    def list_all(self) -> list[Transaction]:
        return sorted(self._store.values(), key=lambda t: t.id)

    def save(self, transaction: Transaction) -> None:
        self._store[transaction.id] = transaction
