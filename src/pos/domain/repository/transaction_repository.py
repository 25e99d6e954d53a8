"""Abstract repository for the Transaction ledger."""

from __future__ import annotations

from abc import ABC, abstractmethod

from pos.domain.model.transaction import Transaction


class TransactionRepository(ABC):

    @abstractmethod
    def next_id(self) -> int:
        """Generate the next unique transaction ID."""

    @abstractmethod
    def get_by_id(self, transaction_id: int) -> Transaction | None:
        """Return a transaction by its ID, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[Transaction]:
        """Return every recorded transaction, oldest first."""

    @abstractmethod
    def save(self, transaction: Transaction) -> None:
        """Record a new or updated transaction."""
