"""Application service: Show Transaction / Transaction History (queries)."""

from __future__ import annotations

from pos.application.dto import TransactionSummaryDTO
from pos.domain.exceptions import EntityNotFoundError
from pos.domain.model.transaction import Transaction
from pos.domain.repository.transaction_repository import TransactionRepository
from pos.domain.service.receipt_renderer import (
    render_detailed_receipt,
    render_receipt,
)


class ShowTransactionHandler:

    def __init__(self, transaction_repo: TransactionRepository) -> None:
        self._transaction_repo = transaction_repo

    def handle(self, transaction_id: int, detailed: bool = False) -> str:
        transaction = self._transaction_repo.get_by_id(transaction_id)
        if transaction is None:
            raise EntityNotFoundError(f"Transaction #{transaction_id} not found")
        if detailed:
            return render_detailed_receipt(transaction)
        return render_receipt(transaction)


class TransactionHistoryHandler:

    def __init__(self, transaction_repo: TransactionRepository) -> None:
        self._transaction_repo = transaction_repo

    def handle(self) -> list[TransactionSummaryDTO]:
        return [self._to_dto(t) for t in self._transaction_repo.list_all()]

    @staticmethod
    def _to_dto(transaction: Transaction) -> TransactionSummaryDTO:
        customer = transaction.customer
        return TransactionSummaryDTO(
            id=transaction.id,
            final_total=str(transaction.final_total),
            payment_method=transaction.payment_label,
            status=transaction.status_label,
            customer_name=customer.full_name if customer else None,
            created_at=transaction.created_at.strftime("%Y-%m-%d %H:%M UTC"),
        )
