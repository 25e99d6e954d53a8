"""Application service: Refund Sale use case."""

from __future__ import annotations

from decimal import Decimal

from pos.domain.exceptions import EntityNotFoundError, ValidationError
from pos.domain.model.transaction import TransactionStatus
from pos.domain.repository.transaction_repository import TransactionRepository


class RefundSaleHandler:

    def __init__(self, transaction_repo: TransactionRepository) -> None:
        self._transaction_repo = transaction_repo

    def handle(self, transaction_id: int, amount: Decimal | None = None) -> TransactionStatus:
        """Refund a completed sale in full (``amount`` None) or in part.

        Stock and loyalty points are returned in proportion to the
        refunded share of the total.
        """
        transaction = self._transaction_repo.get_by_id(transaction_id)
        if transaction is None:
            raise EntityNotFoundError(f"Transaction #{transaction_id} not found")

        if transaction.status is not TransactionStatus.COMPLETED:
            raise ValidationError(
                f"Can only refund completed transactions "
                f"(#{transaction_id} is {transaction.status_label})"
            )
        if not transaction.process_refund(amount):
            requested = "full refund" if amount is None else f"refund of ${amount:.2f}"
            raise ValidationError(
                f"Invalid {requested}; transaction total is {transaction.final_total}"
            )

        self._transaction_repo.save(transaction)
        return transaction.status
