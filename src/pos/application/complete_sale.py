"""Application service: Complete Sale use case.

Runs the settlement sequence on a pending transaction:

1. apply loyalty points (optional),
2. compute totals at the configured tax rate,
3. validate the payment,
4. finalize (commit stock and customer side effects),
5. record the transaction in the ledger.

Any rejection leaves the transaction PENDING and nothing committed.
"""

from __future__ import annotations

from decimal import Decimal

from pos.application.dto import SaleResultDTO
from pos.domain.exceptions import ValidationError
from pos.domain.model.transaction import (
    DEFAULT_TAX_RATE,
    PaymentMethod,
    Transaction,
)
from pos.domain.model.value_objects import Rate
from pos.domain.repository.transaction_repository import TransactionRepository
from pos.domain.service.receipt_renderer import render_receipt


class CompleteSaleHandler:

    def __init__(self, transaction_repo: TransactionRepository) -> None:
        self._transaction_repo = transaction_repo

    def handle(
        self,
        transaction: Transaction,
        method: PaymentMethod,
        amount_paid: Decimal | None = None,
        tax_rate: Rate = DEFAULT_TAX_RATE,
        loyalty_points: Decimal | None = None,
    ) -> SaleResultDTO:
        if transaction.is_empty:
            raise ValidationError("No items in transaction")

        if loyalty_points and not transaction.apply_loyalty_points(loyalty_points):
            raise ValidationError(f"Cannot apply {loyalty_points} loyalty points")

        if not transaction.compute_totals(tax_rate):
            raise ValidationError(f"Invalid tax rate: {tax_rate}")

        if amount_paid is None:
            amount_paid = transaction.final_total.rounded().amount
        if not transaction.process_payment(method, amount_paid):
            raise ValidationError(
                f"Payment failed. Required: {transaction.final_total}, "
                f"provided: ${amount_paid:.2f}"
            )

        if not transaction.finalize():
            raise ValidationError(
                f"Transaction #{transaction.id} could not be finalized"
            )
        self._transaction_repo.save(transaction)

        return SaleResultDTO(
            transaction_id=transaction.id,
            status=transaction.status_label,
            final_total=str(transaction.final_total),
            change_due=str(transaction.change_due(amount_paid)),
            points_earned=f"{transaction.loyalty_points_earned:.2f}",
            receipt=render_receipt(transaction),
        )
