"""Transaction aggregate: the pricing and settlement engine.

A Transaction owns its lines and only references the catalog's Products
and the directory's Customer.  It is the single place where a sale turns
into stock and loyalty mutations, and the only place that reverses them.

Lifecycle::

    PENDING --finalize()--> COMPLETED --process_refund()--> REFUNDED
       |                              '-------------------> PARTIALLY_REFUNDED
       '--cancel()--> CANCELLED

Business rejections never raise: every operation returns ``False`` (or
does nothing) and logs the reason, leaving the transaction untouched.
"""

from __future__ import annotations

import logging
import math
from collections import defaultdict
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from decimal import Decimal
from enum import Enum

from pos.domain.exceptions import ValidationError
from pos.domain.model.customer import Customer
from pos.domain.model.product import Product
from pos.domain.model.value_objects import Money, Rate, decimal_of

logger = logging.getLogger(__name__)

DEFAULT_TAX_RATE = Rate(Decimal("0.08"))
NO_DISCOUNT = Rate(Decimal("0"))


class PaymentMethod(Enum):
    CASH = "Cash"
    CREDIT_CARD = "Credit Card"
    DEBIT_CARD = "Debit Card"
    MOBILE_PAYMENT = "Mobile Payment"
    LOYALTY_POINTS = "Loyalty Points"
    GIFT_CARD = "Gift Card"


class TransactionStatus(Enum):
    PENDING = "Pending"
    COMPLETED = "Completed"
    CANCELLED = "Cancelled"
    REFUNDED = "Refunded"
    PARTIALLY_REFUNDED = "Partially Refunded"


@dataclass
class TransactionLine:
    """One priced product entry of a sale.

    ``unit_price`` and ``undiscounted_subtotal`` are captured when the line
    is created and never change afterwards, even if the catalog price does.
    """

    product: Product
    quantity: Decimal
    unit_price: Money  # locked at line-creation time
    undiscounted_subtotal: Money
    discount: Rate = NO_DISCOUNT
    notes: str = ""

    @staticmethod
    def create(
        product: Product,
        quantity: Decimal,
        discount: Rate = NO_DISCOUNT,
        notes: str = "",
        today: date | None = None,
    ) -> TransactionLine:
        unit_price = product.selling_price(today)
        if product.is_bulk:
            gross = product.price_for_quantity(quantity, today)
        else:
            gross = unit_price * quantity
        return TransactionLine(
            product=product,
            quantity=quantity,
            unit_price=unit_price,
            undiscounted_subtotal=gross,
            discount=discount,
            notes=notes,
        )

    @property
    def subtotal(self) -> Money:
        return self.undiscounted_subtotal * self.discount.complement

    @property
    def discount_amount(self) -> Money:
        return self.undiscounted_subtotal - self.subtotal

    @property
    def stock_units(self) -> int:
        """Whole units this line takes off the shelf (fractions round up)."""
        return math.ceil(self.quantity)


@dataclass
class Transaction:
    """Aggregate root for a sale.

    Totals are only meaningful once ``compute_totals`` has run.  From then
    on every change to the lines or to the loyalty points applied
    recomputes them with the same tax rate, so the order in which the
    cashier does things does not matter.
    """

    id: int
    customer: Customer | None = None
    cashier_id: str = ""
    lines: list[TransactionLine] = field(default_factory=list)
    status: TransactionStatus = TransactionStatus.PENDING
    payment_method: PaymentMethod | None = None
    subtotal: Money = field(default_factory=Money.zero)
    tax: Money = field(default_factory=Money.zero)
    total_discount: Money = field(default_factory=Money.zero)
    final_total: Money = field(default_factory=Money.zero)
    loyalty_points_used: Decimal = Decimal("0")
    loyalty_points_earned: Decimal = Decimal("0")
    tax_rate: Rate | None = None
    refunded_amount: Money = field(default_factory=Money.zero)
    notes: str = ""
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    _points_requested: Decimal = field(default=Decimal("0"), repr=False)

    # --- Line management ------------------------------------------------------

    def add_line(
        self,
        product: Product,
        quantity: Decimal | int | str,
        discount: Decimal | int | str = Decimal("0"),
        notes: str = "",
        today: date | None = None,
    ) -> bool:
        """Price ``quantity`` of ``product`` into the cart.

        Stock is checked here but only taken at ``finalize``.  Bulk
        products below their minimum quantity are rejected, even though
        ``Product.price_for_quantity`` would bill them at the minimum.
        """
        if not self._require_pending("add a line"):
            return False
        qty = self._number(quantity, "quantity")
        rate = self._number(discount, "line discount")
        if qty is None or rate is None:
            return False

        if not product.is_active:
            return self._reject("product %s is not active", product.id)
        if qty <= 0:
            return self._reject("quantity must be positive, got %s", qty)
        if not Decimal("0") <= rate <= Decimal("1"):
            return self._reject("line discount must be between 0 and 1, got %s", rate)
        if not product.has_stock_for(qty):
            return self._reject(
                "insufficient stock for %s (need %s, have %s)",
                product.name, math.ceil(qty), product.current_stock,
            )
        if product.is_bulk and qty < product.pricing.minimum_quantity:
            return self._reject(
                "minimum quantity for %s is %s %s",
                product.name, product.pricing.minimum_quantity, product.pricing.unit,
            )

        line = TransactionLine.create(product, qty, Rate(rate), notes, today)
        self.lines.append(line)
        logger.debug(
            "Transaction %s: added %s x %s at %s", self.id, qty, product.id, line.unit_price
        )
        self._refresh_totals()
        return True

    def remove_line(self, index: int) -> bool:
        if not self._require_pending("remove a line"):
            return False
        if not 0 <= index < len(self.lines):
            return self._reject("no line at index %s", index)
        del self.lines[index]
        self._refresh_totals()
        return True

    def clear_lines(self) -> bool:
        if not self._require_pending("clear lines"):
            return False
        self.lines.clear()
        self._refresh_totals()
        return True

    # --- Pricing --------------------------------------------------------------

    def apply_loyalty_points(self, points: Decimal | int | str) -> bool:
        """Spend loyalty points 1:1 against the subtotal.

        The balance is checked now and redeemed at ``finalize``.
        """
        if not self._require_pending("apply loyalty points"):
            return False
        requested = self._number(points, "loyalty points")
        if requested is None:
            return False
        if self.customer is None:
            return self._reject("loyalty points need a customer")
        if requested < 0:
            return self._reject("cannot apply negative points (%s)", requested)
        if requested > self.customer.loyalty_points:
            return self._reject(
                "customer %s has %s points, %s requested",
                self.customer.id, self.customer.loyalty_points, requested,
            )
        self._points_requested = requested
        self.loyalty_points_used = requested
        self._refresh_totals()
        return True

    def compute_totals(self, tax_rate: Rate | Decimal | float | str = DEFAULT_TAX_RATE) -> bool:
        """Price the whole cart.

        Order of application: line discounts, then the customer's tier
        discount on the discounted subtotal, then loyalty points (capped
        at what is left to pay), then tax on the remainder.
        """
        if not self._require_pending("compute totals"):
            return False
        if not isinstance(tax_rate, Rate):
            value = self._number(tax_rate, "tax rate")
            if value is None:
                return False
            if not Decimal("0") <= value <= Decimal("1"):
                return self._reject("tax rate must be between 0 and 1, got %s", value)
            tax_rate = Rate(value)
        self.tax_rate = tax_rate
        self._recalculate()
        return True

    def _recalculate(self) -> None:
        subtotal = Money.zero()
        discount = Money.zero()
        for line in self.lines:
            subtotal = subtotal + line.subtotal
            discount = discount + line.discount_amount

        if self.customer is not None:
            tier_discount = subtotal * self.customer.discount_rate.value
            discount = discount + tier_discount
            subtotal = subtotal - tier_discount

        points = Money(self._points_requested).min(subtotal)
        if points.amount < self._points_requested:
            logger.info(
                "Transaction %s: loyalty points capped at %s", self.id, points
            )
        self.loyalty_points_used = points.amount
        discount = discount + points
        subtotal = subtotal - points

        self.subtotal = subtotal
        self.total_discount = discount
        self.tax = subtotal * self.tax_rate.value
        self.final_total = subtotal + self.tax

        if self.customer is not None:
            self.loyalty_points_earned = self.customer.points_for(self.final_total.amount)
        else:
            self.loyalty_points_earned = Decimal("0")

    def _refresh_totals(self) -> None:
        if self.tax_rate is not None:
            self._recalculate()

    # --- Settlement -----------------------------------------------------------

    def process_payment(
        self, method: PaymentMethod, amount_paid: Decimal | int | str | None = None
    ) -> bool:
        """Validate a payment.  Only cash is checked against the tendered amount.

        Records the method on success; the status stays PENDING until
        ``finalize``.
        """
        if not self._require_pending("take payment"):
            return False
        if self.final_total.is_zero:
            return self._reject("nothing to pay (total is %s)", self.final_total)
        if method is PaymentMethod.CASH:
            tendered = Decimal("0")
            if amount_paid is not None:
                tendered = self._number(amount_paid, "amount paid")
                if tendered is None:
                    return False
            if tendered < self.final_total.rounded().amount:
                return self._reject(
                    "insufficient payment: required %s, provided $%.2f",
                    self.final_total, tendered,
                )
        self.payment_method = method
        logger.debug("Transaction %s: payment accepted (%s)", self.id, method.value)
        return True

    def change_due(self, amount_paid: Decimal | int | str) -> Money:
        try:
            tendered = Money(max(decimal_of(amount_paid), Decimal("0")))
        except ValidationError:
            return Money.zero()
        due = self.final_total.rounded()
        return tendered - due if tendered > due else Money.zero()

    def finalize(self) -> bool:
        """Commit the sale: take stock, book the spend, settle loyalty points.

        Two-phase: every product and the customer's balance are validated
        before anything is mutated, so a failing finalize leaves the
        catalog and the directory untouched.
        """
        if not self._require_pending("finalize"):
            return False
        if not self.lines:
            return self._reject("cannot finalize an empty transaction")
        if self.tax_rate is None:
            self.compute_totals()

        # Phase 1: validate
        units_needed: dict[str, int] = defaultdict(int)
        products: dict[str, Product] = {}
        for line in self.lines:
            units_needed[line.product.id] += line.stock_units
            products[line.product.id] = line.product
        for product_id, units in units_needed.items():
            product = products[product_id]
            if product.current_stock < units:
                return self._reject(
                    "stock for %s dropped to %s, %s needed",
                    product.name, product.current_stock, units,
                )
        customer = self.customer
        if customer is not None and self.loyalty_points_used > customer.loyalty_points:
            return self._reject(
                "customer %s no longer has %s points",
                customer.id, self.loyalty_points_used,
            )

        # Phase 2: commit
        for product_id, units in units_needed.items():
            products[product_id].reduce_stock(units)
        if customer is not None:
            customer.record_purchase(self.final_total.amount, self.loyalty_points_earned)
            if self.loyalty_points_used > 0:
                customer.redeem_points(self.loyalty_points_used)

        self.status = TransactionStatus.COMPLETED
        logger.info(
            "Transaction %s completed: %s (%s lines)",
            self.id, self.final_total, len(self.lines),
        )
        return True

    def cancel(self) -> bool:
        """Abandon a pending sale.  Nothing was committed, so nothing to undo."""
        if not self._require_pending("cancel"):
            return False
        self.status = TransactionStatus.CANCELLED
        return True

    # --- Refunds --------------------------------------------------------------

    def process_refund(self, amount: Decimal | int | str | None = None) -> bool:
        """Refund all (default) or part of a completed sale.

        Amounts are measured against the total rounded to cents, which is
        what the customer paid.  Stock, spend and loyalty are reversed in
        proportion to the refunded share: a full refund restocks every
        unit, a half refund restocks half of each line's units (rounded
        down).  Points come back out exactly as recorded on the sale.
        """
        if self.status is not TransactionStatus.COMPLETED:
            return self._reject(
                "only completed transactions can be refunded (status %s)",
                self.status.value,
            )
        paid = self.final_total.rounded()
        if amount is None:
            requested = paid.amount
        else:
            requested = self._number(amount, "refund amount")
            if requested is None:
                return False
        if requested <= 0:
            return self._reject("refund amount must be positive, got %s", requested)
        refund = Money(requested)
        if refund > paid:
            return self._reject("refund %s exceeds transaction total %s", refund, paid)

        full = refund >= paid
        share = Decimal("1") if full else refund.amount / paid.amount
        for line in self.lines:
            units = line.stock_units if full else math.floor(line.stock_units * share)
            line.product.add_stock(units)

        if self.customer is not None:
            self.customer.record_purchase(
                -(self.final_total.amount * share), -(self.loyalty_points_earned * share)
            )

        self.refunded_amount = refund
        if full:
            self.status = TransactionStatus.REFUNDED
        else:
            self.status = TransactionStatus.PARTIALLY_REFUNDED
        logger.info(
            "Transaction %s refunded %s (%s)", self.id, refund, self.status.value
        )
        return True

    # --- Read-only helpers ----------------------------------------------------

    @property
    def is_empty(self) -> bool:
        return not self.lines

    @property
    def item_count(self) -> int:
        return len(self.lines)

    @property
    def items_subtotal(self) -> Money:
        """Sum of line subtotals, before tier discount and points."""
        result = Money.zero()
        for line in self.lines:
            result = result + line.subtotal
        return result

    @property
    def price_discount(self) -> Money:
        """Line and tier discounts, without the loyalty points redeemed."""
        return self.total_discount - Money(self.loyalty_points_used)

    @property
    def status_label(self) -> str:
        return self.status.value

    @property
    def payment_label(self) -> str:
        return self.payment_method.value if self.payment_method else "Unpaid"

    # --- Internal helpers -----------------------------------------------------

    def _require_pending(self, action: str) -> bool:
        if self.status is TransactionStatus.PENDING:
            return True
        return self._reject("cannot %s in %s status", action, self.status.value)

    def _number(self, value, label: str) -> Decimal | None:
        """Coerce caller input to a finite Decimal, or log a rejection and return None."""
        try:
            return decimal_of(value)
        except ValidationError:
            self._reject("%s must be a finite number, got %r", label, value)
            return None

    def _reject(self, reason: str, *args) -> bool:
        logger.warning("Transaction %s rejected: " + reason, self.id, *args)
        return False
