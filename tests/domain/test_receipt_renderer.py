"""Tests for receipt text rendering."""

from decimal import Decimal

from pos.domain.model.customer import Customer, CustomerTier
from pos.domain.model.product import Product
from pos.domain.model.transaction import PaymentMethod, Transaction
from pos.domain.model.value_objects import Money
from pos.domain.service.receipt_renderer import (
    render_detailed_receipt,
    render_receipt,
)


def _make_sale(customer: Customer | None = None, points: str | None = None) -> Transaction:
    product = Product.standard(
        id="P001",
        name="Widget",
        base_price=Money.of("0"),
        cost_price=Money.of("8.00"),
        stock=50,
        markup="0.25",
    )
    tx = Transaction(id=10001, customer=customer, cashier_id="CASHIER01")
    tx.add_line(product, 2)
    if points is not None:
        tx.apply_loyalty_points(points)
    tx.compute_totals("0.08")
    tx.process_payment(PaymentMethod.CREDIT_CARD)
    tx.finalize()
    return tx


def _vip(points: str = "0") -> Customer:
    return Customer(
        id="C1003",
        first_name="Bob",
        last_name="Johnson",
        tier=CustomerTier.VIP,
        loyalty_points=Decimal(points),
    )


class TestReceipt:

    def test_totals_and_lines(self):
        text = render_receipt(_make_sale())
        assert "Transaction ID: 10001" in text
        assert "Widget x2 @ $10.00 = $20.00" in text
        assert "Subtotal: $20.00" in text
        assert "Tax: $1.60" in text
        assert "TOTAL: $21.60" in text
        assert "Payment Method: Credit Card" in text
        assert "Status: Completed" in text

    def test_customer_discount_and_points(self):
        text = render_receipt(_make_sale(_vip()))
        assert "Customer: Bob Johnson (VIP)" in text
        assert "Discount: -$2.00" in text
        assert "Loyalty Points Earned: 0.39" in text
        assert "Total Loyalty Points: 0.39" in text

    def test_no_discount_line_without_discount(self):
        assert "Discount:" not in render_receipt(_make_sale())

    def test_points_not_counted_in_discount_line(self):
        text = render_receipt(_make_sale(_vip(points="3"), points="3"))
        assert "Discount: -$2.00" in text
        assert "Loyalty Points Used: -$3.00" in text
        assert "TOTAL: $16.20" in text

    def test_points_alone_show_no_discount_line(self):
        customer = Customer(
            id="C1001", first_name="Jane", last_name="Smith", loyalty_points=Decimal("5")
        )
        text = render_receipt(_make_sale(customer, points="5"))
        assert "Discount:" not in text
        assert "Loyalty Points Used: -$5.00" in text

    def test_refund_shown(self):
        tx = _make_sale()
        tx.process_refund()
        text = render_receipt(tx)
        assert "Status: Refunded" in text
        assert "Refunded: $21.60" in text


class TestDetailedReceipt:

    def test_breakdown(self):
        text = render_detailed_receipt(_make_sale(_vip()))
        assert "1. Widget x2 @ $10.00 = $20.00" in text
        assert "Items Subtotal: $20.00" in text
        assert "Total Discounts: -$2.00" in text
        assert "Tax (8%): $1.44" in text
        assert "FINAL TOTAL: $19.44" in text
        assert "Discount Rate: 10%" in text
        assert "Current Points Balance: 0.39" in text

    def test_breakdown_lists_points_apart_from_discounts(self):
        text = render_detailed_receipt(_make_sale(_vip(points="3"), points="3"))
        assert "Total Discounts: -$2.00" in text
        assert "Loyalty Points Used: -$3.00" in text
        assert "FINAL TOTAL: $16.20" in text

    def test_pending_sale_is_unpaid(self):
        tx = Transaction(id=10002, customer=None, cashier_id="CASHIER01")
        text = render_detailed_receipt(tx)
        assert "Payment Method: Unpaid" in text
        assert "Status: Pending" in text
