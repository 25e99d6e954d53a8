"""Unit tests for refunds: stock and loyalty reversal on a completed sale."""

from decimal import Decimal

from pos.domain.model.customer import Customer, CustomerTier
from pos.domain.model.product import Product
from pos.domain.model.transaction import Transaction, TransactionStatus
from pos.domain.model.value_objects import Money


def _make_product(stock: int = 50, cost: str = "8.00") -> Product:
    return Product.standard(
        id="P001",
        name="Widget",
        base_price=Money.of("0"),
        cost_price=Money.of(cost),
        stock=stock,
        markup="0.25",
    )


def _completed_sale(
    product: Product, quantity: int, customer: Customer | None = None
) -> Transaction:
    tx = Transaction(id=10001, customer=customer, cashier_id="CASHIER01")
    tx.add_line(product, quantity)
    tx.compute_totals("0.08")
    assert tx.finalize()
    return tx


class TestFullRefund:

    def test_restores_stock(self):
        product = _make_product(stock=50)
        tx = _completed_sale(product, 3)
        assert product.current_stock == 47

        assert tx.process_refund()
        assert product.current_stock == 50
        assert tx.status is TransactionStatus.REFUNDED
        assert tx.refunded_amount == tx.final_total

    def test_second_refund_fails(self):
        product = _make_product(stock=50)
        tx = _completed_sale(product, 3)
        tx.process_refund()

        assert not tx.process_refund()
        assert product.current_stock == 50

    def test_explicit_full_amount(self):
        product = _make_product(stock=50)
        tx = _completed_sale(product, 3)
        assert tx.process_refund("32.40")
        assert tx.status is TransactionStatus.REFUNDED
        assert product.current_stock == 50

    def test_reverses_customer_spend_and_points(self):
        customer = Customer(id="C1003", first_name="Bob", last_name="Johnson", tier=CustomerTier.VIP)
        tx = _completed_sale(_make_product(), 2, customer)
        assert customer.loyalty_points == Decimal("0.3888")

        tx.process_refund()
        assert customer.total_spent == 0
        assert customer.loyalty_points == 0
        assert customer.transaction_count == 1

    def test_reverses_points_recorded_on_the_sale(self):
        customer = Customer(id="C1001", first_name="Jane", last_name="Smith", loyalty_points=Decimal("10"))
        tx = _completed_sale(_make_product(), 10, customer)
        assert tx.loyalty_points_earned == Decimal("1.08")
        customer.change_tier(CustomerTier.EMPLOYEE)

        assert tx.process_refund()
        assert customer.loyalty_points == Decimal("10")
        assert customer.total_spent == 0

    def test_amount_paid_when_total_rounds_up(self):
        product = _make_product(stock=50, cost="1.50")
        tx = _completed_sale(product, 1)
        assert tx.final_total.amount == Decimal("2.025")

        assert not tx.process_refund("2.04")
        assert tx.process_refund("2.03")
        assert tx.status is TransactionStatus.REFUNDED
        assert product.current_stock == 50

    def test_printed_total_when_it_rounds_down(self):
        product = _make_product(stock=50, cost="1.248")
        tx = _completed_sale(product, 1)
        assert str(tx.final_total) == "$1.68"

        assert tx.process_refund("1.68")
        assert tx.status is TransactionStatus.REFUNDED
        assert product.current_stock == 50

    def test_default_amount_is_what_was_paid(self):
        tx = _completed_sale(_make_product(cost="1.50"), 1)
        assert tx.process_refund()
        assert tx.refunded_amount == Money.of("2.03")


class TestPartialRefund:

    def test_reverses_share_of_recorded_points(self):
        customer = Customer(id="C1001", first_name="Jane", last_name="Smith", loyalty_points=Decimal("10"))
        tx = _completed_sale(_make_product(), 10, customer)
        customer.change_tier(CustomerTier.EMPLOYEE)

        assert tx.process_refund("54.00")
        assert customer.loyalty_points == Decimal("10.54")
        assert customer.total_spent == Decimal("54")

    def test_half_refund_restocks_half_the_units(self):
        product = _make_product(stock=50)
        tx = _completed_sale(product, 4)
        assert tx.final_total == Money.of("43.20")

        assert tx.process_refund("21.60")
        assert product.current_stock == 48
        assert tx.status is TransactionStatus.PARTIALLY_REFUNDED
        assert tx.refunded_amount == Money.of("21.60")

    def test_restocked_units_round_down(self):
        product = _make_product(stock=50)
        tx = _completed_sale(product, 3)
        tx.process_refund("16.20")  # half of $32.40, i.e. 1.5 units
        assert product.current_stock == 48

    def test_partially_refunded_cannot_be_refunded_again(self):
        tx = _completed_sale(_make_product(), 4)
        tx.process_refund("10")
        assert not tx.process_refund("10")


class TestRefundRejections:

    def test_pending_transaction(self):
        tx = Transaction(id=10001)
        tx.add_line(_make_product(), 1)
        assert not tx.process_refund()
        assert tx.status is TransactionStatus.PENDING

    def test_amount_above_total(self):
        product = _make_product(stock=50)
        tx = _completed_sale(product, 1)
        assert not tx.process_refund("100")
        assert tx.status is TransactionStatus.COMPLETED
        assert product.current_stock == 49

    def test_non_positive_amount(self):
        tx = _completed_sale(_make_product(), 1)
        assert not tx.process_refund("0")
        assert not tx.process_refund("-5")
        assert tx.status is TransactionStatus.COMPLETED

    def test_unusable_amount(self):
        product = _make_product(stock=50)
        tx = _completed_sale(product, 1)
        for amount in ("inf", "nan", "all of it"):
            assert not tx.process_refund(amount)
        assert tx.status is TransactionStatus.COMPLETED
        assert product.current_stock == 49
