"""Unit tests for the Transaction aggregate: pricing, payment and finalize."""

from decimal import Decimal

from pos.domain.model.customer import Customer, CustomerTier
from pos.domain.model.product import Product
from pos.domain.model.transaction import (
    PaymentMethod,
    Transaction,
    TransactionStatus,
)
from pos.domain.model.value_objects import Money


def _make_product(product_id: str = "P001", stock: int = 50, cost: str = "8.00") -> Product:
    """Standard product that sells at $10.00 with the default cost."""
    return Product.standard(
        id=product_id,
        name=f"Item {product_id}",
        base_price=Money.of("0"),
        cost_price=Money.of(cost),
        stock=stock,
        markup="0.25",
    )


def _make_rice(stock: int = 100) -> Product:
    return Product.bulk(
        id="P004",
        name="Rice Premium",
        price_per_unit=Money.of("2.50"),
        cost_price=Money.of("1.80"),
        stock=stock,
        unit="kg",
        minimum_quantity="0.5",
    )


def _make_customer(tier: CustomerTier = CustomerTier.REGULAR, points: str = "0") -> Customer:
    return Customer(
        id="C1001",
        first_name="Jane",
        last_name="Smith",
        tier=tier,
        loyalty_points=Decimal(points),
    )


def _make_transaction(customer: Customer | None = None) -> Transaction:
    return Transaction(id=10001, customer=customer, cashier_id="CASHIER01")


class TestAddLine:

    def test_line_is_priced_at_selling_price(self):
        tx = _make_transaction()
        assert tx.add_line(_make_product(), 2)
        line = tx.lines[0]
        assert line.unit_price == Money.of("10.00")
        assert line.subtotal == Money.of("20.00")

    def test_line_discount(self):
        tx = _make_transaction()
        tx.add_line(_make_product(), 2, discount="0.1")
        line = tx.lines[0]
        assert line.subtotal == Money.of("18.00")
        assert line.discount_amount == Money.of("2.00")

    def test_unit_price_locked_at_add_time(self):
        product = _make_product()
        tx = _make_transaction()
        tx.add_line(product, 1)
        product.cost_price = Money.of("80.00")
        assert tx.lines[0].unit_price == Money.of("10.00")

    def test_bulk_line_priced_by_quantity(self):
        tx = _make_transaction()
        assert tx.add_line(_make_rice(), "2.5")
        line = tx.lines[0]
        assert line.subtotal == Money.of("6.25")
        assert line.stock_units == 3

    def test_bulk_below_minimum_rejected(self):
        tx = _make_transaction()
        assert not tx.add_line(_make_rice(), "0.2")
        assert tx.is_empty

    def test_inactive_product_rejected(self):
        product = _make_product()
        product.deactivate()
        tx = _make_transaction()
        assert not tx.add_line(product, 1)
        assert tx.is_empty

    def test_non_positive_quantity_rejected(self):
        tx = _make_transaction()
        assert not tx.add_line(_make_product(), 0)
        assert not tx.add_line(_make_product(), -1)
        assert tx.is_empty

    def test_discount_out_of_range_rejected(self):
        tx = _make_transaction()
        assert not tx.add_line(_make_product(), 1, discount="1.5")
        assert tx.is_empty

    def test_unusable_quantity_rejected(self):
        product = _make_product(stock=50)
        tx = _make_transaction()
        for quantity in ("inf", "-inf", "nan", "abc", Decimal("NaN")):
            assert not tx.add_line(product, quantity)
        assert tx.is_empty
        assert product.current_stock == 50

    def test_unusable_discount_rejected(self):
        tx = _make_transaction()
        assert not tx.add_line(_make_product(), 1, discount="nan")
        assert not tx.add_line(_make_product(), 1, discount="ten percent")
        assert tx.is_empty

    def test_insufficient_stock_rejected(self):
        tx = _make_transaction()
        assert not tx.add_line(_make_product(stock=2), 3)
        assert tx.is_empty

    def test_stock_is_not_taken_until_finalize(self):
        product = _make_product(stock=50)
        tx = _make_transaction()
        tx.add_line(product, 3)
        assert product.current_stock == 50

    def test_remove_line(self):
        tx = _make_transaction()
        tx.add_line(_make_product(), 1)
        assert tx.remove_line(0)
        assert tx.is_empty
        assert not tx.remove_line(0)

    def test_clear_lines(self):
        tx = _make_transaction()
        tx.add_line(_make_product(), 1)
        tx.add_line(_make_product("P002"), 2)
        tx.compute_totals("0.08")

        assert tx.clear_lines()
        assert tx.is_empty
        assert tx.final_total.is_zero
        assert tx.status is TransactionStatus.PENDING

    def test_clear_lines_only_while_pending(self):
        completed = _make_transaction()
        completed.add_line(_make_product(), 1)
        completed.finalize()
        assert not completed.clear_lines()
        assert completed.item_count == 1

        cancelled = _make_transaction()
        cancelled.add_line(_make_product(), 1)
        cancelled.cancel()
        assert not cancelled.clear_lines()
        assert cancelled.item_count == 1


class TestComputeTotals:

    def test_no_customer(self):
        tx = _make_transaction()
        tx.add_line(_make_product(), 2)
        tx.compute_totals("0.08")
        assert tx.subtotal == Money.of("20.00")
        assert tx.tax == Money.of("1.60")
        assert tx.final_total == Money.of("21.60")
        assert tx.loyalty_points_earned == 0

    def test_vip_discount_and_points_earned(self):
        tx = _make_transaction(_make_customer(CustomerTier.VIP))
        tx.add_line(_make_product(), 2)
        tx.compute_totals("0.08")
        assert tx.subtotal == Money.of("18.00")
        assert tx.total_discount == Money.of("2.00")
        assert tx.tax == Money.of("1.44")
        assert tx.final_total == Money.of("19.44")
        assert tx.loyalty_points_earned == Decimal("0.3888")

    def test_employee_earns_triple_points(self):
        tx = _make_transaction(_make_customer(CustomerTier.EMPLOYEE))
        tx.add_line(_make_product(), 10)
        tx.compute_totals("0")
        assert tx.final_total == Money.of("85.00")
        assert tx.loyalty_points_earned == Decimal("2.55")

    def test_loyalty_points_reduce_subtotal(self):
        tx = _make_transaction(_make_customer(points="5"))
        tx.add_line(_make_product(), 2)
        assert tx.apply_loyalty_points("5")
        tx.compute_totals("0.08")
        assert tx.subtotal == Money.of("15.00")
        assert tx.total_discount == Money.of("5.00")
        assert tx.final_total == Money.of("16.20")

    def test_loyalty_points_capped_at_subtotal(self):
        tx = _make_transaction(_make_customer(points="50"))
        tx.add_line(_make_product(), 2)
        tx.apply_loyalty_points("50")
        tx.compute_totals("0.08")
        assert tx.loyalty_points_used == Decimal("20.00")
        assert tx.final_total.is_zero

    def test_points_need_customer(self):
        tx = _make_transaction()
        assert not tx.apply_loyalty_points("1")

    def test_points_above_balance_rejected(self):
        tx = _make_transaction(_make_customer(points="3"))
        assert not tx.apply_loyalty_points("5")
        assert tx.loyalty_points_used == 0

    def test_unusable_points_rejected(self):
        tx = _make_transaction(_make_customer(points="5"))
        tx.add_line(_make_product(), 2)
        for points in ("inf", "nan", "abc"):
            assert not tx.apply_loyalty_points(points)
        assert tx.loyalty_points_used == 0

    def test_unusable_tax_rate_leaves_totals_alone(self):
        tx = _make_transaction()
        tx.add_line(_make_product(), 2)
        assert tx.compute_totals("0.08")
        for rate in ("2", "-0.1", "nan", "inf", "abc"):
            assert not tx.compute_totals(rate)
        assert tx.tax_rate.value == Decimal("0.08")
        assert tx.final_total == Money.of("21.60")

    def test_lines_added_after_totals_are_included(self):
        tx = _make_transaction()
        tx.add_line(_make_product(), 1)
        tx.compute_totals("0.08")
        tx.add_line(_make_product("P002"), 1)
        assert tx.subtotal == Money.of("20.00")
        assert tx.final_total == Money.of("21.60")

    def test_points_applied_after_totals_are_included(self):
        tx = _make_transaction(_make_customer(points="5"))
        tx.add_line(_make_product(), 2)
        tx.compute_totals("0.08")
        tx.apply_loyalty_points("5")
        assert tx.final_total == Money.of("16.20")

    def test_compute_totals_is_idempotent(self):
        tx = _make_transaction(_make_customer(CustomerTier.PREMIUM))
        tx.add_line(_make_product(), 3)
        tx.compute_totals("0.08")
        first = tx.final_total
        tx.compute_totals("0.08")
        assert tx.final_total == first


class TestPayment:

    def _priced(self) -> Transaction:
        tx = _make_transaction()
        tx.add_line(_make_product(), 2)
        tx.compute_totals("0.08")
        return tx

    def test_cash_underpayment_fails(self):
        tx = self._priced()
        assert not tx.process_payment(PaymentMethod.CASH, "20.00")
        assert tx.status is TransactionStatus.PENDING
        assert tx.payment_method is None

    def test_cash_exact_payment(self):
        tx = self._priced()
        assert tx.process_payment(PaymentMethod.CASH, "21.60")
        assert tx.payment_method is PaymentMethod.CASH
        assert tx.status is TransactionStatus.PENDING

    def test_card_payment_needs_no_amount(self):
        tx = self._priced()
        assert tx.process_payment(PaymentMethod.CREDIT_CARD)
        assert tx.payment_label == "Credit Card"

    def test_nothing_to_pay_fails(self):
        tx = _make_transaction()
        assert not tx.process_payment(PaymentMethod.CASH, "10")

    def test_unusable_cash_amount_rejected(self):
        tx = self._priced()
        for amount in ("inf", "nan", "twenty"):
            assert not tx.process_payment(PaymentMethod.CASH, amount)
        assert tx.payment_method is None

    def test_change_due(self):
        tx = self._priced()
        assert tx.change_due("25") == Money.of("3.40")
        assert tx.change_due("10").is_zero
        assert tx.change_due("nan").is_zero


class TestFinalize:

    def test_takes_stock_once(self):
        product = _make_product(stock=50)
        tx = _make_transaction()
        tx.add_line(product, 3)
        tx.compute_totals()
        assert tx.finalize()
        assert product.current_stock == 47
        assert tx.status is TransactionStatus.COMPLETED

        assert not tx.finalize()
        assert product.current_stock == 47

    def test_books_customer_spend_and_points(self):
        customer = _make_customer(CustomerTier.VIP)
        tx = _make_transaction(customer)
        tx.add_line(_make_product(), 2)
        tx.compute_totals("0.08")
        tx.finalize()
        assert customer.total_spent == Decimal("19.44")
        assert customer.transaction_count == 1
        assert customer.loyalty_points == tx.loyalty_points_earned

    def test_grants_points_priced_with_the_totals(self):
        customer = _make_customer(CustomerTier.REGULAR)
        tx = _make_transaction(customer)
        tx.add_line(_make_product(), 10)
        tx.compute_totals("0")
        customer.change_tier(CustomerTier.EMPLOYEE)

        assert tx.finalize()
        assert tx.loyalty_points_earned == Decimal("1.00")
        assert customer.loyalty_points == Decimal("1.00")

    def test_redeems_applied_points(self):
        customer = _make_customer(points="5")
        tx = _make_transaction(customer)
        tx.add_line(_make_product(), 2)
        tx.apply_loyalty_points("5")
        tx.compute_totals("0.08")
        assert tx.finalize()
        assert customer.loyalty_points == Decimal("0.162")

    def test_defaults_to_standard_tax_rate(self):
        tx = _make_transaction()
        tx.add_line(_make_product(), 2)
        assert tx.finalize()
        assert tx.final_total == Money.of("21.60")

    def test_empty_transaction_rejected(self):
        tx = _make_transaction()
        assert not tx.finalize()
        assert tx.status is TransactionStatus.PENDING

    def test_all_or_nothing_when_stock_runs_out(self):
        first = _make_product("P001", stock=10)
        second = _make_product("P002", stock=10)
        tx = _make_transaction()
        tx.add_line(first, 2)
        tx.add_line(second, 5)
        second.reduce_stock(8)  # sold elsewhere in the meantime

        assert not tx.finalize()
        assert first.current_stock == 10
        assert second.current_stock == 2
        assert tx.status is TransactionStatus.PENDING

    def test_same_product_on_two_lines_checked_together(self):
        product = _make_product(stock=5)
        tx = _make_transaction()
        assert tx.add_line(product, 3)
        assert tx.add_line(product, 3)
        assert not tx.finalize()
        assert product.current_stock == 5

    def test_points_spent_elsewhere_block_finalize(self):
        customer = _make_customer(points="5")
        tx = _make_transaction(customer)
        tx.add_line(_make_product(), 2)
        tx.apply_loyalty_points("5")
        customer.redeem_points(Decimal("3"))

        assert not tx.finalize()
        assert customer.total_spent == 0

    def test_completed_transaction_is_frozen(self):
        tx = _make_transaction()
        tx.add_line(_make_product(), 1)
        tx.finalize()
        assert not tx.add_line(_make_product("P002"), 1)
        assert not tx.remove_line(0)
        assert not tx.cancel()
        assert tx.item_count == 1


class TestCancel:

    def test_cancel_pending(self):
        product = _make_product(stock=50)
        tx = _make_transaction()
        tx.add_line(product, 3)
        assert tx.cancel()
        assert tx.status is TransactionStatus.CANCELLED
        assert product.current_stock == 50
        assert not tx.finalize()
