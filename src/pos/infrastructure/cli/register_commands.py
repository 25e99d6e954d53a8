"""Interactive register: the menu-driven till used at the counter.

Each menu is a loop of ``click.prompt`` calls; domain errors are shown
to the cashier and the menu carries on.
"""

from __future__ import annotations

import logging
from decimal import Decimal

import click

from pos.application.add_product import AddProductHandler
from pos.application.add_sale_item import AddSaleItemHandler
from pos.application.adjust_stock import AdjustStockHandler
from pos.application.change_customer_tier import ChangeCustomerTierHandler
from pos.application.complete_sale import CompleteSaleHandler
from pos.application.dto import NewProductSpec, SaleItemSpec
from pos.application.refund_sale import RefundSaleHandler
from pos.application.register_customer import RegisterCustomerHandler
from pos.application.reports import (
    CustomerAnalyticsHandler,
    FinancialSummaryHandler,
    InventoryReportHandler,
    LowStockReportHandler,
    SalesReportHandler,
    customer_line,
    product_line,
)
from pos.application.show_transaction import (
    ShowTransactionHandler,
    TransactionHistoryHandler,
)
from pos.application.start_sale import StartSaleHandler
from pos.domain.exceptions import DomainException, ValidationError
from pos.domain.model.customer import CustomerTier
from pos.domain.model.product import ProductCategory
from pos.domain.model.transaction import PaymentMethod, Transaction
from pos.domain.model.value_objects import Rate, decimal_of
from pos.domain.service.inventory_service import InventoryService
from pos.infrastructure.bootstrap import Store
from pos.infrastructure.cli.display import (
    show_customer_analytics,
    show_customers,
    show_financial_summary,
    show_inventory_report,
    show_low_stock,
    show_products,
    show_sales_report,
    show_transactions,
)

logger = logging.getLogger(__name__)

TILL_PAYMENT_METHODS = [
    PaymentMethod.CASH,
    PaymentMethod.CREDIT_CARD,
    PaymentMethod.DEBIT_CARD,
    PaymentMethod.MOBILE_PAYMENT,
]


class DecimalParamType(click.ParamType):
    """Finite decimal input; ``click.prompt`` asks again on anything else."""

    name = "decimal"

    def convert(self, value, param, ctx):
        try:
            return decimal_of(value)
        except ValidationError:
            self.fail(f"{value!r} is not a valid number", param, ctx)


DECIMAL = DecimalParamType()


def _menu(title: str, options: list[str]) -> int:
    click.echo()
    click.echo(f"--- {title} ---")
    for number, label in enumerate(options, start=1):
        click.echo(f"{number}. {label}")
    click.echo("0. Back")
    return click.prompt("Choose an option", type=click.IntRange(0, len(options)))


def _choose(label: str, choices: list[str]) -> int:
    """Numbered pick from ``choices``; returns the zero-based index."""
    for number, text in enumerate(choices, start=1):
        click.echo(f"{number}. {text}")
    return click.prompt(label, type=click.IntRange(1, len(choices))) - 1


class Register:

    def __init__(self, store: Store) -> None:
        self.store = store
        self.inventory = InventoryService(store.products)

    def run(self) -> None:
        click.echo("=" * 60)
        click.echo("CONVENIENCE STORE MANAGEMENT SYSTEM".center(60).rstrip())
        click.echo("=" * 60)
        menus = {
            1: self.inventory_menu,
            2: self.customer_menu,
            3: self.sales_menu,
            4: self.reports_menu,
            5: self.settings_menu,
        }
        while True:
            click.echo()
            click.echo("MAIN MENU")
            click.echo("1. Inventory Management")
            click.echo("2. Customer Management")
            click.echo("3. Sales & Transactions")
            click.echo("4. Reports & Analytics")
            click.echo("5. Settings")
            click.echo("0. Exit")
            choice = click.prompt("Choose an option", type=click.IntRange(0, 5))
            if choice == 0:
                click.echo("Goodbye!")
                return
            menus[choice]()

    def _attempt(self, action, *args) -> None:
        try:
            action(*args)
        except DomainException as exc:
            click.echo(f"Error: {exc}")

    # --- Inventory ------------------------------------------------------------

    def inventory_menu(self) -> None:
        actions = [
            ("View All Products", self.view_products),
            ("Add New Product", self.add_product),
            ("Search Products", self.search_products),
            ("Update Stock", self.update_stock),
            ("Low Stock Alert", self.low_stock_alert),
            ("Inventory Report", self.inventory_report),
            ("Deactivate Expired Products", self.deactivate_expired),
        ]
        self._run_menu("INVENTORY MANAGEMENT", actions)

    def view_products(self) -> None:
        show_products([product_line(p) for p in self.store.products.list_all()])

    def add_product(self) -> None:
        kinds = ["standard", "perishable", "bulk"]
        kind = kinds[_choose("Product type", ["Regular Product", "Perishable Product", "Bulk Product"])]
        name = click.prompt("Product name")
        description = click.prompt("Description", default="", show_default=False)
        cost = click.prompt("Cost price", type=DECIMAL)
        stock = click.prompt("Initial stock", type=click.IntRange(min=0))
        categories = list(ProductCategory)
        category = categories[_choose("Category", [c.value for c in categories])]
        supplier = click.prompt("Supplier", default="", show_default=False)

        fields = {}
        if kind == "standard":
            fields["markup"] = str(click.prompt("Markup (0.3 for 30%)", type=DECIMAL, default="0.3"))
        elif kind == "perishable":
            fields["base_price"] = str(click.prompt("Selling price", type=DECIMAL))
            expires = click.prompt(
                "Expiration date (YYYY-MM-DD)", type=click.DateTime(formats=["%Y-%m-%d"])
            )
            fields["expiration_date"] = expires.date()
            fields["shelf_life_days"] = click.prompt("Shelf life (days)", type=click.IntRange(min=1))
        else:
            fields["unit"] = click.prompt("Unit (kg, lbs, liters...)")
            fields["price_per_unit"] = str(click.prompt("Price per unit", type=DECIMAL))
            fields["minimum_quantity"] = str(
                click.prompt("Minimum quantity", type=DECIMAL, default="0.1")
            )

        spec = NewProductSpec(
            kind=kind,
            name=name,
            cost_price=str(cost),
            stock=stock,
            category=category.value,
            supplier=supplier,
            description=description,
            **fields,
        )
        product = AddProductHandler(self.store.products).handle(spec)
        click.echo(f"Product {product.id} '{product.name}' added successfully!")

    def search_products(self) -> None:
        term = click.prompt("Search term")
        show_products([product_line(p) for p in self.inventory.search(term)])

    def update_stock(self) -> None:
        product_id = click.prompt("Product ID")
        delta = click.prompt("Stock change (+ to add, - to remove)", type=int)
        level = AdjustStockHandler(self.store.products).handle(product_id, delta)
        click.echo(f"Stock for {product_id} is now {level}")

    def low_stock_alert(self) -> None:
        show_low_stock(LowStockReportHandler(self.store.products).handle())

    def inventory_report(self) -> None:
        show_inventory_report(InventoryReportHandler(self.store.products).handle())

    def deactivate_expired(self) -> None:
        expired = self.inventory.deactivate_expired()
        click.echo(f"Deactivated {len(expired)} expired product(s).")

    # --- Customers ------------------------------------------------------------

    def customer_menu(self) -> None:
        actions = [
            ("View All Customers", self.view_customers),
            ("Add New Customer", self.add_customer),
            ("Search Customer", self.search_customer),
            ("Change Customer Tier", self.change_tier),
            ("Customer Statistics", self.customer_statistics),
        ]
        self._run_menu("CUSTOMER MANAGEMENT", actions)

    def view_customers(self) -> None:
        show_customers([customer_line(c) for c in self.store.customers.list_all()])

    def add_customer(self) -> None:
        first = click.prompt("First name")
        last = click.prompt("Last name", default="", show_default=False)
        email = click.prompt("Email", default="", show_default=False)
        phone = click.prompt("Phone", default="", show_default=False)
        tiers = list(CustomerTier)
        tier = tiers[_choose("Customer type", [t.value for t in tiers])]
        customer = RegisterCustomerHandler(self.store.customers).handle(
            first, last, email, phone, tier
        )
        click.echo(f"Customer added with ID: {customer.id}")

    def search_customer(self) -> None:
        by = _choose("Search by", ["Customer ID", "Email", "Phone"])
        value = click.prompt("Value")
        repo = self.store.customers
        lookups = [repo.get_by_id, repo.find_by_email, repo.find_by_phone]
        customer = lookups[by](value)
        if customer is None:
            click.echo("Customer not found!")
            return
        show_customers([customer_line(customer)])

    def change_tier(self) -> None:
        customer_id = click.prompt("Customer ID")
        tiers = list(CustomerTier)
        tier = tiers[_choose("New customer type", [t.value for t in tiers])]
        customer = ChangeCustomerTierHandler(self.store.customers).handle(customer_id, tier)
        click.echo(f"{customer.full_name} is now {customer.tier.value}")

    def customer_statistics(self) -> None:
        show_customer_analytics(CustomerAnalyticsHandler(self.store.customers).handle())

    # --- Sales ----------------------------------------------------------------

    def sales_menu(self) -> None:
        actions = [
            ("New Transaction", self.new_transaction),
            ("View Transaction History", self.transaction_history),
            ("Process Refund", self.refund),
            ("Transaction Details", self.transaction_details),
        ]
        self._run_menu("SALES & TRANSACTIONS", actions)

    def new_transaction(self) -> None:
        store = self.store
        customer_id = None
        if click.confirm("Is this for a registered customer?", default=False):
            customer_id = click.prompt("Customer ID")

        starter = StartSaleHandler(store.transactions, store.customers)
        try:
            transaction = starter.handle(customer_id, store.settings.cashier_id)
        except DomainException as exc:
            click.echo(f"{exc}. Proceeding without customer...")
            transaction = starter.handle(None, store.settings.cashier_id)
        if transaction.customer is not None:
            customer = transaction.customer
            click.echo(f"Customer: {customer.full_name} ({customer.tier.value})")

        self._scan_items(transaction)
        if transaction.is_empty:
            transaction.cancel()
            click.echo("No items in transaction. Cancelling...")
            return

        customer = transaction.customer
        if customer is not None and customer.loyalty_points > 0:
            if click.confirm(
                f"Customer has {customer.loyalty_points:.2f} loyalty points. Use them?",
                default=False,
            ):
                points = click.prompt("Points to use", type=DECIMAL)
                if not transaction.apply_loyalty_points(points):
                    click.echo("Invalid number of points; none applied.")

        transaction.compute_totals(store.settings.tax_rate)
        click.echo()
        click.echo("--- TRANSACTION SUMMARY ---")
        click.echo(f"Subtotal: {transaction.subtotal}")
        click.echo(f"Tax: {transaction.tax}")
        click.echo(f"Total: {transaction.final_total}")
        click.echo()

        method = TILL_PAYMENT_METHODS[
            _choose("Payment method", [m.value for m in TILL_PAYMENT_METHODS])
        ]
        amount_paid = None
        if method is PaymentMethod.CASH:
            amount_paid = click.prompt("Amount paid", type=DECIMAL)

        try:
            result = CompleteSaleHandler(store.transactions).handle(
                transaction, method, amount_paid, store.settings.tax_rate
            )
        except DomainException as exc:
            transaction.cancel()
            click.echo(f"Payment failed! {exc}")
            return

        click.echo(result.receipt)
        if method is PaymentMethod.CASH:
            click.echo(f"Change: {result.change_due}")
        click.echo("Transaction completed successfully!")

    def _scan_items(self, transaction: Transaction) -> None:
        adder = AddSaleItemHandler(self.store.products)
        while True:
            product_id = click.prompt("Enter Product ID (or 'done' to finish)")
            if product_id.strip().lower() == "done":
                return
            product = self.store.products.get_by_id(product_id)
            if product is None:
                click.echo("Product not found!")
                continue
            click.echo(f"Product: {product.name} ({product.selling_price()})")
            click.echo(f"Available Stock: {product.current_stock}")
            quantity = click.prompt("Quantity", type=DECIMAL)
            discount = Decimal("0")
            if click.confirm("Apply manual discount?", default=False):
                discount = click.prompt("Discount (0.1 for 10%)", type=DECIMAL)
            try:
                adder.handle(
                    transaction,
                    SaleItemSpec(product_id, quantity, discount),
                )
            except DomainException as exc:
                click.echo(f"Failed to add item: {exc}")
                continue
            click.echo("Item added to transaction!")

    def transaction_history(self) -> None:
        show_transactions(TransactionHistoryHandler(self.store.transactions).handle())

    def refund(self) -> None:
        transaction_id = click.prompt("Transaction ID", type=int)
        amount = None
        if not click.confirm("Full refund?", default=True):
            amount = click.prompt("Refund amount", type=DECIMAL)
        status = RefundSaleHandler(self.store.transactions).handle(transaction_id, amount)
        click.echo(f"Refund processed. Transaction #{transaction_id} is {status.value}")

    def transaction_details(self) -> None:
        transaction_id = click.prompt("Transaction ID", type=int)
        click.echo(
            ShowTransactionHandler(self.store.transactions).handle(transaction_id, detailed=True)
        )

    # --- Reports --------------------------------------------------------------

    def reports_menu(self) -> None:
        store = self.store
        actions = [
            ("Inventory Report", self.inventory_report),
            ("Sales Report", lambda: show_sales_report(
                SalesReportHandler(store.transactions).handle())),
            ("Customer Analytics", self.customer_statistics),
            ("Low Stock Alert", self.low_stock_alert),
            ("Financial Summary", lambda: show_financial_summary(
                FinancialSummaryHandler(
                    store.products, store.customers, store.transactions
                ).handle())),
        ]
        self._run_menu("REPORTS & ANALYTICS", actions)

    # --- Settings -------------------------------------------------------------

    def settings_menu(self) -> None:
        actions = [
            ("Change Cashier ID", self.change_cashier),
            ("Change Tax Rate", self.change_tax_rate),
            ("System Information", self.system_information),
        ]
        self._run_menu("SETTINGS", actions)

    def change_cashier(self) -> None:
        self.store.settings.cashier_id = click.prompt(
            "New cashier ID", default=self.store.settings.cashier_id
        )
        logger.info("Cashier changed to %s", self.store.settings.cashier_id)
        click.echo(f"Cashier ID updated to: {self.store.settings.cashier_id}")

    def change_tax_rate(self) -> None:
        rate = click.prompt("Tax rate (0.08 for 8%)", type=DECIMAL)
        self.store.settings.tax_rate = Rate.of(rate)
        click.echo(f"Tax rate updated to: {self.store.settings.tax_rate}")

    def system_information(self) -> None:
        store = self.store
        click.echo(f"Current Cashier: {store.settings.cashier_id}")
        click.echo(f"Tax Rate: {store.settings.tax_rate}")
        click.echo(f"Total Products: {len(store.products.list_all())}")
        click.echo(f"Active Products: {self.inventory.active_count()}")
        click.echo(f"Total Customers: {len(store.customers.list_all())}")
        click.echo(f"Total Transactions: {len(store.transactions.list_all())}")

    def _run_menu(self, title: str, actions) -> None:
        while True:
            choice = _menu(title, [label for label, _ in actions])
            if choice == 0:
                return
            self._attempt(actions[choice - 1][1])


@click.command("register")
@click.pass_obj
def register(store: Store) -> None:
    """Run the interactive register menu."""
    Register(store).run()
