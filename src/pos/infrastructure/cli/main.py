import logging

import click

from pos.domain.exceptions import DomainException
from pos.infrastructure.bootstrap import (
    DEFAULT_CASHIER_ID,
    DEFAULT_TAX_RATE,
    Settings,
    build_store,
)
from pos.infrastructure.cli.customer_commands import customer_list
from pos.infrastructure.cli.product_commands import (
    product_add,
    product_list,
    product_search,
)
from pos.infrastructure.cli.register_commands import register
from pos.infrastructure.cli.report_commands import (
    report_customers,
    report_financial,
    report_inventory,
    report_low_stock,
    report_sales,
)


@click.group()
@click.option("-v", "--verbose", is_flag=True, default=False, help="Enable debug logging.")
@click.option(
    "--tax-rate",
    envvar="POS_TAX_RATE",
    default=DEFAULT_TAX_RATE,
    show_default=True,
    help="Sales tax rate as a fraction.",
)
@click.option(
    "--cashier",
    envvar="POS_CASHIER_ID",
    default=DEFAULT_CASHIER_ID,
    show_default=True,
    help="Cashier ID printed on receipts.",
)
@click.pass_context
def cli(ctx: click.Context, verbose: bool, tax_rate: str, cashier: str) -> None:
    """POS: convenience store register"""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )
    try:
        settings = Settings.of(tax_rate=tax_rate, cashier_id=cashier)
    except DomainException as exc:
        raise click.BadParameter(str(exc), param_hint="--tax-rate")
    ctx.obj = build_store(settings)


@cli.group()
def product() -> None:
    """Browse the product catalog."""


@cli.group()
def customer() -> None:
    """Browse the customer directory."""


@cli.group()
def report() -> None:
    """Print store reports."""


# Register subcommands
cli.add_command(register)
product.add_command(product_add)
product.add_command(product_list)
product.add_command(product_search)
customer.add_command(customer_list)
report.add_command(report_customers)
report.add_command(report_financial)
report.add_command(report_inventory)
report.add_command(report_low_stock)
report.add_command(report_sales)
