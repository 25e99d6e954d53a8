"""CLI commands for store reports."""

from __future__ import annotations

import click

from pos.application.reports import (
    CustomerAnalyticsHandler,
    FinancialSummaryHandler,
    InventoryReportHandler,
    LowStockReportHandler,
    SalesReportHandler,
)
from pos.infrastructure.bootstrap import Store
from pos.infrastructure.cli.display import (
    show_customer_analytics,
    show_financial_summary,
    show_inventory_report,
    show_low_stock,
    show_sales_report,
)


@click.command("inventory")
@click.pass_obj
def report_inventory(store: Store) -> None:
    """Catalog valuation, stock alerts and category breakdown."""
    show_inventory_report(InventoryReportHandler(store.products).handle())


@click.command("low-stock")
@click.pass_obj
def report_low_stock(store: Store) -> None:
    """Products at or below their minimum stock level."""
    show_low_stock(LowStockReportHandler(store.products).handle())


@click.command("sales")
@click.pass_obj
def report_sales(store: Store) -> None:
    """Totals over the recorded transactions."""
    show_sales_report(SalesReportHandler(store.transactions).handle())


@click.command("customers")
@click.pass_obj
def report_customers(store: Store) -> None:
    """Customer count, spending, top spenders and tier mix."""
    show_customer_analytics(CustomerAnalyticsHandler(store.customers).handle())


@click.command("financial")
@click.pass_obj
def report_financial(store: Store) -> None:
    """Inventory valuation alongside sales revenue."""
    handler = FinancialSummaryHandler(store.products, store.customers, store.transactions)
    show_financial_summary(handler.handle())
