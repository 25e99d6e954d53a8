"""Shared table formatting for the CLI commands and the register menu."""

from __future__ import annotations

import click

from pos.application.dto import (
    CustomerAnalyticsDTO,
    CustomerLineDTO,
    FinancialSummaryDTO,
    InventoryReportDTO,
    ProductLineDTO,
    SalesReportDTO,
    TransactionSummaryDTO,
)

RULE = "=" * 60


def _banner(title: str) -> None:
    click.echo(RULE)
    click.echo(title.center(60).rstrip())
    click.echo(RULE)


def show_products(products: list[ProductLineDTO]) -> None:
    if not products:
        click.echo("No products found.")
        return

    click.echo(
        f"{'ID':<6} {'Name':<22} {'Type':<11} {'Category':<16} {'Price':>8} {'Stock':>6}"
    )
    click.echo("-" * 74)
    for p in products:
        flag = "" if p.is_active else "  (inactive)"
        click.echo(
            f"{p.id:<6} {p.name[:22]:<22} {p.product_type:<11} {p.category:<16} "
            f"{p.selling_price:>8} {p.stock:>6}{flag}"
        )


def show_low_stock(products: list[ProductLineDTO]) -> None:
    _banner("LOW STOCK ALERT")
    if not products:
        click.echo("All products are adequately stocked.")
        return
    for p in products:
        click.echo(
            f"{p.id:<6} {p.name:<22} stock {p.stock:>4} (min {p.min_stock}), "
            f"recommend ordering {p.restock}"
        )


def show_customers(customers: list[CustomerLineDTO]) -> None:
    if not customers:
        click.echo("No customers found.")
        return

    click.echo(
        f"{'ID':<6} {'Name':<20} {'Tier':<9} {'Spent':>10} {'Txns':>5} {'Points':>8}"
    )
    click.echo("-" * 62)
    for c in customers:
        flag = "  *upgrade eligible" if c.upgrade_eligible else ""
        click.echo(
            f"{c.id:<6} {c.name[:20]:<20} {c.tier:<9} {c.total_spent:>10} "
            f"{c.transactions:>5} {c.loyalty_points:>8}{flag}"
        )


def show_transactions(transactions: list[TransactionSummaryDTO]) -> None:
    if not transactions:
        click.echo("No transactions found.")
        return
    for t in transactions:
        customer = f"  {t.customer_name}" if t.customer_name else ""
        click.echo(
            f"#{t.id}  {t.created_at}  {t.final_total:>10}  "
            f"{t.payment_method:<14} {t.status}{customer}"
        )


def show_inventory_report(report: InventoryReportDTO) -> None:
    _banner("INVENTORY REPORT")
    click.echo(f"Total Products: {report.total_products}")
    click.echo(f"Active Products: {report.active_products}")
    click.echo(f"Total Inventory Value: {report.total_value}")
    click.echo(f"Total Inventory Cost: {report.total_cost}")
    click.echo(f"Potential Profit: {report.potential_profit}")
    click.echo(f"Low Stock Items: {report.low_stock_count}")
    click.echo(f"Out of Stock Items: {report.out_of_stock_count}")
    click.echo(f"Overstocked Items: {report.overstocked_count}")
    click.echo()
    click.echo("By Category:")
    for line in report.categories:
        click.echo(f"  {line.category:<16} {line.product_count:>3} products  {line.value:>10}")
    click.echo()
    show_products(report.products)


def show_sales_report(report: SalesReportDTO) -> None:
    _banner("SALES REPORT")
    if report.total_transactions == 0:
        click.echo("No transactions to report.")
        return
    click.echo(f"Total Transactions: {report.total_transactions}")
    click.echo(f"Completed Transactions: {report.completed}")
    click.echo(f"Refunded Transactions: {report.refunded}")
    click.echo(f"Total Sales: {report.total_sales}")
    click.echo(f"Total Tax Collected: {report.total_tax}")
    click.echo(f"Average Transaction: {report.average_sale}")


def show_customer_analytics(report: CustomerAnalyticsDTO) -> None:
    _banner("CUSTOMER ANALYTICS")
    click.echo(f"Total Customers: {report.total_customers}")
    click.echo(f"Total Customer Spending: {report.total_spending}")
    click.echo()
    click.echo(f"Top {len(report.top_customers)} Customers by Spending:")
    for rank, c in enumerate(report.top_customers, start=1):
        click.echo(f"{rank}. {c.name} - {c.total_spent} ({c.transactions} transactions)")
    click.echo()
    click.echo("Customer Type Distribution:")
    for tier, count in report.tier_distribution.items():
        click.echo(f"{tier}: {count}")


def show_financial_summary(report: FinancialSummaryDTO) -> None:
    _banner("FINANCIAL SUMMARY")
    click.echo("INVENTORY:")
    click.echo(f"Total Inventory Value: {report.inventory_value}")
    click.echo(f"Total Inventory Cost: {report.inventory_cost}")
    click.echo(f"Potential Profit: {report.potential_profit}")
    if report.profit_margin is not None:
        click.echo(f"Profit Margin: {report.profit_margin}")
    click.echo()
    click.echo("SALES:")
    click.echo(f"Total Sales Revenue: {report.sales_revenue}")
    click.echo(f"Total Customer Spending: {report.customer_spending}")
