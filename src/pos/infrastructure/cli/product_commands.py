"""CLI commands for the Product catalog."""

from __future__ import annotations

import click

from pos.application.add_product import AddProductHandler
from pos.application.dto import NewProductSpec
from pos.application.reports import product_line
from pos.domain.exceptions import DomainException
from pos.domain.service.inventory_service import InventoryService
from pos.infrastructure.bootstrap import Store
from pos.infrastructure.cli.display import show_products


@click.command("list")
@click.option("--active-only", is_flag=True, default=False, help="Hide inactive products.")
@click.pass_obj
def product_list(store: Store, active_only: bool) -> None:
    """List all products in the catalog."""
    products = store.products.list_all()
    if active_only:
        products = [p for p in products if p.is_active]
    show_products([product_line(p) for p in products])


@click.command("search")
@click.argument("term")
@click.pass_obj
def product_search(store: Store, term: str) -> None:
    """Search products by name fragment or tag."""
    matches = InventoryService(store.products).search(term)
    show_products([product_line(p) for p in matches])


@click.command("add")
@click.option(
    "--kind",
    type=click.Choice(["standard", "perishable", "bulk"]),
    default="standard",
    show_default=True,
)
@click.option("--name", required=True, help="Product name.")
@click.option("--cost", "cost_price", required=True, help="Cost price (e.g. 1.20).")
@click.option("--stock", required=True, type=int, help="Units on hand.")
@click.option("--category", default="Other", show_default=True)
@click.option("--supplier", default="")
@click.option("--markup", default="0.30", show_default=True, help="Standard markup over cost.")
@click.option("--price", "base_price", default="0", help="Shelf price of a perishable.")
@click.option("--expires", type=click.DateTime(formats=["%Y-%m-%d"]), default=None)
@click.option("--shelf-life", "shelf_life_days", type=int, default=0)
@click.option("--unit", default="", help="Bulk unit (kg, lbs, liters...).")
@click.option("--unit-price", "price_per_unit", default="0", help="Bulk price per unit.")
@click.option("--min-qty", "minimum_quantity", default="0.1", show_default=True)
@click.pass_obj
def product_add(store: Store, expires, **fields) -> None:
    """Add a new product to the catalog."""
    spec = NewProductSpec(
        expiration_date=expires.date() if expires else None,
        **fields,
    )
    handler = AddProductHandler(product_repo=store.products)

    try:
        product = handler.handle(spec)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(
        f"Product {product.id} '{product.name}' added at {product.selling_price()}"
    )
