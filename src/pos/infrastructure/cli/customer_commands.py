"""CLI commands for the Customer directory."""

from __future__ import annotations

import click

from pos.application.reports import customer_line
from pos.domain.model.customer import CustomerTier
from pos.infrastructure.bootstrap import Store
from pos.infrastructure.cli.display import show_customers

TIER_CHOICES = [tier.value for tier in CustomerTier]


@click.command("list")
@click.option("--tier", type=click.Choice(TIER_CHOICES, case_sensitive=False), default=None)
@click.pass_obj
def customer_list(store: Store, tier: str | None) -> None:
    """List registered customers."""
    if tier:
        selected = next(t for t in CustomerTier if t.value.lower() == tier.lower())
        customers = store.customers.list_by_tier(selected)
    else:
        customers = store.customers.list_all()
    show_customers([customer_line(c) for c in customers])
