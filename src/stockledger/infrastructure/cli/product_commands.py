"""CLI commands for the Product catalog."""

from __future__ import annotations

import click

from stockledger.application.add_product import AddProductHandler
from stockledger.domain.exceptions import DomainException
from stockledger.infrastructure.bootstrap import Components


@click.command("add")
@click.option("--id", "product_id", required=True, help="Product ID (SKU).")
@click.option("--name", required=True, help="Product name.")
@click.option("--availability", default=None, help="Label shown when not in stock.")
@click.pass_obj
def product_add(components: Components, product_id: str, name: str, availability: str | None) -> None:
    """Add a new product to the catalog."""
    handler = AddProductHandler(product_repo=components.product_repo)

    try:
        product = handler.handle(product_id, name, availability)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product '{product.id}' ({product.name}) added")


@click.command("list")
@click.pass_obj
def product_list(components: Components) -> None:
    """List all products in the catalog."""
    try:
        products = components.product_repo.list_all()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<12} {'Name':<24} {'Availability'}")
    click.echo("-" * 60)
    for p in products:
        click.echo(f"{p.id:<12} {p.name:<24} {p.availability or ''}")
