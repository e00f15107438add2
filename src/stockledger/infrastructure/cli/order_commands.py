"""CLI commands for orders."""

from __future__ import annotations

import click

from stockledger.application.register_order import RegisterOrderHandler
from stockledger.application.show_order import ShowOrderHandler
from stockledger.domain.exceptions import DomainException
from stockledger.infrastructure.bootstrap import Components


@click.command("add")
@click.option("--id", "order_id", required=True, help="Order ID.")
@click.option("--customer", required=True, help="Customer name.")
@click.pass_obj
def order_add(components: Components, order_id: str, customer: str) -> None:
    """Register an order placed at checkout."""
    handler = RegisterOrderHandler(components.order_repo)

    try:
        order = handler.handle(order_id, customer)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order #{order.id} registered for {order.customer_name}")


@click.command("show")
@click.option("--id", "order_id", required=True, help="Order ID to display.")
@click.pass_obj
def order_show(components: Components, order_id: str) -> None:
    """Show an order and the stock it holds."""
    handler = ShowOrderHandler(components.order_repo, components.reservation_repo)

    try:
        dto = handler.handle(order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order #{dto.id}")
    click.echo(f"Customer: {dto.customer_name}")
    click.echo(f"Created:  {dto.created_at}")
    if dto.needs_stock_confirmation:
        click.echo("Needs stock confirmation")
    click.echo()

    if not dto.reservations:
        click.echo("  No reserved stock.")
        return
    click.echo(f"  {'Product':<20} {'Reserved':>10}")
    click.echo(f"  {'-'*31}")
    for product_id, qty in dto.reservations.items():
        click.echo(f"  {product_id:<20} {qty:>10}")
