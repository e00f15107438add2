"""CLI commands for order-driven stock operations."""

from __future__ import annotations

import click

from stockledger.application.check_availability import (
    AvailabilityLabelHandler,
    CheckAvailabilityHandler,
)
from stockledger.application.dto import StockItemSpec
from stockledger.application.fulfill_order import FulfillOrderHandler
from stockledger.application.release_reservation import ReleaseReservationHandler
from stockledger.application.reserve_stock import ReserveStockHandler
from stockledger.domain.exceptions import DomainException
from stockledger.domain.model.results import ItemOutcome
from stockledger.infrastructure.bootstrap import Components


def _parse_items(raw: str) -> list[StockItemSpec]:
    """Parse 'P-100:3,P-200:5' into StockItemSpec list."""
    specs: list[StockItemSpec] = []
    for pair in raw.split(","):
        pair = pair.strip()
        if ":" not in pair:
            raise click.BadParameter(
                f"Invalid item format '{pair}'. Expected 'ProductId:Quantity'."
            )
        product_id, qty_str = pair.rsplit(":", 1)
        try:
            qty = int(qty_str)
        except ValueError:
            raise click.BadParameter(
                f"Invalid quantity '{qty_str}' for product '{product_id}'."
            )
        specs.append(StockItemSpec(product_id=product_id.strip(), quantity=qty))
    return specs


def _display_outcomes(outcomes: list[ItemOutcome]) -> None:
    click.echo(f"  {'Product':<20} {'Requested':>10} {'Done':>6}  {'Status'}")
    click.echo(f"  {'-'*56}")
    for o in outcomes:
        status = o.status.value
        if o.error is not None:
            status = f"{status} ({o.error})"
        click.echo(f"  {o.product_id:<20} {o.requested:>10} {o.quantity:>6}  {status}")


@click.command("check")
@click.option("--items", required=True, help="Items as 'ProductId:Qty,ProductId:Qty'.")
@click.option(
    "--untracked-unlimited",
    is_flag=True,
    default=False,
    help="Treat products without an inventory record as unlimited stock.",
)
@click.pass_obj
def stock_check(components: Components, items: str, untracked_unlimited: bool) -> None:
    """Check availability of one or more products."""
    specs = _parse_items(items)
    handler = CheckAvailabilityHandler(components.ledger)

    try:
        results = handler.handle(specs, untracked_is_unlimited=untracked_unlimited)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"{'Product':<20} {'Requested':>10} {'Available':>10}  {'Label'}")
    click.echo("-" * 66)
    for r in results:
        click.echo(
            f"{r.product_id:<20} {r.requested_qty:>10} {r.available_qty:>10}  {r.availability_label}"
        )


@click.command("label")
@click.option("--product", "product_id", required=True, help="Product ID.")
@click.pass_obj
def stock_label(components: Components, product_id: str) -> None:
    """Show the availability label for a product."""
    handler = AvailabilityLabelHandler(components.ledger)

    try:
        label = handler.handle(product_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(label)


@click.command("reserve")
@click.option("--order", "order_id", required=True, help="Order ID.")
@click.option("--items", required=True, help="Items as 'ProductId:Qty,ProductId:Qty'.")
@click.option("--actor", default=None, help="User performing the action.")
@click.pass_obj
def stock_reserve(components: Components, order_id: str, items: str, actor: str | None) -> None:
    """Reserve stock for an order (partial reservations allowed)."""
    specs = _parse_items(items)
    handler = ReserveStockHandler(components.ledger, components.order_repo)

    try:
        result = handler.handle(order_id, specs, actor_id=actor)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order #{order_id} reservation:")
    _display_outcomes(result.outcomes)
    if result.needs_stock_confirmation:
        click.echo("Order flagged for stock confirmation.")
    if not result.success:
        raise click.ClickException("Some items could not be processed.")


@click.command("release")
@click.option("--order", "order_id", required=True, help="Order ID.")
@click.option(
    "--items",
    default=None,
    help="Items as 'ProductId:Qty,ProductId:Qty'. Defaults to everything the order holds.",
)
@click.option("--actor", default=None, help="User performing the action.")
@click.pass_obj
def stock_release(
    components: Components, order_id: str, items: str | None, actor: str | None
) -> None:
    """Release an order's reserved stock (e.g. on cancellation)."""
    specs = _parse_items(items) if items else None
    handler = ReleaseReservationHandler(components.ledger, components.reservation_repo)

    try:
        result = handler.handle(order_id, specs, actor_id=actor)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order #{order_id} release:")
    _display_outcomes(result.outcomes)
    if not result.success:
        raise click.ClickException("Some items could not be processed.")


@click.command("fulfill")
@click.option("--order", "order_id", required=True, help="Order ID.")
@click.option("--items", required=True, help="Items as 'ProductId:Qty,ProductId:Qty'.")
@click.option("--actor", default=None, help="User performing the action.")
@click.pass_obj
def stock_fulfill(components: Components, order_id: str, items: str, actor: str | None) -> None:
    """Fulfill an order (ships items, deducts on-hand stock)."""
    specs = _parse_items(items)
    handler = FulfillOrderHandler(components.ledger)

    try:
        result = handler.handle(order_id, specs, actor_id=actor)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order #{order_id} fulfillment:")
    _display_outcomes(result.outcomes)
    if not result.success:
        raise click.ClickException("Some items could not be processed.")
