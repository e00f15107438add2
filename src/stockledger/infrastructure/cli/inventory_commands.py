"""CLI commands for inventory management."""

from __future__ import annotations

import csv

import click

from stockledger.application.adjust_stock import AdjustStockHandler
from stockledger.application.initialize_inventory import InitializeInventoryHandler
from stockledger.application.receive_stock import ReceiveStockHandler
from stockledger.application.show_inventory import ShowInventoryHandler
from stockledger.application.show_movements import ShowMovementsHandler
from stockledger.application.verify_ledger import VerifyLedgerHandler
from stockledger.application.write_off_stock import WriteOffStockHandler
from stockledger.domain.exceptions import DomainException
from stockledger.infrastructure.bootstrap import Components


@click.command("receive")
@click.option("--product", "product_id", required=True, help="Product ID.")
@click.option("--quantity", required=True, type=int, help="Units received.")
@click.option("--notes", default=None, help="Free-text notes.")
@click.option("--actor", default=None, help="User performing the action.")
@click.pass_obj
def inventory_receive(
    components: Components, product_id: str, quantity: int, notes: str | None, actor: str | None
) -> None:
    """Book received stock into the warehouse."""
    handler = ReceiveStockHandler(
        inventory_repo=components.inventory_repo,
        product_repo=components.product_repo,
        movements=components.movements,
        default_reorder_level=components.settings.default_reorder_level,
    )

    try:
        record = handler.handle(product_id, quantity, notes=notes, actor_id=actor)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Received {quantity} units of '{product_id}' (on hand: {record.qty_on_hand})")


@click.command("adjust")
@click.option("--product", "product_id", required=True, help="Product ID.")
@click.option("--delta", required=True, type=int, help="Signed change to on-hand stock.")
@click.option("--reason", required=True, help="Why the count changed.")
@click.option("--notes", default=None, help="Free-text notes.")
@click.option("--actor", default=None, help="User performing the action.")
@click.pass_obj
def inventory_adjust(
    components: Components,
    product_id: str,
    delta: int,
    reason: str,
    notes: str | None,
    actor: str | None,
) -> None:
    """Correct the on-hand count of a product."""
    handler = AdjustStockHandler(components.inventory_repo, components.movements)

    try:
        record = handler.handle(product_id, delta, reason, notes=notes, actor_id=actor)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    sign = "+" if delta > 0 else ""
    click.echo(f"Stock of '{product_id}' updated by {sign}{delta} (on hand: {record.qty_on_hand})")


@click.command("write-off")
@click.option("--product", "product_id", required=True, help="Product ID.")
@click.option("--quantity", required=True, type=int, help="Units to remove.")
@click.option("--reason", required=True, help="Why the units are written off.")
@click.option("--notes", default=None, help="Free-text notes.")
@click.option("--actor", default=None, help="User performing the action.")
@click.pass_obj
def inventory_write_off(
    components: Components,
    product_id: str,
    quantity: int,
    reason: str,
    notes: str | None,
    actor: str | None,
) -> None:
    """Write off damaged or lost stock."""
    handler = WriteOffStockHandler(components.inventory_repo, components.movements)

    try:
        handler.handle(product_id, quantity, reason, notes=notes, actor_id=actor)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Removed {quantity} units of '{product_id}'")


@click.command("init")
@click.pass_obj
def inventory_init(components: Components) -> None:
    """Create empty inventory records for products that have none."""
    handler = InitializeInventoryHandler(
        components.inventory_repo,
        components.product_repo,
        reorder_level=components.settings.default_reorder_level,
    )

    try:
        created = handler.handle()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not created:
        click.echo("All products already have inventory records.")
        return
    click.echo(f"Created {len(created)} inventory records.")


def _inventory_lines(components: Components, low_stock_only: bool):
    handler = ShowInventoryHandler(
        components.inventory_repo,
        components.product_repo,
        low_stock_threshold=components.settings.low_stock_threshold,
    )
    try:
        return handler.handle(low_stock_only=low_stock_only)
    except DomainException as exc:
        raise click.ClickException(str(exc))


@click.command("show")
@click.option("--low-stock", is_flag=True, default=False, help="Only products at or below reorder level.")
@click.pass_obj
def inventory_show(components: Components, low_stock: bool) -> None:
    """Show current inventory levels."""
    lines = _inventory_lines(components, low_stock)

    if not lines:
        click.echo("No inventory records found.")
        return

    click.echo(
        f"{'Product':<12} {'Name':<20} {'On hand':>8} {'Reserved':>10} {'Available':>10}  {'Status'}"
    )
    click.echo("-" * 78)
    for line in lines:
        flag = " (reorder)" if line.below_reorder else ""
        click.echo(
            f"{line.product_id:<12} {line.product_name:<20} {line.on_hand:>8} "
            f"{line.reserved:>10} {line.available:>10}  {line.status}{flag}"
        )


@click.command("export")
@click.option("--output", type=click.File("w"), default="-", help="CSV file to write (default stdout).")
@click.pass_obj
def inventory_export(components: Components, output) -> None:
    """Export inventory levels as CSV."""
    lines = _inventory_lines(components, low_stock_only=False)

    writer = csv.writer(output)
    writer.writerow(
        ["Product ID", "Name", "Qty On Hand", "Qty Reserved", "Available", "Reorder Level", "Status"]
    )
    for line in lines:
        writer.writerow(
            [
                line.product_id,
                line.product_name,
                line.on_hand,
                line.reserved,
                line.available,
                "" if line.reorder_level is None else line.reorder_level,
                line.status,
            ]
        )


@click.command("movements")
@click.option("--product", "product_id", default=None, help="Only this product.")
@click.option("--limit", default=50, show_default=True, type=int, help="Number of entries.")
@click.pass_obj
def inventory_movements(components: Components, product_id: str | None, limit: int) -> None:
    """Show the most recent stock movements."""
    handler = ShowMovementsHandler(components.movement_repo)

    try:
        movements = handler.handle(product_id=product_id, limit=limit)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not movements:
        click.echo("No movements recorded.")
        return

    click.echo(f"{'When':<21} {'Product':<12} {'Delta':>6}  {'Type':<12} {'Ref':<10} {'Reason'}")
    click.echo("-" * 80)
    for m in movements:
        click.echo(
            f"{m.timestamp:<21} {m.product_id:<12} {m.delta:>+6}  "
            f"{m.reference_type:<12} {m.reference_id:<10} {m.reason}"
        )


@click.command("verify")
@click.pass_obj
def inventory_verify(components: Components) -> None:
    """Check stock levels against the movement log."""
    components.movements.flush()
    handler = VerifyLedgerHandler(components.inventory_repo, components.movement_repo)

    try:
        problems = handler.handle()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not problems:
        click.echo("Ledger is consistent.")
        return

    for p in problems:
        click.echo(
            f"{p.product_id}: on hand {p.on_hand}, reserved {p.reserved}: {p.problem}"
        )
    raise click.ClickException(f"{len(problems)} product(s) out of balance")
