import logging
from dataclasses import replace
from pathlib import Path

import click

from stockledger.domain.exceptions import DomainException
from stockledger.infrastructure.bootstrap import Components, build
from stockledger.infrastructure.cli.inventory_commands import (
    inventory_adjust,
    inventory_export,
    inventory_init,
    inventory_movements,
    inventory_receive,
    inventory_show,
    inventory_verify,
    inventory_write_off,
)
from stockledger.infrastructure.cli.order_commands import order_add, order_show
from stockledger.infrastructure.cli.product_commands import product_add, product_list
from stockledger.infrastructure.cli.stock_commands import (
    stock_check,
    stock_fulfill,
    stock_label,
    stock_release,
    stock_reserve,
)
from stockledger.infrastructure.config import load_settings


def _flush_movements(components: Components) -> None:
    components.movements.flush()
    if components.movements.pending:
        click.echo(
            f"Warning: {components.movements.pending} movement(s) could not be "
            f"written to the movement log.",
            err=True,
        )


@click.group()
@click.option(
    "--data-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory holding the JSON data files (overrides STOCKLEDGER_DATA_DIR).",
)
@click.option("-v", "--verbose", is_flag=True, default=False, help="Enable debug logging.")
@click.pass_context
def cli(ctx: click.Context, data_dir: Path | None, verbose: bool) -> None:
    """Stock Ledger: inventory reservation and fulfillment bookkeeping."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        settings = load_settings()
        if data_dir is not None:
            settings = replace(settings, data_dir=data_dir)
        components = build(settings)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    ctx.obj = components
    ctx.call_on_close(lambda: _flush_movements(components))


@cli.group()
def stock() -> None:
    """Check, reserve, release and fulfill stock for orders."""


@cli.group()
def inventory() -> None:
    """Manage inventory."""


@cli.group()
def product() -> None:
    """Manage products."""


@cli.group()
def order() -> None:
    """Manage orders."""


# Register subcommands
stock.add_command(stock_check)
stock.add_command(stock_fulfill)
stock.add_command(stock_label)
stock.add_command(stock_release)
stock.add_command(stock_reserve)
inventory.add_command(inventory_adjust)
inventory.add_command(inventory_export)
inventory.add_command(inventory_init)
inventory.add_command(inventory_movements)
inventory.add_command(inventory_receive)
inventory.add_command(inventory_show)
inventory.add_command(inventory_verify)
inventory.add_command(inventory_write_off)
product.add_command(product_add)
product.add_command(product_list)
order.add_command(order_add)
order.add_command(order_show)
