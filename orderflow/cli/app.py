"""
orderflow CLI Application - Built with Click.

Commands:
    demo      Run a scripted order session against in-memory capabilities
    config    Show the effective service configuration
"""

import click
from rich.console import Console
from rich.table import Table

from orderflow.capabilities.memory import InMemoryInventory, InMemoryNotifier, InMemoryPayment
from orderflow.core.config import OrderServiceConfig
from orderflow.core.exceptions import OrderError
from orderflow.core.service import OrderService
from orderflow.core.types import OrderIdStrategy
from orderflow.monitoring.logging import setup_order_logging

console = Console()


# ============================================================================
# Option parsing
# ============================================================================


def _split_pair(value: str, sep: str, option: str) -> tuple[str, int]:
    name, found, qty = value.rpartition(sep)
    if not found or not name:
        msg = f"expected NAME{sep}QTY, got {value!r}"
        raise click.BadParameter(msg, param_hint=option)
    try:
        return name, int(qty)
    except ValueError:
        msg = f"quantity must be an integer, got {qty!r}"
        raise click.BadParameter(msg, param_hint=option) from None


def _parse_stock(values: tuple[str, ...]) -> dict[str, int]:
    return dict(_split_pair(v, "=", "--stock") for v in values)


def _parse_updates(values: tuple[str, ...]) -> list[tuple[int, int]]:
    updates = []
    for value in values:
        order_id, qty = _split_pair(value, ":", "--update")
        try:
            updates.append((int(order_id), qty))
        except ValueError:
            msg = f"order id must be an integer, got {order_id!r}"
            raise click.BadParameter(msg, param_hint="--update") from None
    return updates


# ============================================================================
# CLI Group
# ============================================================================


@click.group()
@click.version_option(version="0.1.0", prog_name="orderflow")
def cli():
    """
    orderflow - order placement with compensating stock handling.
    """


@cli.command()
@click.option("--stock", multiple=True, metavar="NAME=QTY", help="Initial stock level")
@click.option("--order", "orders", multiple=True, metavar="NAME:QTY", help="Order to place")
@click.option("--decline", multiple=True, metavar="NAME", help="Decline payment for product")
@click.option("--update", "updates", multiple=True, metavar="ID:QTY", help="Change order quantity")
@click.option("--remove", "removals", multiple=True, type=int, metavar="ID", help="Remove order")
@click.option(
    "--id-strategy",
    type=click.Choice([s.value for s in OrderIdStrategy]),
    default=None,
    help="Order id assignment (overrides --config)",
)
@click.option("--config", "config_file", type=click.Path(exists=True), help="YAML config file")
@click.option("--log-level", default="WARNING", show_default=True, help="Log level")
@click.option("--json-logs", is_flag=True, help="Emit structured JSON logs")
def demo(stock, orders, decline, updates, removals, id_strategy, config_file, log_level, json_logs):
    """
    Run a scripted order session against in-memory capabilities.

    \b
    Example:
        orderflow demo --stock Phone=5 --stock Book=2 \\
            --order Phone:3 --order Book:4 --order Book:1 \\
            --decline Book --remove 1
    """
    setup_order_logging(log_level=log_level, json_format=json_logs)

    config = OrderServiceConfig.from_file(config_file) if config_file else OrderServiceConfig()
    if id_strategy:
        config = config.with_id_strategy(id_strategy)

    inventory = InMemoryInventory(_parse_stock(stock))
    payment = InMemoryPayment(declined_products=set(decline))
    notifier = InMemoryNotifier()
    service = OrderService(inventory, payment, notifier, config=config)

    attempts = Table(title="Requests")
    attempts.add_column("Request")
    attempts.add_column("Result")

    for value in orders:
        product, qty = _split_pair(value, ":", "--order")
        try:
            order = service.create_order(product, qty)
            attempts.add_row(f"create {qty} x {product}", f"[green]order #{order.id}[/green]")
        except OrderError as exc:
            attempts.add_row(f"create {qty} x {product}", f"[red]{type(exc).__name__}[/red]: {exc}")

    for order_id, qty in _parse_updates(updates):
        ok = service.update_order(order_id, qty)
        attempts.add_row(f"update #{order_id} -> {qty}", _flag(ok))

    for order_id in removals:
        attempts.add_row(f"remove #{order_id}", _flag(service.remove_order(order_id)))

    console.print(attempts)
    console.print(_ledger_table(service))
    console.print(_stock_table(inventory))
    console.print(f"Confirmations sent: {len(notifier.sent)}")


@cli.command("config")
@click.option("--file", "config_file", type=click.Path(exists=True), help="YAML config file")
def show_config(config_file):
    """Show the effective service configuration."""
    if config_file:
        config = OrderServiceConfig.from_file(config_file)
    else:
        config = OrderServiceConfig.from_env()

    table = Table(title="orderflow configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value")
    table.add_row("id_strategy", config.id_strategy.value)
    table.add_row("share_order_references", str(config.share_order_references))
    table.add_row("listeners", ", ".join(type(lst).__name__ for lst in config.listeners) or "-")
    console.print(table)


# ============================================================================
# Rendering
# ============================================================================


def _flag(ok: bool) -> str:
    return "[green]ok[/green]" if ok else "[yellow]no change[/yellow]"


def _ledger_table(service: OrderService) -> Table:
    table = Table(title="Ledger")
    table.add_column("ID", justify="right")
    table.add_column("Product")
    table.add_column("Qty", justify="right")
    table.add_column("Paid")
    for order in service.get_orders():
        table.add_row(str(order.id), order.product, str(order.quantity), str(order.is_paid))
    return table


def _stock_table(inventory: InMemoryInventory) -> Table:
    table = Table(title="Stock")
    table.add_column("Product")
    table.add_column("Available", justify="right")
    for product, qty in sorted(inventory.snapshot().items()):
        table.add_row(product, str(qty))
    return table
