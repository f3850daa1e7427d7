"""
Screen commands: customers, inventory, orders and payments.

Each command loads through the route guard and the store service, then
renders with rich once the event loop has finished.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import click
from rich.table import Table

from storedash.cli_commands.common import (
    console,
    money,
    open_store,
    plain,
    report_screen_error,
    run_async,
    title_case,
)
from storedash.core.models import OrderStatus
from storedash.services import views

STATUS_STYLES = {
    "completed": "green",
    "processing": "cyan",
    "pending": "yellow",
    "shipped": "blue",
    "cancelled": "red",
    "refunded": "magenta",
    "failed": "red",
}


def _status(value: str) -> str:
    style = STATUS_STYLES.get(value, "white")
    return f"[{style}]{plain(title_case(value))}[/{style}]"


# Customers


@click.group()
def customers():
    """Manage customers."""


@customers.command("list")
@click.option("--search", default="", help="Match name or email")
@click.option("--all", "show_all", is_flag=True, help="Include inactive customers")
def list_customers(search: str, show_all: bool):
    """List active customers."""

    async def load():
        async with open_store() as store:
            return await store.customers(search=search, active_only=not show_all)

    result = run_async(load())
    report_screen_error("customers", result)

    table = Table(title="Customers" if show_all else "Active Customers")
    table.add_column("ID", style="cyan")
    table.add_column("Name")
    table.add_column("Email")
    table.add_column("Phone", style="dim")
    table.add_column("Orders", justify="right")
    table.add_column("Spent", justify="right")
    table.add_column("Since", style="dim")
    for c in result.items:
        table.add_row(
            plain(c.id),
            plain(c.name),
            plain(c.email),
            plain(c.phone),
            str(c.total_orders or 0),
            money(c.total_spent),
            plain(c.created_at),
        )
    console.print(table)


@customers.command("delete")
@click.argument("customer_id")
@click.confirmation_option(prompt="Delete this customer?")
def delete_customer(customer_id: str):
    """Delete a customer."""

    async def mutate():
        async with open_store() as store:
            await store.delete_customer(customer_id)

    run_async(mutate())
    console.print(f"[green]✅ Customer {plain(customer_id)} deleted successfully[/green]")


# Inventory


@click.group()
def inventory():
    """Manage inventory."""


@inventory.command("list")
@click.option("--search", default="", help="Match product name")
def list_products(search: str):
    """List products."""

    async def load():
        async with open_store() as store:
            return await store.products(search=search)

    result = run_async(load())
    report_screen_error("inventory", result)

    table = Table(title="Inventory")
    table.add_column("ID", style="cyan")
    table.add_column("Name")
    table.add_column("Category")
    table.add_column("Price", justify="right")
    table.add_column("Stock", justify="right")
    for p in result.items:
        stock_style = "red" if p.stock <= 0 else "yellow" if p.stock < 10 else "white"
        table.add_row(
            plain(p.id),
            plain(p.name),
            plain(p.category or "Uncategorized"),
            money(p.price),
            f"[{stock_style}]{p.stock}[/{stock_style}]",
        )
    console.print(table)


@inventory.command("add")
@click.option("--name", required=True, help="Product name")
@click.option("--price", type=float, required=True, help="Unit price")
@click.option("--stock", type=int, required=True, help="Units in stock")
@click.option("--description", help="Product description")
@click.option("--category", help="Product category")
@click.option(
    "--image",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Product image to upload",
)
def add_product(
    name: str,
    price: float,
    stock: int,
    description: Optional[str],
    category: Optional[str],
    image: Optional[Path],
):
    """Add a product."""
    fields = {
        "name": name,
        "description": description,
        "price": price,
        "stock": stock,
        "category": category,
    }
    files = None
    if image is not None:
        files = {"image": (image.name, image.read_bytes())}

    async def mutate():
        async with open_store() as store:
            await store.add_product(fields, files)

    run_async(mutate())
    console.print(f"[green]✅ Product '{plain(name)}' added successfully[/green]")


@inventory.command("update")
@click.argument("product_id")
@click.option("--name", help="Product name")
@click.option("--description", help="Product description")
@click.option("--price", type=float, help="Unit price")
@click.option("--stock", type=int, help="Units in stock")
@click.option("--category", help="Product category")
def update_product(product_id: str, **changes):
    """Update a product. Only the given fields are sent."""
    data = {key: value for key, value in changes.items() if value is not None}
    if not data:
        raise click.UsageError("Nothing to update: pass at least one field option")

    async def mutate():
        async with open_store() as store:
            await store.update_product(product_id, data)

    run_async(mutate())
    console.print(f"[green]✅ Product {plain(product_id)} updated successfully[/green]")


# Orders


@click.group()
def orders():
    """Manage orders."""


@orders.command("list")
@click.option("--search", default="", help="Match order id or customer name")
@click.option("--include-cancelled", is_flag=True, help="Show cancelled orders too")
def list_orders(search: str, include_cancelled: bool):
    """List orders, hiding cancelled ones."""

    async def load():
        async with open_store() as store:
            return await store.orders(search=search, include_cancelled=include_cancelled)

    result = run_async(load())
    report_screen_error("orders", result)

    table = Table(title="Orders")
    table.add_column("ID", style="cyan")
    table.add_column("Customer")
    table.add_column("Status")
    table.add_column("Items", justify="right")
    table.add_column("Total", justify="right")
    table.add_column("Date", style="dim")
    table.add_column("Cancellable", justify="center")
    for o in result.items:
        customer = plain(o.customer_name)
        if o.customer_email:
            customer += f"\n[dim]{plain(o.customer_email)}[/dim]"
        table.add_row(
            plain(o.id),
            customer,
            _status(o.status),
            str(sum(item.quantity for item in o.items)),
            money(o.total),
            plain(o.created_at),
            "✓" if views.can_cancel(o) else "",
        )
    console.print(table)


@orders.command("cancel")
@click.argument("order_id")
@click.confirmation_option(prompt="Cancel this order?")
def cancel_order(order_id: str):
    """Cancel an order that has not shipped or completed."""

    async def mutate():
        async with open_store() as store:
            await store.cancel_order(order_id)

    run_async(mutate())
    console.print(f"[green]✅ Order {plain(order_id)} cancelled successfully[/green]")


@orders.command("set-status")
@click.argument("order_id")
@click.argument("status", type=click.Choice([s.value for s in OrderStatus]))
def set_order_status(order_id: str, status: str):
    """Change an order's status."""

    async def mutate():
        async with open_store() as store:
            await store.set_order_status(order_id, status)

    run_async(mutate())
    console.print(f"[green]✅ Order {plain(order_id)} is now {status}[/green]")


# Payments


@click.group()
def payments():
    """Review payments."""


@payments.command("list")
@click.option("--search", default="", help="Match payment id, customer or order id")
def list_payments(search: str):
    """List payments with revenue totals."""

    async def load():
        async with open_store() as store:
            return await store.payments(search=search)

    result = run_async(load())
    report_screen_error("payments", result)

    table = Table(title="Payments")
    table.add_column("ID", style="cyan")
    table.add_column("Order", style="dim")
    table.add_column("Customer")
    table.add_column("Method")
    table.add_column("Status")
    table.add_column("Amount", justify="right")
    table.add_column("Date", style="dim")
    for p in result.items:
        table.add_row(
            plain(p.id),
            plain(p.order_id),
            plain(p.customer_name),
            plain(p.method),
            _status(p.status),
            money(p.amount),
            plain(p.created_at),
        )
    console.print(table)

    totals = views.payment_totals(result.items)
    console.print(
        f"Revenue: [green]{money(totals.revenue)}[/green]  "
        f"Pending: [yellow]{money(totals.pending)}[/yellow]  "
        f"Refunded: [magenta]{money(totals.refunded)}[/magenta]"
    )
