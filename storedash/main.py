"""
Main application entry point for storedash.

Provides CLI interface for the store administration screens.
"""

import sys
from typing import Optional

import click
from rich.table import Table

from storedash.cli_commands.common import console, money, open_store, plain, run_async
from storedash.cli_commands.doctor import doctor
from storedash.cli_commands.screens import customers, inventory, orders, payments
from storedash.core.config import configuration_summary, validate_required_settings
from storedash.core.logging import set_correlation_id, setup_logging


@click.group()
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.option("--json-logs", is_flag=True, help="Emit JSON logs instead of rich console output")
@click.option("--correlation-id", help="Set correlation ID for request tracing")
@click.pass_context
def main(ctx, debug: bool, json_logs: bool, correlation_id: Optional[str]):
    """Administration client for the store backend.

    Lists and updates customers, inventory, orders and payments through the
    backend REST API.
    """
    ctx.ensure_object(dict)

    setup_logging(debug=debug, rich_output=not json_logs)

    if correlation_id:
        set_correlation_id(correlation_id)

    ctx.obj["debug"] = debug
    ctx.obj["correlation_id"] = correlation_id


# Add subcommand groups
main.add_command(customers)
main.add_command(inventory)
main.add_command(orders)
main.add_command(payments)
main.add_command(doctor)


@main.command()
def dashboard():
    """Show order and revenue totals."""

    async def load():
        async with open_store() as store:
            return await store.dashboard()

    result = run_async(load())

    if not result.ok:
        console.print(
            "[red]Failed to load some data. Please check your backend connection.[/red]"
        )
        for screen, error in result.errors.items():
            console.print(f"  • {screen}: {plain(error)}")

    summary = result.summary
    table = Table(title="Dashboard")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right")
    table.add_row("Total Orders", f"{summary.total_orders:,}")
    table.add_row("Cancelled Orders", f"[red]{summary.cancelled_orders:,}[/red]")
    table.add_row("Total Revenue", f"[green]{money(summary.total_payments)}[/green]")
    console.print(table)


@main.command()
def whoami():
    """Show the signed-in user as reported by the backend."""

    async def load():
        async with open_store() as store:
            return await store.current_user()

    user = run_async(load())

    table = Table(title="Current User")
    table.add_column("Field", style="cyan")
    table.add_column("Value")
    for key, value in user.model_dump().items():
        if value is not None:
            table.add_row(key, plain(value))
    console.print(table)


@main.command()
def config():
    """Display current configuration."""
    console.print("[blue]storedash Configuration[/blue]")

    missing = validate_required_settings()
    if missing:
        console.print("[red]⚠️  Configuration Issues:[/red]")
        for item in missing:
            console.print(f"  • Missing: {item}")
    else:
        console.print("[green]✅ Configuration Valid[/green]")
    console.print()

    table = Table()
    table.add_column("Setting", style="cyan")
    table.add_column("Value")
    for label, value in configuration_summary():
        table.add_row(label, plain(value))
    console.print(table)

    sys.exit(0 if not missing else 1)


if __name__ == "__main__":
    main()
