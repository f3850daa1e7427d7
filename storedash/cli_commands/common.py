"""Shared plumbing for CLI commands: session setup, error reporting, formatting."""

import asyncio
import sys
import traceback
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Coroutine, Optional

import click
import httpx
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape

from storedash.api.client import get_api_client, reset_api_client
from storedash.api.resources import ResourceClients
from storedash.auth.guard import RouteGuard
from storedash.auth.identity import provider_from_config
from storedash.core.config import get_settings
from storedash.core.exceptions import ConfigurationError, NotSignedInError, StoreDashError
from storedash.services.store_service import StoreService

console = Console()


@asynccontextmanager
async def open_store() -> AsyncIterator[StoreService]:
    """Sign in through the route guard and yield a store service on the shared client."""
    settings = get_settings()
    provider = provider_from_config(settings.auth)
    client = get_api_client()
    try:
        guard = RouteGuard(provider, client, settings.auth.strategy)
        await guard.require()
        yield StoreService.from_settings(ResourceClients(client), settings)
    finally:
        await reset_api_client()


def run_async(coro: Coroutine[Any, Any, Any]) -> Any:
    """Run a command coroutine, turning known failures into a message and exit code 1."""
    ctx = click.get_current_context(silent=True)
    debug = bool(ctx and ctx.obj and ctx.obj.get("debug"))
    try:
        return asyncio.run(coro)
    except (StoreDashError, httpx.HTTPError, ValidationError) as e:
        _print_error(e)
        if debug:
            console.print(traceback.format_exc(), markup=False)
        sys.exit(1)


def _print_error(e: Exception) -> None:
    if isinstance(e, NotSignedInError):
        console.print("[red]Access Denied:[/red] This page is not available. Sign in to continue.")
    elif isinstance(e, ConfigurationError):
        console.print(f"[red]Configuration Error:[/red] {e.message}")
        for item in e.details.get("missing", []):
            console.print(f"  • Missing: {item}")
    elif isinstance(e, StoreDashError):
        console.print(f"[red]Error:[/red] {escape(e.message)}")
    elif isinstance(e, ValidationError):
        console.print(f"[red]Unexpected Backend Data:[/red] {escape(str(e))}")
    elif isinstance(e, httpx.HTTPStatusError):
        console.print(
            f"[red]Backend Error:[/red] {e.response.status_code} "
            f"{e.request.method} {escape(str(e.request.url))}"
        )
    else:
        console.print(f"[red]Connection Error:[/red] {escape(str(e))}")
        console.print("Please check your backend connection.")


def report_screen_error(screen: str, result) -> None:
    """Print why a screen could not load; exit unless placeholder data is shown."""
    if result.ok:
        return
    if result.placeholder:
        console.print(
            f"[yellow]Could not load {screen} ({escape(str(result.error))}); showing sample data.[/yellow]"
        )
        return
    console.print(f"[red]Failed to load {screen}:[/red] {escape(str(result.error))}")
    sys.exit(1)


def money(amount: Optional[float]) -> str:
    return f"${amount or 0:,.2f}"


def title_case(value: Optional[str]) -> str:
    return value[:1].upper() + value[1:] if value else ""


def plain(value: Any) -> str:
    """Backend text for a rich cell, with markup brackets escaped."""
    return escape(str(value)) if value is not None else ""
