"""
"Doctor" command: consolidated health, config, and diagnostics.

Runs a series of checks and prints a concise, friendly report:
 - Config summary and required keys
 - Identity provider sign-in state
 - Backend reachability and the signed-in user
"""

from __future__ import annotations

import asyncio
import sys

import click
import httpx
from pydantic import ValidationError

from storedash.api.client import ApiClient
from storedash.api.resources import ResourceClients
from storedash.auth.guard import RouteGuard
from storedash.auth.identity import provider_from_config
from storedash.core.config import configuration_summary, get_settings, validate_required_settings
from storedash.core.exceptions import StoreDashError
from storedash.core.models import GuardState
from storedash.services.store_service import StoreService


async def _check_backend() -> list:
    """Return (ok, message) lines for identity and backend checks."""
    settings = get_settings()
    lines = []

    try:
        provider = provider_from_config(settings.auth)
    except StoreDashError as e:
        return [(False, f"Identity provider: {e.message}")]

    async with ApiClient(settings.api, settings.auth.failure_policy) as client:
        guard = RouteGuard(provider, client, settings.auth.strategy)
        state = await guard.check()
        if state != GuardState.ALLOWED:
            return [(False, f"Identity provider: {state.value}")]
        lines.append((True, f"Identity provider: signed in ({type(provider).__name__})"))

        store = StoreService(ResourceClients(client))
        try:
            user = await store.current_user()
        except httpx.HTTPStatusError as e:
            lines.append((False, f"Backend responded {e.response.status_code} for GET /user"))
        except (httpx.HTTPError, StoreDashError, ValidationError) as e:
            lines.append((False, f"Backend unreachable at {settings.api.base_url}: {e}"))
        else:
            who = user.email or user.name or user.id or "unknown user"
            lines.append((True, f"Backend reachable at {settings.api.base_url} as {who}"))

    return lines


@click.command()
def doctor():
    """Run storedash diagnostics and print a summary report."""
    click.echo("storedash Doctor")
    click.echo("=" * 40)

    for label, value in configuration_summary():
        click.echo(f"{label}: {value}")

    missing = validate_required_settings()
    click.echo("\nRequired Settings:")
    if missing:
        for item in missing:
            click.echo(f"  ✗ Missing: {item}")
    else:
        click.echo("  ✓ All present")

    click.echo("\nConnectivity:")
    results = asyncio.run(_check_backend())
    for ok, message in results:
        click.echo(f"  {'✓' if ok else '✗'} {message}")

    click.echo("\nDone.")
    healthy = not missing and all(ok for ok, _ in results)
    sys.exit(0 if healthy else 1)
