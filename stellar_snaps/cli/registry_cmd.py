"""Registry commands.

``show``/``refresh`` work on the client-side view fetched from the
configured registry URL. ``add``/``remove`` edit the registry document the
local service serves.
"""

import asyncio
from datetime import datetime, timezone

import rich_click as click
from rich.table import Table

from ..config import get_registry_cache_path, get_registry_path, load_settings
from ..models import RegistryEntry, SnapsConfig
from ..registry import (
    DEFAULT_REGISTRY_ENTRIES,
    add_domain,
    get_domain_status,
    load_registry_file,
    remove_domain,
    save_registry_file,
)
from ._console import console, status_style
from ._helpers import _async_client, _registry_client


def _print_entries(entries: list[RegistryEntry]) -> None:
    if not entries:
        console.print("No domains registered.")
        return

    table = Table(show_header=True)
    table.add_column("Domain", style="cyan")
    table.add_column("Status")
    table.add_column("Name")
    table.add_column("Description")

    for entry in sorted(entries, key=lambda e: e.domain):
        style = status_style(entry.status)
        table.add_row(
            entry.domain,
            f"[{style}]{entry.status}[/{style}]",
            entry.name or "-",
            entry.description or "",
        )
    console.print(table)


async def _load_entries(settings: SnapsConfig, force: bool) -> list[RegistryEntry]:
    async with _async_client(settings) as client:
        registry = _registry_client(client, settings)
        if force:
            await registry.refresh()
        else:
            await registry.ensure_loaded()
        return registry.entries


@click.group()
def registry():
    """Inspect and edit the domain trust registry."""
    pass


@registry.command("show")
@click.option("--local", is_flag=True, help="Show the registry served by the local service instead")
def registry_show(local: bool):
    """List registered domains and their trust status."""
    if local:
        _print_entries(load_registry_file(get_registry_path(), DEFAULT_REGISTRY_ENTRIES).domains)
        return
    _print_entries(asyncio.run(_load_entries(load_settings(), force=False)))


@registry.command("refresh")
def registry_refresh():
    """Refetch the registry, ignoring the cache age."""
    entries = asyncio.run(_load_entries(load_settings(), force=True))
    console.print(f"Registry cache at {get_registry_cache_path()} holds {len(entries)} domains")


@registry.command("add")
@click.argument("domain")
@click.option(
    "--status",
    "-s",
    type=click.Choice(["trusted", "unverified", "blocked"]),
    default="unverified",
    show_default=True,
)
@click.option("--name", help="Display name")
@click.option("--description", help="Short description")
def registry_add(domain: str, status: str, name: str | None, description: str | None):
    """Add or update a domain in the local service's registry."""
    path = get_registry_path()
    document = load_registry_file(path, DEFAULT_REGISTRY_ENTRIES)
    now = datetime.now(timezone.utc).isoformat()

    existing = get_domain_status(document, domain)
    entry = RegistryEntry(
        domain=domain.lower(),
        status=status,
        name=name or (existing.name if existing else None),
        description=description or (existing.description if existing else None),
        registered_at=existing.registered_at if existing and existing.registered_at else now,
        verified_at=now if status == "trusted" else None,
    )
    save_registry_file(path, add_domain(document, entry))
    console.print(f"Set {entry.domain} to {status}")


@registry.command("remove")
@click.argument("domain")
def registry_remove(domain: str):
    """Remove a domain from the local service's registry."""
    path = get_registry_path()
    document = load_registry_file(path, DEFAULT_REGISTRY_ENTRIES)
    if get_domain_status(document, domain) is None:
        raise click.ClickException(f"Domain not registered: {domain}")
    save_registry_file(path, remove_domain(document, domain))
    console.print(f"Removed {domain}")
