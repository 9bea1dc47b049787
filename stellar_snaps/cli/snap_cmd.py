"""Snap management commands, against a snap service's REST API."""

import httpx
import rich_click as click
from rich.table import Table

from ..client import SnapClient
from ..config import load_settings
from ..errors import StellarSnapError
from ..models import SnapCreate
from ._console import console


def _client(base_url: str | None) -> SnapClient:
    return SnapClient(base_url or load_settings().service.base_url)


@click.group()
@click.option("--base-url", help="Snap service URL (default: service.base_url)")
@click.pass_context
def snap(ctx: click.Context, base_url: str | None):
    """Create, inspect and delete snaps."""
    ctx.obj = base_url


@snap.command("create")
@click.option("--creator", required=True, help="Creator's Stellar address")
@click.option("--title", "-t", required=True, help="Title shown on the card")
@click.option("--destination", required=True, help="Receiving Stellar address")
@click.option("--description", help="Longer description")
@click.option("--amount", "-a", help="Fixed amount (omit for an open amount)")
@click.option("--asset-code", default="XLM", show_default=True)
@click.option("--asset-issuer", help="Issuer address for non-XLM assets")
@click.option("--memo", help="Memo to attach")
@click.option("--memo-type", default="MEMO_TEXT", show_default=True)
@click.option("--network", "-n", type=click.Choice(["public", "testnet"]), default="testnet", show_default=True)
@click.option("--image-url", help="Preview image URL")
@click.pass_obj
def snap_create(base_url: str | None, **fields):
    """Create a snap and print its share URL."""
    data = SnapCreate(**fields)
    try:
        with _client(base_url) as client:
            result = client.create_snap(data)
    except (StellarSnapError, httpx.HTTPError) as e:
        raise click.ClickException(str(e)) from e
    console.print(f"Created snap [cyan]{result.id}[/cyan]")
    console.print(result.url)


@snap.command("get")
@click.argument("snap_id")
@click.pass_obj
def snap_get(base_url: str | None, snap_id: str):
    """Show one snap's metadata."""
    try:
        with _client(base_url) as client:
            found = client.get_snap(snap_id)
    except (StellarSnapError, httpx.HTTPError) as e:
        raise click.ClickException(str(e)) from e

    table = Table(show_header=False)
    table.add_column("Field", style="cyan")
    table.add_column("Value")
    for key, value in found.model_dump(exclude_none=True).items():
        table.add_row(key, str(value))
    console.print(table)


@snap.command("list")
@click.argument("creator")
@click.pass_obj
def snap_list(base_url: str | None, creator: str):
    """List a creator's snaps, newest first."""
    try:
        with _client(base_url) as client:
            snaps = client.list_snaps(creator)
    except (StellarSnapError, httpx.HTTPError) as e:
        raise click.ClickException(str(e)) from e

    if not snaps:
        console.print("No snaps found.")
        return

    table = Table(show_header=True)
    table.add_column("ID", style="cyan")
    table.add_column("Title")
    table.add_column("Amount", justify="right")
    table.add_column("Network")
    table.add_column("Created")
    for item in snaps:
        amount = f"{item.amount} {item.asset_code}" if item.amount else "open"
        table.add_row(item.id, item.title, amount, item.network, item.created_at or "")
    console.print(table)


@snap.command("delete")
@click.argument("snap_id")
@click.option("--creator", required=True, help="Creator's Stellar address")
@click.pass_obj
def snap_delete(base_url: str | None, snap_id: str, creator: str):
    """Delete a snap (creator only)."""
    try:
        with _client(base_url) as client:
            client.delete_snap(snap_id, creator)
    except (StellarSnapError, httpx.HTTPError) as e:
        raise click.ClickException(str(e)) from e
    console.print(f"Deleted snap {snap_id}")
