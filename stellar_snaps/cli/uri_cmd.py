"""URI and discovery-rule commands."""

import json
import sys
from pathlib import Path

import rich_click as click
from rich.table import Table

from ..discovery import match_url_to_rule, parse_discovery_file
from ..errors import StellarSnapError
from ..link_utils import extract_path
from ..models import DiscoveryRule
from ..uri import create_payment_snap, create_transaction_snap, parse_snap_uri
from ._console import console

NETWORK_CHOICES = click.Choice(["public", "testnet"])


@click.command()
@click.argument("destination")
@click.option("--amount", "-a", help="Amount to request (omit for an open amount)")
@click.option("--asset-code", help="Asset code (default: XLM)")
@click.option("--asset-issuer", help="Issuer address for non-XLM assets")
@click.option("--memo", help="Memo to attach")
@click.option("--memo-type", type=click.Choice(["MEMO_TEXT", "MEMO_ID", "MEMO_HASH", "MEMO_RETURN"]))
@click.option("--message", "-m", help="Message shown to the payer (max 300 chars)")
@click.option("--network", "-n", type=NETWORK_CHOICES, default="public", show_default=True)
@click.option("--callback", help="URL to receive the signed transaction")
def pay(
    destination: str,
    amount: str | None,
    asset_code: str | None,
    asset_issuer: str | None,
    memo: str | None,
    memo_type: str | None,
    message: str | None,
    network: str,
    callback: str | None,
):
    """Build a web+stellar:pay URI."""
    try:
        result = create_payment_snap(
            destination=destination,
            amount=amount,
            asset_code=asset_code,
            asset_issuer=asset_issuer,
            memo=memo,
            memo_type=memo_type,
            message=message,
            network=network,
            callback=callback,
        )
    except StellarSnapError as e:
        raise click.ClickException(e.message) from e
    click.echo(result.uri)


@click.command()
@click.argument("xdr")
@click.option("--network", "-n", type=NETWORK_CHOICES, default="public", show_default=True)
@click.option("--message", "-m", help="Message shown to the signer (max 300 chars)")
@click.option("--callback", help="URL to receive the signed transaction")
@click.option("--pubkey", help="Account expected to sign")
def tx(xdr: str, network: str, message: str | None, callback: str | None, pubkey: str | None):
    """Build a web+stellar:tx URI for a transaction envelope."""
    try:
        result = create_transaction_snap(xdr=xdr, network=network, message=message, callback=callback, pubkey=pubkey)
    except StellarSnapError as e:
        raise click.ClickException(e.message) from e
    click.echo(result.uri)


@click.command()
@click.argument("uri")
@click.option("--json", "as_json", is_flag=True, help="Print JSON instead of a table")
def parse(uri: str, as_json: bool):
    """Decode a web+stellar: URI."""
    try:
        parsed = parse_snap_uri(uri)
    except StellarSnapError as e:
        raise click.ClickException(e.message) from e

    fields = parsed.model_dump(exclude_none=True)
    fields["network"] = parsed.network or "unknown"

    if as_json:
        click.echo(json.dumps(fields, indent=2))
        return

    table = Table(show_header=False)
    table.add_column("Field", style="cyan")
    table.add_column("Value")
    for key, value in fields.items():
        table.add_row(key, str(value))
    console.print(table)


def _parse_rule(value: str) -> DiscoveryRule:
    pattern, sep, api_path = value.partition("=")
    if not sep or not pattern or not api_path:
        raise click.BadParameter(f"Expected PATTERN=API_PATH, got {value!r}", param_hint="--rule")
    return DiscoveryRule(path_pattern=pattern, api_path=api_path)


@click.command()
@click.argument("url")
@click.option("--rule", "-r", "rule_values", multiple=True, help="Rule as PATTERN=API_PATH, e.g. '/s/*=/api/snap/$1'")
@click.option(
    "--discovery",
    "-d",
    "discovery_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Discovery file to take rules from",
)
def match(url: str, rule_values: tuple[str, ...], discovery_path: Path | None):
    """Match a URL (or path) against discovery rules and print the API path."""
    rules = [_parse_rule(value) for value in rule_values]
    if discovery_path is not None:
        try:
            with open(discovery_path) as f:
                rules.extend(parse_discovery_file(json.load(f)).rules)
        except (ValueError, StellarSnapError) as e:
            raise click.ClickException(f"Invalid discovery file {discovery_path}: {e}") from e
    if not rules:
        raise click.UsageError("Give at least one --rule or a --discovery file")

    path = extract_path(url) if "://" in url else url
    api_path = match_url_to_rule(path, rules)
    if api_path is None:
        console.print(f"[yellow]No rule matches {path}[/yellow]")
        sys.exit(1)
    click.echo(api_path)
