"""Scan command."""

import asyncio
from pathlib import Path

import httpx
import rich_click as click
from rich.table import Table

from ..config import load_settings
from ..models import SnapsConfig
from ..pipeline import DiscoveryPipeline, RenderedCard, SoupDocument
from ..resolver import UrlResolver
from ._console import console, status_style
from ._helpers import _async_client, _is_url, _registry_client


async def _scan(source: str, page_url: str | None, settings: SnapsConfig) -> tuple[SoupDocument, list[RenderedCard]]:
    async with _async_client(settings) as client:
        if _is_url(source):
            response = await client.get(source, follow_redirects=True)
            response.raise_for_status()
            document = SoupDocument(response.text, url=page_url or str(response.url))
        else:
            document = SoupDocument(Path(source).read_text(), url=page_url)

        pipeline = DiscoveryPipeline(
            document,
            client,
            _registry_client(client, settings),
            resolver=UrlResolver(client, proxy_url=settings.service.proxy_url),
            settings=settings.pipeline,
        )
        cards = await pipeline.run_once()
    return document, cards


@click.command()
@click.argument("source")
@click.option("--url", "page_url", help="Page URL for a local file (used for relative links and X detection)")
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Write the page with rendered cards to this file",
)
def scan(source: str, page_url: str | None, output: Path | None):
    """Find snap links in a page (file or URL) and render their cards."""
    settings = load_settings()

    if not _is_url(source) and not Path(source).is_file():
        raise click.BadParameter(f"Not a URL or readable file: {source}", param_hint="SOURCE")

    try:
        document, cards = asyncio.run(_scan(source, page_url, settings))
    except httpx.HTTPError as e:
        raise click.ClickException(f"Failed to load {source}: {e}") from e

    if not cards:
        console.print("No snaps found.")
    else:
        table = Table(show_header=True)
        table.add_column("Snap", style="cyan")
        table.add_column("Title")
        table.add_column("Amount", justify="right")
        table.add_column("Network")
        table.add_column("Domain")
        table.add_column("Status")

        for card in cards:
            metadata = card.metadata
            amount = f"{metadata.amount} {metadata.asset_code or 'XLM'}" if metadata.amount else "open"
            style = status_style(card.entry.status)
            table.add_row(
                metadata.id,
                metadata.title,
                amount,
                metadata.network or "testnet",
                card.entry.domain,
                f"[{style}]{card.entry.status}[/{style}]",
            )
        console.print(table)

    if output is not None:
        output.write_text(document.render())
        console.print(f"Wrote {output}")
