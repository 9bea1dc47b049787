"""CLI entry point for stellar-snaps."""

import logging

import rich_click as click

from .. import __version__

# Import command modules under private names so that
# `import stellar_snaps.cli.<module>` still resolves to the module.
from . import config_cmd as _config_mod
from . import registry_cmd as _registry_mod
from . import scan as _scan_mod
from . import snap_cmd as _snap_mod
from . import uri_cmd as _uri_mod
from . import web as _web_mod


@click.group()
@click.version_option(version=__version__)
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging")
def cli(verbose: bool):
    """Shareable Stellar payment links: build, parse, discover and serve snaps."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


# Register commands
cli.add_command(_uri_mod.pay)
cli.add_command(_uri_mod.tx)
cli.add_command(_uri_mod.parse)
cli.add_command(_uri_mod.match)
cli.add_command(_scan_mod.scan)
cli.add_command(_registry_mod.registry)
cli.add_command(_snap_mod.snap)
cli.add_command(_config_mod.config)
cli.add_command(_web_mod.web)


if __name__ == "__main__":
    cli()
