"""Entry point for running the xadm CLI.

This module defines the top-level Click group that aggregates all subcommands
defined in the ``xadm.interfaces.cli`` package. Executing
``python -m xadm.interfaces.cli`` invokes this group.
"""

import logging

import click

from xadm.infrastructure.observability import configure_logging

from .context import build_cli_context
from .lists import jamf, titles
from .server import login, ping


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Path to the xadm config file (default: $XADM_CONFIG or ~/.config/xadm/config.yaml).",
)
@click.option("-v", "--verbose", is_flag=True, help="Log progress to stderr.")
@click.option(
    "--log-file",
    type=click.Path(dir_okay=False),
    default=None,
    help="Also write log records to this file.",
)
@click.pass_context
def cli(
    ctx: click.Context, config_path: str | None, verbose: bool, log_file: str | None
) -> None:
    """Command-line admin client for the Xolo server."""
    configure_logging(
        level=logging.DEBUG if verbose else logging.WARNING, log_file=log_file
    )
    ctx.obj = build_cli_context(config_path, verbose=verbose)


cli.add_command(ping)
cli.add_command(login)
cli.add_command(jamf)
cli.add_command(titles)


if __name__ == "__main__":
    cli()
