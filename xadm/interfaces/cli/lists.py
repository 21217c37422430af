"""Commands listing names known to the Xolo server."""

from __future__ import annotations

from typing import Callable

import click

from xadm.interfaces.cli.context import (
    cli_errors,
    get_cli_context,
    print_names,
    server_list_service,
)
from xadm.services.server_lists import ServerListService

json_output_option = click.option(
    "--json-output", is_flag=True, help="Output the names as a JSON array."
)


def _list_names(
    ctx: click.Context,
    fetch: Callable[[ServerListService], list[str]],
    *,
    json_output: bool,
    what: str,
) -> None:
    cli_context = get_cli_context(ctx)
    with cli_errors(), server_list_service(cli_context) as service:
        names = fetch(service)
    print_names(names, json_output=json_output, what=what)


@click.group()
def jamf() -> None:
    """List objects in Jamf Pro, via the Xolo server."""


@jamf.command()
@json_output_option
@click.pass_context
def packages(ctx: click.Context, json_output: bool) -> None:
    """Show the names of all packages."""

    _list_names(
        ctx,
        ServerListService.jamf_package_names,
        json_output=json_output,
        what="packages",
    )


@jamf.command()
@json_output_option
@click.pass_context
def groups(ctx: click.Context, json_output: bool) -> None:
    """Show the names of all computer groups."""

    _list_names(
        ctx,
        ServerListService.jamf_computer_group_names,
        json_output=json_output,
        what="computer groups",
    )


@jamf.command()
@json_output_option
@click.pass_context
def categories(ctx: click.Context, json_output: bool) -> None:
    """Show the names of all categories."""

    _list_names(
        ctx,
        ServerListService.jamf_category_names,
        json_output=json_output,
        what="categories",
    )


@click.command()
@json_output_option
@click.pass_context
def titles(ctx: click.Context, json_output: bool) -> None:
    """Show the titles defined in the Title Editor."""

    _list_names(
        ctx,
        ServerListService.title_editor_titles,
        json_output=json_output,
        what="titles",
    )
