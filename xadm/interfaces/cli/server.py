"""Commands that check connectivity and credentials against the Xolo server."""

from __future__ import annotations

import click

from xadm.interfaces.cli.context import (
    cli_errors,
    console,
    get_cli_context,
    http_client,
    logged_in_client,
)


@click.command()
@click.pass_context
def ping(ctx: click.Context) -> None:
    """Check that the configured Xolo server is answering."""

    cli_context = get_cli_context(ctx)
    with cli_errors(), http_client(cli_context) as client:
        if not client.ping():
            raise click.ClickException(f"No pong from {client.base_url}")
        console.print(f"[green]{client.base_url} is responding.[/green]")


@click.command()
@click.pass_context
def login(ctx: click.Context) -> None:
    """Log in to the Xolo server and report when the session expires."""

    cli_context = get_cli_context(ctx)
    with cli_errors(), logged_in_client(cli_context) as client:
        state = client.credential.state
        if state is None:
            console.print("[yellow]Logged in, but the server sent no session cookie.[/yellow]")
            return
        expires = state.expires_at.strftime("%Y-%m-%d %H:%M:%S %Z")
        console.print(f"[green]Logged in to {client.base_url}[/green]; session expires {expires}")
