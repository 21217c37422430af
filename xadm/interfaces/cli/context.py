"""Shared helpers for composing CLI command contexts.

This module centralises common CLI wiring: loading the admin config, opening
logged-in HTTP clients and turning server errors into CLI failures.
"""

from __future__ import annotations

import json
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator

import click
from rich.console import Console

from xadm.app.config import AdminConfig, ConfigError, default_config_path, load_config
from xadm.infrastructure.http import (
    AuthenticationError,
    ExpiredSessionError,
    ServerConnectionError,
    XoloHttpClient,
)
from xadm.infrastructure.observability import get_logger
from xadm.services.server_lists import ServerListService

from .auth import build_http_client, login_http_client

EXPIRED_SESSION_MESSAGE = "Server session expired, please re-authenticate."

console = Console()
logger = get_logger(__name__)


@dataclass(frozen=True)
class CLIContext:
    """Container for options given to the top-level ``xadm`` group."""

    config_path: Path
    verbose: bool = False

    def config(self) -> AdminConfig:
        return load_config(self.config_path)


def build_cli_context(config_path: str | Path | None = None, verbose: bool = False) -> CLIContext:
    """Build the CLI context with the config path resolved."""

    resolved = (
        Path(config_path).expanduser() if config_path is not None else default_config_path()
    )
    return CLIContext(config_path=resolved, verbose=verbose)


def get_cli_context(ctx: click.Context) -> CLIContext:
    obj = ctx.find_object(CLIContext)
    return obj if obj is not None else build_cli_context()


@contextmanager
def cli_errors() -> Iterator[None]:
    """Report config and server failures as click errors (exit status 1)."""

    try:
        yield
    except ExpiredSessionError as exc:
        logger.debug(f"Request refused: {exc}")
        raise click.ClickException(EXPIRED_SESSION_MESSAGE) from exc
    except AuthenticationError as exc:
        raise click.ClickException(f"Authentication failed: {exc}") from exc
    except ServerConnectionError as exc:
        raise click.ClickException(f"Server error: {exc}") from exc
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from exc


@contextmanager
def http_client(cli_context: CLIContext) -> Iterator[XoloHttpClient]:
    """Yield a client for the configured server without logging in."""

    with build_http_client(cli_context.config()) as client:
        yield client


@contextmanager
def logged_in_client(cli_context: CLIContext) -> Iterator[XoloHttpClient]:
    """Yield a client that has logged in as the configured admin."""

    with login_http_client(cli_context.config()) as client:
        yield client


@contextmanager
def server_list_service(cli_context: CLIContext) -> Iterator[ServerListService]:
    """Yield a ServerListService wired to a logged-in client."""

    with logged_in_client(cli_context) as client:
        yield ServerListService(client)


def print_names(names: list[str], *, json_output: bool, what: str) -> None:
    """Print ``names`` one per line, or as a JSON array."""

    if json_output:
        console.print(json.dumps(names, indent=2), markup=False, highlight=False, soft_wrap=True)
        return
    if not names:
        console.print(f"[yellow]No {what} found.[/yellow]")
        return
    console.print(f"{len(names)} {what}:")
    for name in names:
        console.print(f"  {name}", markup=False, highlight=False)
