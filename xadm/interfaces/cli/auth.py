"""CLI helpers for constructing logged-in HTTP clients."""

from __future__ import annotations

import click

from xadm.app.config import AdminConfig, resolve_password
from xadm.infrastructure.http import XoloHttpClient, server_url


def build_http_client(config: AdminConfig) -> XoloHttpClient:
    """Return a :class:`XoloHttpClient` for the configured server."""

    return XoloHttpClient(base_url=server_url(config.hostname))


def admin_password(config: AdminConfig) -> str:
    """Return the admin password from the config, prompting when it has none."""

    if config.pw:
        return resolve_password(config.pw)
    return click.prompt(f"Xolo password for {config.admin}", hide_input=True)


def login_http_client(config: AdminConfig) -> XoloHttpClient:
    """Build a client and log it in as the configured admin.

    The session lives as long as the returned client; each xadm process logs
    in once.
    """

    client = build_http_client(config)
    try:
        client.login(config.admin, admin_password(config))
    except Exception:
        client.close()
        raise
    return client
