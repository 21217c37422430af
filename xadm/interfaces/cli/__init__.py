"""CLI interface for xadm.

This package is the home for all Click commands. Run it with
``python -m xadm.interfaces.cli`` or the installed ``xadm`` script.
"""

from .__main__ import cli
from .lists import jamf, titles
from .server import login, ping

__all__ = [
    "cli",
    "jamf",
    "login",
    "ping",
    "titles",
]
