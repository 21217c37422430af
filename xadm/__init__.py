"""
xadm package initializer.

This package provides the command-line admin client for the Xolo patch
management server.

The package exposes a ``__version__`` attribute read from the installed
distribution metadata; pyproject.toml is the single source of truth.
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("xadm")
except PackageNotFoundError:
    # running from a source checkout without pip install -e .
    __version__ = "0.0.0.dev"

__all__: list[str] = ["__version__"]
