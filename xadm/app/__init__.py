"""Application layer: configuration for the xadm client."""

from . import config

__all__ = ["config"]
