"""Infrastructure layer for xadm.

Holds the adapters for HTTP access to the Xolo server and for logging.
"""

from . import http, observability

__all__ = ["http", "observability"]
