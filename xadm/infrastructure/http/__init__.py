"""HTTP adapters for xadm.

This package provides the session-aware HTTP client used to talk to the Xolo
server.
"""

from .client import XoloHttpClient, server_url
from .errors import (
    AuthenticationError,
    ExpiredSessionError,
    ServerConnectionError,
    ServerError,
)
from .session import SessionCredential, SessionState, parse_session_cookie

__all__ = [
    "AuthenticationError",
    "ExpiredSessionError",
    "ServerConnectionError",
    "ServerError",
    "SessionCredential",
    "SessionState",
    "XoloHttpClient",
    "parse_session_cookie",
    "server_url",
]
