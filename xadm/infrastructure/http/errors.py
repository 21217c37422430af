"""Exceptions raised while talking to the Xolo server."""


class ServerConnectionError(Exception):
    """Base class for failures interacting with the Xolo server."""


class AuthenticationError(ServerConnectionError):
    """Raised when login fails or responses indicate the user is unauthenticated."""


class ServerError(ServerConnectionError):
    """Raised when the server answers with an unsuccessful status."""


class ExpiredSessionError(ServerConnectionError):
    """Raised when a request is attempted with an expired session cookie.

    The caller owns re-authentication; nothing retries on its behalf.
    """


__all__ = [
    "AuthenticationError",
    "ExpiredSessionError",
    "ServerConnectionError",
    "ServerError",
]
