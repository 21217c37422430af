"""HTTP client for the Xolo server.

This module centralises HTTP access to the Xolo server. It maintains a
:class:`requests.Session` whose own cookie jar is switched off: the server's
single ``rack.session`` cookie is handled by a :class:`SessionCredential`
instead, which is applied to every outgoing request and fed from every
response. Once that cookie expires, requests fail with
:class:`ExpiredSessionError` until :meth:`XoloHttpClient.login` is called again.
"""

from __future__ import annotations

from http.cookiejar import DefaultCookiePolicy
from typing import Any
from urllib.parse import urljoin

import requests
from requests import Response, Session

from xadm.infrastructure.observability.logging import get_logger, log_context

from .errors import (
    AuthenticationError,
    ExpiredSessionError,
    ServerConnectionError,
    ServerError,
)
from .session import SESSION_COOKIE_NAME, SET_COOKIE_HEADER, SessionCredential

logger = get_logger(__name__)

# seconds
OPEN_TIMEOUT = 10
TIMEOUT = 300

PING_ROUTE = "/ping"
PING_RESPONSE = "pong"
LOGIN_ROUTE = "/auth/login"


def server_url(hostname: str) -> str:
    """Return the base URL of the Xolo server on ``hostname``."""
    return f"https://{hostname}"


class XoloHttpClient:
    """Session-aware HTTP helper for the Xolo server."""

    def __init__(
        self,
        *,
        base_url: str,
        credential: SessionCredential | None = None,
        session: Session | None = None,
        open_timeout: float = OPEN_TIMEOUT,
        timeout: float = TIMEOUT,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.credential = credential or SessionCredential()
        self.timeout = (open_timeout, timeout)
        self.session = session or requests.Session()
        # reject every cookie so the session token only travels via the credential
        self.session.cookies.set_policy(DefaultCookiePolicy(allowed_domains=[]))
        self.session.hooks["response"].append(self._capture_session_cookie)

    def __enter__(self) -> "XoloHttpClient":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def close(self) -> None:
        self.session.close()

    # -------------------- session cookie --------------------
    def _capture_session_cookie(self, response: Response, *args: Any, **kwargs: Any) -> None:
        # requests joins repeated Set-Cookie lines; urllib3 still has them apart
        raw_headers = getattr(response.raw, "headers", None)
        if hasattr(raw_headers, "getlist"):
            for value in raw_headers.getlist(SET_COOKIE_HEADER):
                if f"{SESSION_COOKIE_NAME}=" in value:
                    self.credential.capture({SET_COOKIE_HEADER: value})
                    return
        self.credential.capture(response.headers)

    @property
    def is_authenticated(self) -> bool:
        return self.credential.is_authenticated

    # -------------------- auth workflow --------------------
    def login(self, admin: str, password: str) -> None:
        """
        Log in to the Xolo server and keep the session cookie it returns.
        Raises:
            AuthenticationError: If the server rejects the credentials.
            ServerError: If the server answers with any other failure.
        """
        with log_context(server=self.base_url, admin=admin):
            logger.info("Logging in to Xolo server")
            # never replay a stale cookie on the request meant to replace it
            response = self._request(
                "POST",
                LOGIN_ROUTE,
                json={"admin": admin, "password": password},
                with_session=False,
            )
            if response.ok:
                if self.credential.state is None:
                    logger.warning("Login succeeded but no session cookie was returned")
                elif not self.credential.is_authenticated:
                    logger.warning("Login succeeded but the returned session has already expired")
                return

            if response.status_code == 401:
                message = self._error_message(response) or "Incorrect username or password"
                logger.error(f"Login rejected: {message}")
                raise AuthenticationError(message)

            logger.error(f"Login failed with status {response.status_code}")
            raise ServerError(f"{response.status_code}: {response.text[:200]}")

    def ping(self) -> bool:
        """Return ``True`` if the server answers the ping route."""
        response = self._request("GET", PING_ROUTE, with_session=False)
        return response.ok and response.text.strip() == PING_RESPONSE

    # -------------------- request helpers --------------------
    def _prepare_headers(self, extra: dict[str, str] | None) -> dict[str, str]:
        from xadm import __version__

        headers = {
            "User-Agent": f"xadm/{__version__}",
            "Accept": "application/json",
        }
        if extra:
            headers.update(extra)
        return headers

    def _request(
        self,
        method: str,
        route: str,
        *,
        json: Any = None,
        headers: dict[str, str] | None = None,
        with_session: bool = True,
    ) -> Response:
        url = urljoin(self.base_url + "/", route.lstrip("/"))
        request_headers = self._prepare_headers(headers)
        if with_session:
            self.credential.apply(request_headers)
        try:
            return self.session.request(
                method, url, headers=request_headers, json=json, timeout=self.timeout
            )
        except requests.RequestException as exc:
            logger.error(f"{method} {url} failed: {exc}")
            raise ServerConnectionError(f"Cannot reach Xolo server at {url}: {exc}") from exc

    def _raise_for_status(self, response: Response) -> None:
        """
        Raise custom exceptions for HTTP error status codes.
        """
        if response.status_code == 401:
            logger.error("Unauthenticated request; please log in again.")
            raise AuthenticationError(
                self._error_message(response)
                or "Unauthenticated request; please log in again."
            )
        if response.status_code == 403:
            logger.error("Permission denied for the requested operation.")
            raise AuthenticationError(
                self._error_message(response)
                or "Permission denied for the requested operation."
            )
        if response.status_code >= 400:
            logger.error(f"HTTP request failed with status {response.status_code}")
            raise ServerError(
                f"{response.status_code}: {self._error_message(response) or response.text[:200]}"
            )

    @staticmethod
    def _error_message(response: Response) -> str | None:
        try:
            body = response.json()
        except ValueError:
            return None
        if isinstance(body, dict) and body.get("error"):
            return str(body["error"])
        return None

    @staticmethod
    def _parse_json(response: Response) -> Any:
        try:
            return response.json()
        except ValueError as exc:
            raise ServerError(f"Failed to parse JSON response: {exc}") from exc

    # -------------------- convenience --------------------
    def get_json(self, route: str) -> Any:
        """GET ``route`` with the session cookie and return parsed JSON."""
        response = self._request("GET", route)
        self._raise_for_status(response)
        return self._parse_json(response)

    def post_json(self, route: str, payload: dict[str, Any]) -> Any:
        """POST ``payload`` to ``route`` with the session cookie, returning parsed JSON."""
        response = self._request("POST", route, json=payload)
        self._raise_for_status(response)
        return self._parse_json(response)


__all__ = [
    "AuthenticationError",
    "ExpiredSessionError",
    "ServerConnectionError",
    "ServerError",
    "XoloHttpClient",
    "server_url",
]
