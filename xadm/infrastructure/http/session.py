"""Session cookie handling for the Xolo server.

The server hands out exactly one cookie, ``rack.session``, with a fixed
expiry. :class:`SessionCredential` stores that cookie when it shows up in a
``Set-Cookie`` response header and replays it as a ``Cookie`` request header
until it expires. An expired cookie is never sent: :meth:`SessionCredential.apply`
raises :class:`ExpiredSessionError` so the caller can log in again.

One credential belongs to one HTTP client. Access is guarded by a lock, so a
client may be shared between threads.
"""

from __future__ import annotations

import re
import threading
from dataclasses import dataclass
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from typing import Callable, Mapping, MutableMapping

from xadm.infrastructure.observability.logging import get_logger

from .errors import ExpiredSessionError

logger = get_logger(__name__)

COOKIE_HEADER = "Cookie"
SET_COOKIE_HEADER = "Set-Cookie"
SESSION_COOKIE_NAME = "rack.session"
SESSION_COOKIE_EXPIRES_NAME = "expires"

_SEGMENT_SEP_RE = re.compile(r"\s*;\s*")

Clock = Callable[[], datetime]


def _local_now() -> datetime:
    return datetime.now().astimezone()


@dataclass(frozen=True)
class SessionState:
    """The session token together with the instant it stops being valid."""

    token: str
    expires_at: datetime

    def is_expired(self, now: datetime) -> bool:
        return now > self.expires_at

    @property
    def cookie(self) -> str:
        return f"{SESSION_COOKIE_NAME}={self.token}"


# -------------------- parsing helpers --------------------
def _header_value(headers: Mapping[str, str], name: str) -> str | None:
    wanted = name.lower()
    for key, value in headers.items():
        if key.lower() == wanted:
            return value
    return None


def _parse_expires(value: str) -> datetime | None:
    try:
        parsed = parsedate_to_datetime(value)
    except (TypeError, ValueError):
        return None
    if parsed.tzinfo is None:
        # RFC 2822 "-0000" dates come back naive; they are UTC
        parsed = parsed.replace(tzinfo=timezone.utc)
    try:
        return parsed.astimezone()
    except (OverflowError, ValueError):
        # e.g. 31 Dec 9999 shifted east of UTC leaves the datetime range
        return None


def parse_session_cookie(raw_cookie: str) -> SessionState | None:
    """Extract the session token and expiry from a ``Set-Cookie`` value.

    Segments other than ``rack.session`` and ``expires`` are ignored, as are
    segments without an ``=`` and ``expires`` values that are not valid HTTP
    dates. Returns ``None`` unless both fields were found.
    """
    token: str | None = None
    expires_at: datetime | None = None

    for segment in _SEGMENT_SEP_RE.split(raw_cookie.strip()):
        name, sep, value = segment.partition("=")
        if not sep:
            continue
        name = name.strip()
        if name == SESSION_COOKIE_NAME:
            token = value
        elif name.lower() == SESSION_COOKIE_EXPIRES_NAME:
            parsed = _parse_expires(value)
            if parsed is None:
                logger.debug(f"Ignoring unparseable cookie expiry: {value!r}")
                continue
            expires_at = parsed

    if token is None or expires_at is None:
        return None
    return SessionState(token=token, expires_at=expires_at)


class SessionCredential:
    """Lock-protected holder of the single Xolo server session cookie."""

    def __init__(self, *, clock: Clock | None = None) -> None:
        self._clock = clock or _local_now
        self._lock = threading.Lock()
        self._state: SessionState | None = None

    @property
    def state(self) -> SessionState | None:
        """Consistent snapshot of the stored token and expiry, if any."""
        with self._lock:
            return self._state

    @property
    def is_authenticated(self) -> bool:
        state = self.state
        return state is not None and not state.is_expired(self._clock())

    def capture(self, headers: Mapping[str, str]) -> None:
        """Store the session cookie sent in ``headers``, if there is one.

        A missing ``Set-Cookie`` header, or one that lacks either the token or
        a usable expiry, leaves the current credential in place. ``headers``
        must carry a single cookie: repeated ``Set-Cookie`` lines joined with
        ``", "`` garble the ``expires`` segment, so :class:`XoloHttpClient`
        picks the session cookie out of the raw headers first.
        """
        raw_cookie = _header_value(headers, SET_COOKIE_HEADER)
        if not raw_cookie:
            return

        state = parse_session_cookie(raw_cookie)
        if state is None:
            logger.warning(
                "Ignoring Set-Cookie header without both a session token and expiry"
            )
            return

        with self._lock:
            self._state = state
        logger.debug(f"Captured server session, expires {state.expires_at.isoformat()}")

    def apply(self, headers: MutableMapping[str, str]) -> None:
        """Add the session cookie to outgoing ``headers``.

        Does nothing before the first capture.

        Raises:
            ExpiredSessionError: If the stored session has expired. ``headers``
                is left untouched.
        """
        state = self.state
        if state is None:
            return
        if state.is_expired(self._clock()):
            logger.info("Server session expired; re-authentication required")
            raise ExpiredSessionError("Server Session Expired")
        headers[COOKIE_HEADER] = state.cookie


__all__ = [
    "COOKIE_HEADER",
    "SESSION_COOKIE_NAME",
    "SET_COOKIE_HEADER",
    "SessionCredential",
    "SessionState",
    "parse_session_cookie",
]
