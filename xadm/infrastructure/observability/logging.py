"""Logging helpers for xadm.

Every module obtains its logger through :func:`get_logger`. The CLI calls
:func:`configure_logging` once at startup; library use without that call still
gets a usable stderr logger.
"""

from __future__ import annotations

import logging
import sys
from contextlib import contextmanager
from contextvars import ContextVar
from pathlib import Path
from typing import Any, Iterator

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_log_context: ContextVar[dict[str, Any]] = ContextVar("xadm_log_context", default={})


class ContextualFormatter(logging.Formatter):
    """Formatter that appends the active ``log_context`` fields."""

    def format(self, record: logging.LogRecord) -> str:
        text = super().format(record)
        ctx = _log_context.get()
        if ctx:
            fields = " ".join(f"{k}={v}" for k, v in ctx.items())
            text = f"{text} [{fields}]"
        return text


@contextmanager
def log_context(**fields: Any) -> Iterator[None]:
    """Add ``fields`` to every log line emitted inside the block.

    Usage::

        with log_context(server="xolo.example.edu", admin="jdoe"):
            logger.info("Logging in")
    """
    token = _log_context.set({**_log_context.get(), **fields})
    try:
        yield
    finally:
        _log_context.reset(token)


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------

_configured = False


def configure_logging(
    level: int = logging.WARNING,
    third_party_level: int = logging.WARNING,
    log_file: str | Path | None = None,
) -> None:
    """Install the xadm handlers on the root logger.

    Only the first call has an effect.

    Args:
        level: Level for xadm loggers.
        third_party_level: Level for ``requests``/``urllib3`` loggers.
        log_file: Optional file that receives a copy of all records.
    """
    global _configured
    if _configured:
        return
    _configured = True

    root = logging.getLogger()
    root.setLevel(level)
    for handler in root.handlers[:]:
        root.removeHandler(handler)

    formatter = ContextualFormatter(LOG_FORMAT)
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file is not None:
        path = Path(log_file).expanduser()
        path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(path, encoding="utf-8"))
    for handler in handlers:
        handler.setFormatter(formatter)
        root.addHandler(handler)

    for name in ("urllib3", "requests", "charset_normalizer"):
        logging.getLogger(name).setLevel(third_party_level)


def get_logger(name: str) -> logging.Logger:
    """Return the logger called ``name``, with a fallback handler if needed."""
    logger = logging.getLogger(name)
    if not _configured and not logger.handlers and not logging.getLogger().handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(ContextualFormatter(LOG_FORMAT))
        logger.addHandler(handler)
        logger.setLevel(logging.WARNING)
    return logger
