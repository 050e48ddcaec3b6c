# follower_scout/logger.py
"""Logging for FollowerScout.

Everything goes to the ``FollowerScout`` logger on stderr, since stdout carries
the JSON printed by ``follower-scout lookup``. Messages about one profile go
through :func:`lookup_logger`, which tags them with the normalized username::

    [boy.throb] Fetching https://www.tiktok.com/@boy.throb
"""
from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Final, MutableMapping, Optional, Tuple, Union

DEFAULT_FORMAT: Final[str] = "%(asctime)s | %(levelname)-8s | %(message)s"
LOGGER_NAME: Final[str] = "FollowerScout"

# a rotated file per ~1 MB of lookups is plenty for a long-running `serve`
_FILE_MAX_BYTES: Final[int] = 1024 * 1024
_FILE_BACKUPS: Final[int] = 3


class LookupAdapter(logging.LoggerAdapter):
    """Prefixes every message with ``[username]`` and exposes it as ``record.username``."""

    def process(self, msg: Any, kwargs: MutableMapping[str, Any]) -> Tuple[Any, MutableMapping[str, Any]]:
        username = self.extra["username"] if self.extra else "-"
        kwargs.setdefault("extra", {})["username"] = username
        return f"[{username}] {msg}", kwargs


def init_logging(
    level: Union[int, str] = "INFO",
    log_file: Union[str, Path, None] = None,
    log_format: str = DEFAULT_FORMAT,
) -> logging.Logger:
    """(Re)configure the project logger: stderr always, plus a rotating *log_file*."""
    lg = logging.getLogger(LOGGER_NAME)
    lg.setLevel(level)

    for handler in list(lg.handlers):
        lg.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(log_format)
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file is not None:
        handlers.append(
            RotatingFileHandler(str(log_file), maxBytes=_FILE_MAX_BYTES, backupCount=_FILE_BACKUPS, encoding="utf-8")
        )
    for handler in handlers:
        handler.setFormatter(formatter)
        lg.addHandler(handler)

    lg.propagate = False
    return lg


def lookup_logger(username: Optional[str]) -> LookupAdapter:
    return LookupAdapter(logging.getLogger(LOGGER_NAME), {"username": username or "-"})


logger: logging.Logger = init_logging()

__all__ = ["DEFAULT_FORMAT", "LOGGER_NAME", "LookupAdapter", "init_logging", "logger", "lookup_logger"]
