"""Logging setup for the libswiss command line."""

from __future__ import annotations

import logging
import os
from typing import Any

__all__ = ["LOG_FORMAT", "configure_logging", "resolve_level"]

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
_DATEFMT = "%Y-%m-%d %H:%M:%S"


def resolve_level(*candidates: str | int | None, default: int = logging.WARNING) -> int:
    """Return the first usable logging level among ``candidates``.

    Strings may be level names (any case) or digits; unknown names are
    skipped.
    """

    for value in candidates:
        if value is None:
            continue
        if isinstance(value, int):
            return value
        token = value.strip()
        if not token:
            continue
        if token.isdigit():
            return int(token)
        named = logging.getLevelName(token.upper())
        if isinstance(named, int):
            return named
    return default


def configure_logging(*, level: str | int | None = None, **kwargs: Any) -> int:
    """Configure root logging; ``level`` wins over the ``LOG_LEVEL`` variable.

    Extra ``kwargs`` go to :func:`logging.basicConfig`.  Returns the level set.
    """

    effective = resolve_level(level, os.environ.get("LOG_LEVEL"))
    logging.basicConfig(
        level=effective,
        format=kwargs.pop("format", LOG_FORMAT),
        datefmt=kwargs.pop("datefmt", _DATEFMT),
        force=kwargs.pop("force", True),
        **kwargs,
    )
    return effective
