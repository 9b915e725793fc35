"""Process bootstrap helpers for libswiss entry points."""

from .logging import configure_logging

__all__ = ["configure_logging"]
