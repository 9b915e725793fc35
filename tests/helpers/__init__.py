"""Utilities shared across the libswiss test suites."""

from .engine import DEFAULT_VECTOR, RecordingEngine

__all__ = ["DEFAULT_VECTOR", "RecordingEngine"]
