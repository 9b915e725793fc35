"""Error types raised by :mod:`libswiss`.

Two disjoint families exist.  :class:`PreconditionError` and its subclasses
signal a broken caller contract (lifecycle misuse, a bad ephemeris directory,
an engine that violated its own buffer contract).  They are not meant to be
caught and retried.  :class:`CalculationError` carries a failure reported by
the engine itself and is an expected, recoverable outcome.
"""

from __future__ import annotations

__all__ = [
    "CalculationError",
    "EngineContractError",
    "EngineUnavailableError",
    "InvalidEphemerisPathError",
    "NotConfiguredError",
    "PreconditionError",
    "UsedAfterCloseError",
]


class PreconditionError(RuntimeError):
    """Raised when the binding is used in violation of its contract."""


class NotConfiguredError(PreconditionError):
    """Raised when an operation runs before :func:`set_ephe_path`."""

    def __init__(self, operation: str) -> None:
        super().__init__(
            f"Attempted to call `{operation}` before setting the ephemeris path."
        )
        self.operation = operation


class UsedAfterCloseError(PreconditionError):
    """Raised when an operation runs after the ephemeris files were closed."""

    def __init__(self, operation: str) -> None:
        super().__init__(
            f"Attempted to call `{operation}` after the ephemeris files were closed."
        )
        self.operation = operation


class InvalidEphemerisPathError(PreconditionError):
    """Raised when a supplied ephemeris location is not usable."""


class EngineContractError(PreconditionError):
    """Raised when the engine hands back a buffer that cannot be decoded."""


class EngineUnavailableError(RuntimeError):
    """Raised when no Swiss Ephemeris backend can be loaded."""


class CalculationError(Exception):
    """Failure reported by the engine for a single computation."""

    def __init__(self, code: int, message: str) -> None:
        super().__init__(code, message)
        self.code = code
        self.message = message

    def __str__(self) -> str:
        return f"CalculationError {{ code: {self.code}, message: {self.message} }}"
