"""Typed values produced by the binding."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

__all__ = [
    "BodyResult",
    "CalculationResult",
    "EclipticNutationResult",
    "FileData",
]


@dataclass(frozen=True, slots=True)
class FileData:
    """Snapshot of an ephemeris file currently loaded by the engine."""

    filepath: str
    start_date: float
    end_date: float
    ephemeris_num: int


@dataclass(frozen=True, slots=True)
class BodyResult:
    """Position and velocity of a body.

    Units and frame follow the flags used: longitude/latitude/distance by
    default, x/y/z with :attr:`Flag.CARTESIAN`.  ``flags`` holds the flag set
    the engine reports it actually used, which can differ from the request
    (for example after falling back to the analytic model).
    """

    pos: tuple[float, float, float]
    vel: tuple[float, float, float]
    flags: int = 0


@dataclass(frozen=True, slots=True)
class EclipticNutationResult:
    """Obliquity and nutation angles, in degrees."""

    ecliptic_true_obliquity: float
    ecliptic_mean_obliquity: float
    nutation_lng: float
    nutation_obliquity: float


CalculationResult = Union[BodyResult, EclipticNutationResult]
