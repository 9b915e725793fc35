"""Safe Python bindings for the Swiss Ephemeris.

The engine is configured once per process with :func:`set_ephe_path` and
released once with :func:`close`; everything in between goes through typed
inputs and results.
"""

from __future__ import annotations

from .bodies import Body, FileSlot, Flag
from .exceptions import (
    CalculationError,
    EngineContractError,
    EngineUnavailableError,
    InvalidEphemerisPathError,
    NotConfiguredError,
    PreconditionError,
    UsedAfterCloseError,
)
from .lifecycle import LifecycleState
from .results import BodyResult, CalculationResult, EclipticNutationResult, FileData
from .session import SwissEphemeris
from .swiss_ephm import (
    calc_ut,
    close,
    get_current_file_data,
    get_ephe_path,
    get_library_path,
    get_planet_name,
    set_ephe_path,
    set_jpl_file,
    utc_to_julian_day,
    version,
)

__version__ = "0.1.0"

__all__ = [
    "Body",
    "BodyResult",
    "CalculationError",
    "CalculationResult",
    "EclipticNutationResult",
    "EngineContractError",
    "EngineUnavailableError",
    "FileData",
    "FileSlot",
    "Flag",
    "InvalidEphemerisPathError",
    "LifecycleState",
    "NotConfiguredError",
    "PreconditionError",
    "SwissEphemeris",
    "UsedAfterCloseError",
    "calc_ut",
    "close",
    "get_current_file_data",
    "get_ephe_path",
    "get_library_path",
    "get_planet_name",
    "set_ephe_path",
    "set_jpl_file",
    "utc_to_julian_day",
    "version",
]
