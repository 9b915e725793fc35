"""Process-wide Swiss Ephemeris functions.

The engine's state is global to the process, so these functions share one
:class:`~libswiss.session.SwissEphemeris` (every session shares the same
lifecycle anyway).  Typical use::

    from datetime import UTC, datetime
    from libswiss import swiss_ephm
    from libswiss.bodies import Body, Flag

    swiss_ephm.set_ephe_path("/usr/share/sweph")
    jd = swiss_ephm.utc_to_julian_day(datetime(1991, 10, 13, 20, tzinfo=UTC))
    result = swiss_ephm.calc_ut(jd, Body.SUN, Flag.HIGH_PRECISION_SPEED)
    swiss_ephm.close()
"""

from __future__ import annotations

import datetime as _dt
import os
import threading

from .bodies import Body, FileSlot, FlagsLike
from .config import LibSwissSettings
from .lifecycle import LifecycleState, reset_process_lifecycle
from .results import CalculationResult, FileData
from .session import SwissEphemeris

__all__ = [
    "calc_ut",
    "close",
    "default_session",
    "get_current_file_data",
    "get_ephe_path",
    "get_library_path",
    "get_planet_name",
    "reset_default_session",
    "set_ephe_path",
    "set_jpl_file",
    "state",
    "utc_to_julian_day",
    "version",
]

_session_lock = threading.Lock()
_session: SwissEphemeris | None = None


def default_session(settings: LibSwissSettings | None = None) -> SwissEphemeris:
    """Return the process-wide session, creating it on first use.

    ``settings`` only take effect when this call creates the session.
    """

    global _session
    with _session_lock:
        if _session is None:
            _session = SwissEphemeris(settings=settings)
        return _session


def reset_default_session(session: SwissEphemeris | None = None) -> None:
    """For tests: start a fresh engine lifecycle and replace the process-wide session.

    A new session is created on next use unless ``session`` is given.
    """

    global _session
    with _session_lock:
        reset_process_lifecycle()
        _session = session


def state() -> LifecycleState:
    return default_session().state


def set_ephe_path(path: str | os.PathLike[str] | None = None) -> None:
    default_session().set_ephe_path(path)


def close() -> None:
    default_session().close()


def get_ephe_path() -> str | None:
    return default_session().get_ephe_path()


def set_jpl_file(filename: str) -> None:
    default_session().set_jpl_file(filename)


def version() -> str:
    return default_session().version()


def get_library_path() -> str:
    return default_session().get_library_path()


def get_current_file_data(ifno: FileSlot | int = FileSlot.PLANET) -> FileData | None:
    return default_session().get_current_file_data(ifno)


def calc_ut(jd: float, body: Body | int, flags: FlagsLike | None = None) -> CalculationResult:
    return default_session().calc_ut(jd, body, flags)


def utc_to_julian_day(moment: _dt.datetime) -> float:
    return default_session().utc_to_julian_day(moment)


def get_planet_name(body: Body | int) -> str:
    return default_session().get_planet_name(body)
