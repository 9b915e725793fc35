"""Safe, typed access to a Swiss Ephemeris engine."""

from __future__ import annotations

import ctypes
import datetime as _dt
import logging
import os
from pathlib import Path

from .bodies import GREGORIAN_CALENDAR, Body, FileSlot, FlagsLike, coerce_body, coerce_flags
from .buffers import copy_borrowed_string, decode_text, new_text_buffer, new_vector_buffer
from .config import LibSwissSettings, load_settings
from .engine import RawEngine, load_engine
from .exceptions import CalculationError, InvalidEphemerisPathError
from .lifecycle import EngineLifecycle, LifecycleState, PathSelection, process_lifecycle
from .observability import CALCULATION_DURATION, CALCULATION_ERRORS
from .results import BodyResult, CalculationResult, EclipticNutationResult, FileData
from .time import calendar_components

__all__ = ["SwissEphemeris"]

LOG = logging.getLogger(__name__)


class SwissEphemeris:
    """A handle on the process-wide Swiss Ephemeris engine.

    Call :meth:`set_ephe_path` once before anything else and :meth:`close`
    once at the end.  Every other method raises
    :class:`~libswiss.exceptions.NotConfiguredError` before configuration and
    :class:`~libswiss.exceptions.UsedAfterCloseError` after teardown.

    All instances share one :class:`~libswiss.lifecycle.EngineLifecycle`: the
    engine's state is static to the process, so configuring or closing
    through any handle configures or closes it for all of them.  ``engine``
    may be supplied directly; otherwise the backend named by ``settings`` (or
    :func:`~libswiss.config.load_settings`) is loaded when this handle performs
    the one-time configuration.  After that, every handle uses the engine that
    was configured.  Engine calls are serialized, the Swiss Ephemeris not
    being thread-safe.
    """

    def __init__(
        self,
        engine: RawEngine | None = None,
        *,
        settings: LibSwissSettings | None = None,
    ) -> None:
        self._engine = engine
        self._settings = settings

    @property
    def _lifecycle(self) -> EngineLifecycle:
        return process_lifecycle()

    @property
    def state(self) -> LifecycleState:
        return self._lifecycle.state

    @property
    def engine(self) -> RawEngine | None:
        """The configured engine, else this handle's backend if already loaded."""
        bound = self._lifecycle.engine
        return bound if bound is not None else self._engine

    def _resolve_engine(self) -> RawEngine:
        if self._engine is None:
            settings = self._settings if self._settings is not None else load_settings()
            self._engine = load_engine(settings)
            LOG.debug("Loaded Swiss Ephemeris backend %s", self._engine.name)
        return self._engine

    # -------------------- lifecycle --------------------

    def set_ephe_path(self, path: str | os.PathLike[str] | None = None) -> None:
        """Configure the ephemeris search path; only the first call has an effect.

        When ``SE_EPHE_PATH`` is set the engine resolves the path itself and
        ``path`` is ignored.  An explicit ``path`` must be an existing
        directory.
        """

        def bind(selection: PathSelection) -> RawEngine:
            engine = self._resolve_engine()
            target = selection.engine_path
            engine.set_ephe_path(target.encode("utf-8") if target is not None else None)
            return engine

        self._lifecycle.configure(path, bind)

    def close(self) -> None:
        """Release the engine's files; later calls are no-ops."""
        self._lifecycle.teardown()

    def get_ephe_path(self) -> str | None:
        """Return the configured path, ``None`` when the engine default is used."""
        return self._lifecycle.ephe_path

    # -------------------- engine queries --------------------

    def set_jpl_file(self, filename: str) -> None:
        """Select the JPL ephemeris file used with :attr:`Flag.JPL_EPHEMERIS`."""

        with self._lifecycle.guard("set_jpl_file") as engine:
            search = self._lifecycle.ephe_path or "."
            directories = [entry for entry in search.split(os.pathsep) if entry]
            if not any((Path(entry) / filename).is_file() for entry in directories):
                raise InvalidEphemerisPathError(
                    f"JPL file {filename!r} not found in ephemeris path {search!r}"
                )
            engine.set_jpl_file(filename.encode("utf-8"))

    def version(self) -> str:
        with self._lifecycle.guard("version") as engine:
            buffer = new_text_buffer()
            engine.version(buffer)
            return decode_text(buffer)

    def get_library_path(self) -> str:
        with self._lifecycle.guard("get_library_path") as engine:
            buffer = new_text_buffer()
            engine.get_library_path(buffer)
            return decode_text(buffer)

    def get_planet_name(self, body: Body | int) -> str:
        with self._lifecycle.guard("get_planet_name") as engine:
            code = coerce_body(body)
            buffer = new_text_buffer()
            engine.get_planet_name(int(code), buffer)
            return decode_text(buffer)

    def get_current_file_data(self, ifno: FileSlot | int = FileSlot.PLANET) -> FileData | None:
        """Describe the file loaded in slot ``ifno``; ``None`` if the slot is empty."""

        with self._lifecycle.guard("get_current_file_data") as engine:
            slot = FileSlot(ifno)
            start = ctypes.c_double(0.0)
            end = ctypes.c_double(0.0)
            denum = ctypes.c_int32(0)
            address = engine.get_current_file_data(int(slot), start, end, denum)
            filepath = copy_borrowed_string(address)
            if filepath is None:
                return None
            return FileData(
                filepath=filepath,
                start_date=start.value,
                end_date=end.value,
                ephemeris_num=denum.value,
            )

    def utc_to_julian_day(self, moment: _dt.datetime) -> float:
        """Convert ``moment`` to a Julian day (UT) on the Gregorian calendar."""

        with self._lifecycle.guard("utc_to_julian_day") as engine:
            year, month, day, hour = calendar_components(moment)
            return engine.julday(year, month, day, hour, GREGORIAN_CALENDAR)

    def calc_ut(
        self, jd: float, body: Body | int, flags: FlagsLike | None = None
    ) -> CalculationResult:
        """Compute ``body`` at Julian day ``jd`` (UT).

        Returns a :class:`BodyResult`, or an :class:`EclipticNutationResult`
        for :attr:`Body.ECLIPTIC_NUTATION`.  Failures reported by the engine
        raise :class:`CalculationError`.
        """

        with self._lifecycle.guard("calc_ut") as engine:
            code = coerce_body(body)
            iflag = coerce_flags(flags)
            xx = new_vector_buffer(6)
            serr = new_text_buffer()
            with CALCULATION_DURATION.labels(body=code.name.lower()).time():
                retflag = engine.calc_ut(float(jd), int(code), int(iflag), xx, serr)
            message = decode_text(serr)

        if retflag < 0:
            CALCULATION_ERRORS.labels(code=str(retflag)).inc()
            LOG.debug("calc_ut(%s, %s, %d) failed: %s", jd, code.name, iflag, message)
            raise CalculationError(retflag, message)
        if message:
            LOG.debug("calc_ut(%s, %s) warning: %s", jd, code.name, message)
        if code.is_ecliptic_nutation:
            return EclipticNutationResult(
                ecliptic_true_obliquity=xx[0],
                ecliptic_mean_obliquity=xx[1],
                nutation_lng=xx[2],
                nutation_obliquity=xx[3],
            )
        return BodyResult(pos=(xx[0], xx[1], xx[2]), vel=(xx[3], xx[4], xx[5]), flags=retflag)
