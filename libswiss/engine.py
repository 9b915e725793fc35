"""Raw engine contract and backend selection.

:class:`RawEngine` mirrors the C procedures of the Swiss Ephemeris one to one,
including their conventions: text comes back through caller-allocated
``char`` buffers, vectors through ``double`` buffers, scalars through
``ctypes`` out-parameters, and the current-file query returns a borrowed
address owned by the engine.  The session layer never sees anything else.
"""

from __future__ import annotations

import ctypes
import importlib
import importlib.util
import logging
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from .exceptions import EngineUnavailableError
from .native import LIBRARY_ENV_VAR, NativeEngine

if TYPE_CHECKING:  # pragma: no cover - typing only
    from .config import LibSwissSettings

__all__ = [
    "ERR",
    "OK",
    "RawEngine",
    "SwissephEngine",
    "has_swisseph",
    "load_engine",
]

LOG = logging.getLogger(__name__)

OK = 0
ERR = -1


@runtime_checkable
class RawEngine(Protocol):
    """Procedural surface of the Swiss Ephemeris."""

    name: str

    def set_ephe_path(self, path: bytes | None) -> None: ...

    def close(self) -> None: ...

    def calc_ut(
        self, tjd_ut: float, ipl: int, iflag: int, xx: ctypes.Array, serr: ctypes.Array
    ) -> int: ...

    def julday(self, year: int, month: int, day: int, hour: float, gregflag: int) -> float: ...

    def get_planet_name(self, ipl: int, spname: ctypes.Array) -> None: ...

    def version(self, svers: ctypes.Array) -> None: ...

    def get_library_path(self, spath: ctypes.Array) -> None: ...

    def get_current_file_data(
        self,
        ifno: int,
        tfstart: ctypes.c_double,
        tfend: ctypes.c_double,
        denum: ctypes.c_int32,
    ) -> int | None: ...

    def set_jpl_file(self, fname: bytes) -> None: ...


def has_swisseph() -> bool:
    """Return ``True`` if pyswisseph is importable."""

    return importlib.util.find_spec("swisseph") is not None


def _import_swisseph() -> Any:
    try:
        return importlib.import_module("swisseph")
    except ImportError as exc:  # pragma: no cover - import errors depend on env
        raise EngineUnavailableError(
            "Swiss Ephemeris not available. Install pyswisseph (package: 'pyswisseph') "
            f"or point {LIBRARY_ENV_VAR} at a compiled libswe."
        ) from exc


def _write_text(buffer: ctypes.Array, text: str) -> None:
    limit = len(buffer) - 1
    data = text.encode("utf-8")[:limit].decode("utf-8", "ignore").encode("utf-8")
    ctypes.memset(buffer, 0, len(buffer))
    buffer.value = data


class SwissephEngine:
    """Raw engine backed by the pyswisseph extension module.

    pyswisseph already returns Python values; this adapter writes them back
    into the caller's buffers so both backends share one contract.  Engine
    errors (``swisseph.Error``) become an ``ERR`` return code with the message
    in the error buffer, exactly as the C library reports them.
    """

    name = "pyswisseph"

    def __init__(self, module: Any | None = None) -> None:
        self._swe = module if module is not None else _import_swisseph()
        # Engine-owned storage behind the addresses handed out by
        # get_current_file_data; overwritten on every query of the same slot.
        self._file_paths: dict[int, ctypes.Array] = {}

    def set_ephe_path(self, path: bytes | None) -> None:
        self._swe.set_ephe_path(path.decode("utf-8") if path is not None else None)

    def close(self) -> None:
        self._swe.close()
        self._file_paths.clear()

    def calc_ut(
        self, tjd_ut: float, ipl: int, iflag: int, xx: ctypes.Array, serr: ctypes.Array
    ) -> int:
        try:
            values, retflag = self._swe.calc_ut(tjd_ut, ipl, iflag)
        except self._swe.Error as exc:
            _write_text(serr, str(exc))
            return ERR
        for index, value in enumerate(values[: len(xx)]):
            xx[index] = float(value)
        return int(retflag)

    def julday(self, year: int, month: int, day: int, hour: float, gregflag: int) -> float:
        return float(self._swe.julday(year, month, day, hour, gregflag))

    def get_planet_name(self, ipl: int, spname: ctypes.Array) -> None:
        _write_text(spname, self._swe.get_planet_name(ipl))

    def version(self, svers: ctypes.Array) -> None:
        value = self._swe.version
        _write_text(svers, value() if callable(value) else str(value))

    def get_library_path(self, spath: ctypes.Array) -> None:
        _write_text(spath, self._swe.get_library_path())

    def get_current_file_data(
        self,
        ifno: int,
        tfstart: ctypes.c_double,
        tfend: ctypes.c_double,
        denum: ctypes.c_int32,
    ) -> int | None:
        path, start, end, number = self._swe.get_current_file_data(ifno)
        if not path:
            self._file_paths.pop(ifno, None)
            return None
        tfstart.value = float(start)
        tfend.value = float(end)
        denum.value = int(number)
        storage = ctypes.create_string_buffer(path.encode("utf-8"))
        self._file_paths[ifno] = storage
        return ctypes.addressof(storage)

    def set_jpl_file(self, fname: bytes) -> None:
        self._swe.set_jpl_file(fname.decode("utf-8"))


def load_engine(settings: LibSwissSettings | None = None) -> RawEngine:
    """Return the engine backend selected by ``settings``."""

    backend = settings.backend if settings is not None else "auto"
    library_path = settings.library_path if settings is not None else None

    if backend == "native":
        return NativeEngine.load(library_path)
    if backend == "pyswisseph":
        return SwissephEngine()

    if library_path:
        return NativeEngine.load(library_path)
    if has_swisseph():
        LOG.debug("Using pyswisseph engine backend")
        return SwissephEngine()
    try:
        return NativeEngine.load()
    except (OSError, EngineUnavailableError) as exc:
        raise EngineUnavailableError(
            "No Swiss Ephemeris backend available: install pyswisseph or libswe."
        ) from exc
