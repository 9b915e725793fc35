"""ctypes binding for a compiled Swiss Ephemeris shared library (``libswe``)."""

from __future__ import annotations

import ctypes
import ctypes.util
import logging
import os
from typing import Any

from .exceptions import EngineUnavailableError

__all__ = ["LIBRARY_ENV_VAR", "NativeEngine", "find_library"]

LOG = logging.getLogger(__name__)

LIBRARY_ENV_VAR = "LIBSWISS_LIBRARY"

# aliases
_i32 = ctypes.c_int32
_int = ctypes.c_int
_f64 = ctypes.c_double
_str = ctypes.c_char_p
_ptr = ctypes.c_void_p
_f64_ptr = ctypes.POINTER(ctypes.c_double)
_i32_ptr = ctypes.POINTER(ctypes.c_int32)


def find_library(explicit: str | os.PathLike[str] | None = None) -> str:
    """Locate ``libswe``.

    Search order:
    1. ``explicit`` argument
    2. ``LIBSWISS_LIBRARY`` env var
    3. the platform loader's search path (``ctypes.util.find_library``)
    """

    for source, candidate in (
        ("argument", explicit),
        (LIBRARY_ENV_VAR, os.environ.get(LIBRARY_ENV_VAR)),
    ):
        if not candidate:
            continue
        path = os.fspath(candidate)
        if os.path.exists(path):
            return path
        raise OSError(f"Swiss Ephemeris library from {source} not found: {path}")

    found = ctypes.util.find_library("swe")
    if found:
        return found
    raise EngineUnavailableError(
        "Cannot find libswe. Either:\n"
        "  - install the Swiss Ephemeris shared library system-wide\n"
        f"  - set {LIBRARY_ENV_VAR}=/path/to/libswe"
    )


def _sig(func: Any, args: list[Any], ret: Any = _i32) -> None:
    """Set function signature: argtypes and restype."""
    func.argtypes = args
    func.restype = ret


class NativeEngine:
    """Raw engine calling straight into ``libswe``.

    ``lib`` is a loaded library exposing the ``swe_*`` symbols.  Buffers are
    passed through untouched; out-parameters are passed by reference.
    """

    name = "native"

    def __init__(self, lib: Any) -> None:
        self._lib = lib
        _sig(lib.swe_set_ephe_path, [_str], None)
        _sig(lib.swe_close, [], None)
        _sig(lib.swe_calc_ut, [_f64, _i32, _i32, _f64_ptr, _str], _i32)
        _sig(lib.swe_julday, [_int, _int, _int, _f64, _int], _f64)
        _sig(lib.swe_get_planet_name, [_int, _str], _ptr)
        _sig(lib.swe_version, [_str], _ptr)
        _sig(lib.swe_get_library_path, [_str], _ptr)
        _sig(lib.swe_get_current_file_data, [_int, _f64_ptr, _f64_ptr, _i32_ptr], _ptr)
        _sig(lib.swe_set_jpl_file, [_str], None)

    @classmethod
    def load(cls, path: str | os.PathLike[str] | None = None) -> NativeEngine:
        resolved = find_library(path)
        LOG.debug("Loading Swiss Ephemeris library from %s", resolved)
        return cls(ctypes.CDLL(resolved))

    def set_ephe_path(self, path: bytes | None) -> None:
        self._lib.swe_set_ephe_path(path)

    def close(self) -> None:
        self._lib.swe_close()

    def calc_ut(
        self, tjd_ut: float, ipl: int, iflag: int, xx: ctypes.Array, serr: ctypes.Array
    ) -> int:
        return int(self._lib.swe_calc_ut(tjd_ut, ipl, iflag, xx, serr))

    def julday(self, year: int, month: int, day: int, hour: float, gregflag: int) -> float:
        return float(self._lib.swe_julday(year, month, day, hour, gregflag))

    def get_planet_name(self, ipl: int, spname: ctypes.Array) -> None:
        self._lib.swe_get_planet_name(ipl, spname)

    def version(self, svers: ctypes.Array) -> None:
        self._lib.swe_version(svers)

    def get_library_path(self, spath: ctypes.Array) -> None:
        self._lib.swe_get_library_path(spath)

    def get_current_file_data(
        self,
        ifno: int,
        tfstart: ctypes.c_double,
        tfend: ctypes.c_double,
        denum: ctypes.c_int32,
    ) -> int | None:
        return self._lib.swe_get_current_file_data(
            ifno, ctypes.byref(tfstart), ctypes.byref(tfend), ctypes.byref(denum)
        )

    def set_jpl_file(self, fname: bytes) -> None:
        self._lib.swe_set_jpl_file(fname)
