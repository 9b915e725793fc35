"""Recording stand-in for the raw Swiss Ephemeris engine."""

from __future__ import annotations

import ctypes
import threading
import time
from dataclasses import dataclass, field

DEFAULT_VECTOR = (201.3, -0.0001, 0.9966, 0.9947, 0.00002, -0.0002)


@dataclass
class RecordingEngine:
    """Implements :class:`libswiss.engine.RawEngine` and records every call.

    Text results are written with trailing bytes after the terminator so
    decoding has to stop at the first NUL.
    """

    name: str = "recording"
    vector: tuple[float, ...] = DEFAULT_VECTOR
    failure: tuple[int, str] | None = None
    warning: str = ""
    version_text: str = "2.10.03"
    library_path: str = "/opt/sweph/libswe.so"
    names: dict[int, str] = field(
        default_factory=lambda: {0: "Sun", 1: "Moon", -1: "Ecliptic/Nutation"}
    )
    files: dict[int, tuple[str, float, float, int]] = field(
        default_factory=lambda: {0: ("/opt/sweph/ephe/sepl_18.se1", 2378496.5, 2597641.5, 431)}
    )
    set_path_delay: float = 0.0

    def __post_init__(self) -> None:
        self.ephe_paths: list[bytes | None] = []
        self.close_calls = 0
        self.calc_calls: list[tuple[float, int, int]] = []
        self.julday_calls: list[tuple[int, int, int, float, int]] = []
        self.jpl_files: list[bytes] = []
        self._storage: dict[int, ctypes.Array] = {}
        self._calls_lock = threading.Lock()

    @staticmethod
    def _fill(buffer: ctypes.Array, text: str) -> None:
        payload = text.encode("utf-8") + b"\0\xff\xfeleftover"
        buffer[: len(payload)] = payload

    def set_ephe_path(self, path: bytes | None) -> None:
        if self.set_path_delay:
            time.sleep(self.set_path_delay)
        with self._calls_lock:
            self.ephe_paths.append(path)

    def close(self) -> None:
        self.close_calls += 1

    def calc_ut(self, tjd_ut, ipl, iflag, xx, serr) -> int:
        self.calc_calls.append((tjd_ut, ipl, iflag))
        if self.failure is not None:
            code, message = self.failure
            self._fill(serr, message)
            return code
        for index, value in enumerate(self.vector):
            xx[index] = value
        if self.warning:
            self._fill(serr, self.warning)
        return iflag

    def julday(self, year, month, day, hour, gregflag) -> float:
        self.julday_calls.append((year, month, day, hour, gregflag))
        return 2_000_000.0 + year * 372 + month * 31 + day + hour / 24.0

    def get_planet_name(self, ipl, spname) -> None:
        self._fill(spname, self.names.get(ipl, f"body {ipl}"))

    def version(self, svers) -> None:
        self._fill(svers, self.version_text)

    def get_library_path(self, spath) -> None:
        self._fill(spath, self.library_path)

    def get_current_file_data(self, ifno, tfstart, tfend, denum):
        entry = self.files.get(ifno)
        if entry is None:
            return None
        path, start, end, number = entry
        tfstart.value = start
        tfend.value = end
        denum.value = number
        storage = ctypes.create_string_buffer(path.encode("utf-8"))
        self._storage[ifno] = storage
        return ctypes.addressof(storage)

    def set_jpl_file(self, fname: bytes) -> None:
        self.jpl_files.append(fname)
