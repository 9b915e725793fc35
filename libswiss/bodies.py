"""Body, flag and file-slot tables matching the Swiss Ephemeris constants."""

from __future__ import annotations

from collections.abc import Iterable
from enum import IntEnum, IntFlag
from typing import Final, Union

__all__ = [
    "Body",
    "FileSlot",
    "Flag",
    "FlagsLike",
    "GREGORIAN_CALENDAR",
    "coerce_body",
    "coerce_flags",
]

GREGORIAN_CALENDAR: Final[int] = 1
"""``SE_GREG_CAL``; the only calendar flag used for time conversion."""


class Body(IntEnum):
    """Celestial bodies accepted by :func:`calc_ut`."""

    ECLIPTIC_NUTATION = -1
    SUN = 0
    MOON = 1
    MERCURY = 2
    VENUS = 3
    MARS = 4
    JUPITER = 5
    SATURN = 6
    URANUS = 7
    NEPTUNE = 8
    PLUTO = 9
    MEAN_NODE = 10
    TRUE_NODE = 11
    MEAN_LUNAR_APOGEE = 12
    OSCULATING_LUNAR_APOGEE = 13
    EARTH = 14
    CHIRON = 15
    PHOLUS = 16
    CERES = 17
    PALLAS = 18
    JUNO = 19
    VESTA = 20

    @property
    def is_ecliptic_nutation(self) -> bool:
        return self is Body.ECLIPTIC_NUTATION


class Flag(IntFlag):
    """Calculation flags (``SEFLG_*``); combine with ``|``."""

    JPL_EPHEMERIS = 1
    SWISS_EPHEMERIS = 2
    MOSHIER_EPHEMERIS = 4
    HELIOCENTRIC = 8
    TRUE_POSITION = 16
    J2000 = 32
    NO_NUTATION = 64
    HIGH_PRECISION_SPEED = 256
    NO_GRAVITATIONAL_DEFLECTION = 512
    NO_ABERRATION = 1024
    EQUATORIAL = 2048
    CARTESIAN = 4096
    RADIANS = 8192
    BARYCENTRIC = 16384
    TOPOCENTRIC = 32768


class FileSlot(IntEnum):
    """Indices understood by ``swe_get_current_file_data``."""

    PLANET = 0
    MOON = 1
    MAIN_ASTEROID = 2
    OTHER_ASTEROID = 3
    JPL = 4


FlagsLike = Union[Flag, int, Iterable[Flag]]


def coerce_body(body: Body | int) -> Body:
    """Return ``body`` as a :class:`Body`, rejecting unknown engine codes."""

    if isinstance(body, Body):
        return body
    if isinstance(body, bool) or not isinstance(body, int):
        raise ValueError(f"Body must be a Body or an int code, got {body!r}")
    try:
        return Body(body)
    except ValueError as exc:
        raise ValueError(f"Unknown body code {body}") from exc


def coerce_flags(flags: FlagsLike | None) -> Flag:
    """Combine ``flags`` into a single :class:`Flag` value."""

    if flags is None:
        return Flag(0)
    if isinstance(flags, bool):
        raise ValueError(f"Flags must be a Flag, an int bitset or Flag values, got {flags!r}")
    if isinstance(flags, Flag):
        return flags
    if isinstance(flags, int):
        if flags < 0:
            raise ValueError(f"Flag bitset must be non-negative, got {flags}")
        return Flag(flags)
    try:
        items = iter(flags)
    except TypeError as exc:
        raise ValueError(f"Unsupported flags value {flags!r}") from exc
    combined = Flag(0)
    for item in items:
        if not isinstance(item, Flag):
            raise ValueError(f"Unsupported flag value {item!r}")
        combined |= item
    return combined
