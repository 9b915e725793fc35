"""Calendar decomposition used for ``swe_julday`` conversions."""

from __future__ import annotations

import datetime as _dt
from typing import NamedTuple

__all__ = ["CalendarComponents", "calendar_components", "ensure_utc"]


class CalendarComponents(NamedTuple):
    year: int
    month: int
    day: int
    hour: float


def ensure_utc(moment: _dt.datetime) -> _dt.datetime:
    """Return ``moment`` converted to UTC; naive values are taken as UTC."""

    if moment.tzinfo is None:
        return moment.replace(tzinfo=_dt.UTC)
    return moment.astimezone(_dt.UTC)


def calendar_components(moment: _dt.datetime) -> CalendarComponents:
    """Split ``moment`` into the year, month, day and decimal hour of its UTC instant."""

    utc = ensure_utc(moment)
    hour = (
        utc.hour
        + utc.minute / 60.0
        + utc.second / 3600.0
        + utc.microsecond / 3_600_000_000.0
    )
    return CalendarComponents(utc.year, utc.month, utc.day, hour)
