"""Engine diagnostics ("doctor") for the libswiss CLI.

Configures the process-wide session, reports version, library path and loaded
files as PASS/WARN/FAIL checks, then closes the session.
"""

from __future__ import annotations

import os
from dataclasses import asdict, dataclass
from typing import Any

from .bodies import Body, FileSlot
from .exceptions import CalculationError, EngineUnavailableError, PreconditionError
from .session import SwissEphemeris
from .swiss_ephm import default_session

__all__ = ["Check", "J2000", "collect_diagnostics", "format_text_report", "worst_status"]

J2000 = 2451545.0


@dataclass
class Check:
    name: str
    status: str  # "PASS" | "WARN" | "FAIL"
    detail: str
    data: dict[str, Any] | None = None


def _status_order(s: str) -> int:
    return {"PASS": 0, "WARN": 1, "FAIL": 2}.get(s, 2)


def worst_status(checks: list[Check]) -> str:
    if not checks:
        return "PASS"
    return max((c.status for c in checks), key=_status_order)


def _check_configure(session: SwissEphemeris, path: str | None) -> Check:
    try:
        session.set_ephe_path(path)
    except (PreconditionError, EngineUnavailableError, OSError) as exc:
        return Check("Configure", "FAIL", str(exc))
    engine = session.engine
    return Check(
        "Configure",
        "PASS",
        f"path={session.get_ephe_path() or '(engine default)'}",
        {"backend": getattr(engine, "name", None), "state": session.state.value},
    )


def _check_probe(session: SwissEphemeris) -> Check:
    try:
        result = session.calc_ut(J2000, Body.SUN)
    except CalculationError as exc:
        return Check("Probe Sun @ J2000", "WARN", exc.message, {"code": exc.code})
    return Check("Probe Sun @ J2000", "PASS", "ok", {"result": asdict(result)})


def _check_files(session: SwissEphemeris) -> Check:
    loaded = {}
    for slot in FileSlot:
        data = session.get_current_file_data(slot)
        if data is not None:
            loaded[slot.name.lower()] = asdict(data)
    if not loaded:
        return Check("Ephemeris files", "WARN", "no ephemeris files loaded", {})
    return Check("Ephemeris files", "PASS", f"{len(loaded)} slot(s) loaded", loaded)


def collect_diagnostics(
    session: SwissEphemeris | None = None, path: str | os.PathLike[str] | None = None
) -> dict[str, Any]:
    """Run every check against ``session`` (the default session if omitted).

    The session is closed afterwards, also when a fatal error escapes a check.
    """

    session = session if session is not None else default_session()
    try:
        checks = [_check_configure(session, None if path is None else os.fspath(path))]
        if checks[0].status != "FAIL":
            checks.append(Check("Version", "PASS", session.version()))
            checks.append(Check("Library path", "PASS", session.get_library_path()))
            checks.append(_check_probe(session))
            checks.append(_check_files(session))
    finally:
        session.close()
    return {
        "status": worst_status(checks),
        "checks": [asdict(c) for c in checks],
    }


def format_text_report(payload: dict[str, Any]) -> str:
    lines = [f"libswiss diagnostics: {payload['status']}"]
    for check in payload["checks"]:
        lines.append(f"  [{check['status']}] {check['name']}: {check['detail']}")
    return "\n".join(lines)
