from __future__ import annotations

import importlib.util
import os
import warnings
from pathlib import Path

import pytest

from libswiss import swiss_ephm
from libswiss.session import SwissEphemeris
from tests.helpers.engine import RecordingEngine

if importlib.util.find_spec("swisseph") is None:
    warnings.warn(
        "pyswisseph not installed; pyswisseph-backed tests will be skipped.",
        RuntimeWarning,
        stacklevel=1,
    )

# Captured before the autouse fixture strips it from the environment.
_DATA_DIR = os.getenv("SE_EPHE_PATH")


def _have_pyswisseph() -> bool:
    return importlib.util.find_spec("swisseph") is not None


def _have_ephe_path() -> bool:
    return bool(_DATA_DIR and os.path.isdir(_DATA_DIR))


def pytest_collection_modifyitems(config, items):
    """Skip ``swiss``-marked tests unless pyswisseph and data files are present."""

    if _have_pyswisseph() and _have_ephe_path():
        return
    skip_swiss = pytest.mark.skip(
        reason="Swiss Ephemeris unavailable (no pyswisseph or SE_EPHE_PATH)."
    )
    for item in items:
        if "swiss" in item.keywords:
            item.add_marker(skip_swiss)


@pytest.fixture(autouse=True)
def _isolated_environment(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    for key in ("SE_EPHE_PATH", "LIBSWISS_BACKEND", "LIBSWISS_LIBRARY", "LOG_LEVEL"):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("LIBSWISS_HOME", str(tmp_path / "libswiss-home"))
    swiss_ephm.reset_default_session()
    yield
    swiss_ephm.reset_default_session()


@pytest.fixture
def ephe_data_dir() -> Path:
    """Directory holding real Swiss ephemeris files (``swiss`` tests only)."""

    if not _have_ephe_path():
        pytest.skip("SE_EPHE_PATH does not name an ephemeris directory.")
    return Path(_DATA_DIR)


@pytest.fixture
def ephe_dir(tmp_path: Path) -> Path:
    path = tmp_path / "ephe"
    path.mkdir()
    return path


@pytest.fixture
def engine() -> RecordingEngine:
    return RecordingEngine()


@pytest.fixture
def session(engine: RecordingEngine) -> SwissEphemeris:
    return SwissEphemeris(engine)


@pytest.fixture
def ready_session(session: SwissEphemeris, ephe_dir: Path) -> SwissEphemeris:
    session.set_ephe_path(ephe_dir)
    return session
