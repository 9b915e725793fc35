"""End-to-end checks against the real Swiss Ephemeris through pyswisseph."""

from __future__ import annotations

import math
from datetime import UTC, datetime

import pytest

from libswiss.bodies import Body, FileSlot, Flag
from libswiss.engine import SwissephEngine
from libswiss.exceptions import CalculationError, PreconditionError
from libswiss.results import BodyResult, EclipticNutationResult
from libswiss.session import SwissEphemeris

pytest.importorskip("swisseph")


@pytest.fixture
def live_session():
    session = SwissEphemeris(SwissephEngine())
    session.set_ephe_path()
    yield session
    session.close()


def test_sun_on_1991_10_13(live_session: SwissEphemeris) -> None:
    jd = live_session.utc_to_julian_day(datetime(1991, 10, 13, 20, 0, 0, tzinfo=UTC))
    assert jd == pytest.approx(2448543.333333, abs=1e-6)

    result = live_session.calc_ut(jd, Body.SUN, Flag.HIGH_PRECISION_SPEED)

    assert isinstance(result, BodyResult)
    assert all(math.isfinite(value) for value in result.pos + result.vel)
    longitude, latitude, distance = result.pos
    assert 195.0 < longitude < 205.0
    assert abs(latitude) < 0.01
    assert 0.98 < distance < 1.01
    assert 0.9 < result.vel[0] < 1.1
    assert live_session.get_planet_name(Body.SUN) == "Sun"


def test_julian_day_is_deterministic(live_session: SwissEphemeris) -> None:
    moment = datetime(2017, 8, 21, 18, 25, 31, 250_000, tzinfo=UTC)

    first = live_session.utc_to_julian_day(moment)
    second = live_session.utc_to_julian_day(moment)

    assert first.hex() == second.hex()


def test_ecliptic_nutation(live_session: SwissEphemeris) -> None:
    result = live_session.calc_ut(2451545.0, Body.ECLIPTIC_NUTATION)

    assert isinstance(result, EclipticNutationResult)
    assert 23.4 < result.ecliptic_true_obliquity < 23.5
    assert 23.4 < result.ecliptic_mean_obliquity < 23.5
    assert abs(result.nutation_lng) < 0.01


def test_date_outside_coverage_is_recoverable(live_session: SwissEphemeris) -> None:
    with pytest.raises(CalculationError) as excinfo:
        live_session.calc_ut(1e10, Body.SUN, Flag.MOSHIER_EPHEMERIS)

    assert not isinstance(excinfo.value, PreconditionError)
    assert excinfo.value.code != 0
    assert excinfo.value.message
    assert isinstance(live_session.calc_ut(2451545.0, Body.MOON, Flag.MOSHIER_EPHEMERIS), BodyResult)


def test_version_and_library_path(live_session: SwissEphemeris) -> None:
    assert live_session.version()[:1].isdigit()
    assert live_session.get_library_path()


@pytest.mark.swiss
def test_loaded_file_metadata(ephe_data_dir) -> None:
    session = SwissEphemeris(SwissephEngine())
    session.set_ephe_path(ephe_data_dir)
    try:
        session.calc_ut(2451545.0, Body.SUN, Flag.SWISS_EPHEMERIS)
        data = session.get_current_file_data(FileSlot.PLANET)
    finally:
        session.close()

    assert data is not None
    assert data.filepath.endswith(".se1")
    assert data.start_date < 2451545.0 < data.end_date
    assert data.ephemeris_num > 0
