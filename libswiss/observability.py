"""Prometheus metric definitions for the binding."""

from __future__ import annotations

from collections.abc import Iterable

from prometheus_client import REGISTRY, CollectorRegistry, Counter, Histogram

__all__ = [
    "CALCULATION_DURATION",
    "CALCULATION_ERRORS",
    "ENGINE_CALLS",
    "LIFECYCLE_TRANSITIONS",
    "ensure_metrics_registered",
]


ENGINE_CALLS = Counter(
    "libswiss_engine_calls_total",
    "Total guarded operations forwarded to the Swiss Ephemeris engine.",
    ("operation",),
    registry=None,
)

CALCULATION_ERRORS = Counter(
    "libswiss_calculation_errors_total",
    "Computations the engine reported as failed, by return code.",
    ("code",),
    registry=None,
)

CALCULATION_DURATION = Histogram(
    "libswiss_calculation_duration_seconds",
    "Duration of swe_calc_ut calls.",
    ("body",),
    registry=None,
)

LIFECYCLE_TRANSITIONS = Counter(
    "libswiss_lifecycle_transitions_total",
    "Lifecycle transitions performed, by target state.",
    ("state",),
    registry=None,
)


def _iter_metrics() -> Iterable[Counter | Histogram]:
    yield ENGINE_CALLS
    yield CALCULATION_ERRORS
    yield CALCULATION_DURATION
    yield LIFECYCLE_TRANSITIONS


def ensure_metrics_registered(
    registry: CollectorRegistry | None = None,
) -> None:
    """Register the binding's metrics with ``registry`` if not already present."""

    target = registry or REGISTRY
    for metric in _iter_metrics():
        try:
            target.register(metric)
        except ValueError:
            # Prometheus raises when a metric name already exists in the registry.
            continue
