"""Configure-once / use / close-once protocol for the process-wide engine.

The Swiss Ephemeris keeps its search path, open files and scratch buffers in
static storage.  :class:`EngineLifecycle` is the single gate in front of that
state: it moves ``UNINITIALIZED -> READY`` on the first successful
configuration, ``-> CLOSED`` on the first teardown, and refuses every other
call outside ``READY``.  Both transitions run their side effect under one
re-entrant lock, so concurrent callers observe exactly one engine call.

One lifecycle exists per process (:func:`process_lifecycle`); every
:class:`~libswiss.session.SwissEphemeris` goes through it.
"""

from __future__ import annotations

import logging
import os
import threading
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Literal

from .exceptions import InvalidEphemerisPathError, NotConfiguredError, UsedAfterCloseError
from .observability import ENGINE_CALLS, LIFECYCLE_TRANSITIONS

if TYPE_CHECKING:
    from .engine import RawEngine

__all__ = [
    "EPHE_PATH_ENV_VAR",
    "EngineLifecycle",
    "LifecycleState",
    "PathSelection",
    "process_lifecycle",
    "reset_process_lifecycle",
    "select_ephe_path",
]

LOG = logging.getLogger(__name__)

EPHE_PATH_ENV_VAR = "SE_EPHE_PATH"


class LifecycleState(str, Enum):
    UNINITIALIZED = "uninitialized"
    READY = "ready"
    CLOSED = "closed"


@dataclass(frozen=True, slots=True)
class PathSelection:
    """Outcome of the one-time path decision.

    ``engine_path`` is what the engine is told (``None`` lets it resolve its
    own default, which honours ``SE_EPHE_PATH``); ``configured`` is the path
    reported back by :meth:`EngineLifecycle.ephe_path`.
    """

    engine_path: str | None
    configured: str | None
    source: Literal["environment", "explicit", "default"]


def select_ephe_path(path: str | os.PathLike[str] | None) -> PathSelection:
    """Decide which ephemeris path the engine should use.

    An ``SE_EPHE_PATH`` environment variable wins and ``path`` is ignored.
    Otherwise an explicit ``path`` must be an existing directory.
    """

    override = os.environ.get(EPHE_PATH_ENV_VAR)
    if override is not None:
        if path is not None:
            LOG.debug(
                "%s is set; ignoring explicit ephemeris path %s", EPHE_PATH_ENV_VAR, path
            )
        return PathSelection(None, override or None, "environment")
    if path is None:
        return PathSelection(None, None, "default")
    candidate = os.fspath(path)
    if not Path(candidate).is_dir():
        raise InvalidEphemerisPathError(f"Ephemeris path is not a directory: {candidate}")
    return PathSelection(candidate, candidate, "explicit")


class EngineLifecycle:
    """Thread-safe lifecycle state machine owning the configured engine."""

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._state = LifecycleState.UNINITIALIZED
        self._ephe_path: str | None = None
        self._engine: RawEngine | None = None

    @property
    def state(self) -> LifecycleState:
        return self._state

    @property
    def ephe_path(self) -> str | None:
        return self._ephe_path

    @property
    def engine(self) -> RawEngine | None:
        """The engine bound by the first configuration, if any."""
        return self._engine

    def configure(
        self,
        path: str | os.PathLike[str] | None,
        bind: Callable[[PathSelection], RawEngine],
    ) -> bool:
        """Run ``bind`` with the selected path on the first call only.

        ``bind`` configures an engine and returns it; that engine serves every
        later guarded call.  Returns ``True`` when this call performed the
        transition.  Later calls are no-ops whatever their arguments.  A
        rejected path or a failing ``bind`` leaves the lifecycle uninitialized.
        """

        with self._lock:
            if self._state is LifecycleState.CLOSED:
                raise UsedAfterCloseError("set_ephe_path")
            if self._state is LifecycleState.READY:
                LOG.debug("Ephemeris path already configured; ignoring %r", path)
                return False
            selection = select_ephe_path(path)
            self._engine = bind(selection)
            self._ephe_path = selection.configured
            self._state = LifecycleState.READY
        LIFECYCLE_TRANSITIONS.labels(state=LifecycleState.READY.value).inc()
        LOG.info(
            "Swiss ephemeris configured (source=%s, path=%s)",
            selection.source,
            selection.configured or "(engine default)",
        )
        return True

    def teardown(self) -> bool:
        """Move to ``CLOSED`` once, closing the engine if it was in use."""

        with self._lock:
            if self._state is LifecycleState.CLOSED:
                return False
            engine = self._engine if self._state is LifecycleState.READY else None
            self._state = LifecycleState.CLOSED
            try:
                if engine is not None:
                    engine.close()
            finally:
                LIFECYCLE_TRANSITIONS.labels(state=LifecycleState.CLOSED.value).inc()
                LOG.info("Swiss ephemeris closed")
        return True

    def require_ready(self, operation: str) -> None:
        state = self._state
        if state is LifecycleState.CLOSED:
            raise UsedAfterCloseError(operation)
        if state is LifecycleState.UNINITIALIZED:
            raise NotConfiguredError(operation)

    @contextmanager
    def guard(self, operation: str) -> Iterator[RawEngine]:
        """Hold the engine lock for one ``READY``-only operation."""

        with self._lock:
            self.require_ready(operation)
            ENGINE_CALLS.labels(operation=operation).inc()
            yield self._engine


_process_lock = threading.Lock()
_process: EngineLifecycle | None = None


def process_lifecycle() -> EngineLifecycle:
    """Return the lifecycle shared by every session in this process."""

    global _process
    with _process_lock:
        if _process is None:
            _process = EngineLifecycle()
        return _process


def reset_process_lifecycle() -> None:
    """For tests: forget the process lifecycle so the next caller starts fresh."""

    global _process
    with _process_lock:
        _process = None
