"""Lifecycle controller driving start-up delay, readiness and optional self-exit.

The controller runs once on the main thread:

1. wait `ready_after` (skipped entirely when zero),
2. flip the readiness flag,
3. run forever when `exit_after` is zero, otherwise wait `exit_after`,
4. hand the configured exit code back to the entrypoint.

Termination signals race against step 3/4 and always end the process with
code 0 if they arrive first; see `kubor_demo.lifecycle.signals`.
"""

import logging
import threading
from collections.abc import Callable
from datetime import timedelta

from kubor_demo.config import config_format_duration

from .interfaces import LifecyclePhase, ReadinessPort, WaitPrimitive

logger = logging.getLogger(__name__)


class LifecycleController:
    """Sequential, single-use lifecycle of the service process."""

    def __init__(
        self,
        readiness: ReadinessPort,
        wait_primitive: WaitPrimitive,
        ready_after: timedelta = timedelta(0),
        exit_after: timedelta | None = None,
        exit_code: int = 1,
    ):
        """Initialize lifecycle controller.

        Args:
            readiness: Readiness flag this controller is the sole writer of.
            wait_primitive: Cancellable wait used for every suspension.
            ready_after: Delay before the service reports ready.
            exit_after: Delay after readiness before returning; zero or None runs forever.
            exit_code: Exit code returned when the run phase completes.

        Raises:
            ValueError: Raised when dependencies are missing or durations are negative.
        """

        if readiness is None:
            raise ValueError("readiness must not be None")
        if wait_primitive is None:
            raise ValueError("wait_primitive must not be None")
        if ready_after < timedelta(0):
            raise ValueError("ready_after must not be negative")
        if exit_after is not None and exit_after < timedelta(0):
            raise ValueError("exit_after must not be negative")

        self._readiness = readiness
        self._wait_primitive = wait_primitive
        self._ready_after = ready_after
        self._exit_after = exit_after
        self._exit_code = exit_code
        self._phase = LifecyclePhase.STARTING
        self._phase_lock = threading.Lock()

    @property
    def phase(self) -> LifecyclePhase:
        """Return the current lifecycle phase."""

        with self._phase_lock:
            return self._phase

    def lifecycle_run(self, start_serving: Callable[[], None] | None = None) -> int:
        """Run the full lifecycle and return the exit code for the process.

        Args:
            start_serving: Optional callable that starts accepting requests. With a
                zero `ready_after` it is called after the readiness transition, so no
                request can observe NOT_READY; otherwise it is called before the wait.

        Returns:
            int: Configured exit code, once the run phase has ended.

        Raises:
            RuntimeError: Raised when the controller has already been started.
        """

        with self._phase_lock:
            if self._phase is not LifecyclePhase.STARTING:
                raise RuntimeError("lifecycle controller can only run once")
            self._phase = LifecyclePhase.WAITING

        self._lifecycle_wait_to_be_ready(start_serving)
        self._lifecycle_just_run()
        self._lifecycle_enter(LifecyclePhase.FINISHED)
        return self._exit_code

    def _lifecycle_wait_to_be_ready(self, start_serving: Callable[[], None] | None) -> None:
        if self._ready_after == timedelta(0):
            self._lifecycle_mark_ready()
            if start_serving is not None:
                start_serving()
            return

        if start_serving is not None:
            start_serving()
        logger.info("Waiting for %s to be ready...", config_format_duration(self._ready_after))
        self._wait_primitive.lifecycle_wait(self._ready_after.total_seconds())
        self._lifecycle_mark_ready()

    def _lifecycle_mark_ready(self) -> None:
        self._readiness.readiness_set()
        self._lifecycle_enter(LifecyclePhase.READY)
        logger.info("Service is ready")

    def _lifecycle_just_run(self) -> None:
        self._lifecycle_enter(LifecyclePhase.RUNNING)
        if self._exit_after is None or self._exit_after == timedelta(0):
            logger.info("Running for ever...")
            self._wait_primitive.lifecycle_wait_forever()
            return
        logger.info("Running for %s...", config_format_duration(self._exit_after))
        self._wait_primitive.lifecycle_wait(self._exit_after.total_seconds())

    def _lifecycle_enter(self, phase: LifecyclePhase) -> None:
        with self._phase_lock:
            self._phase = phase
