"""Cancellable wait primitive backing every lifecycle suspension."""

import threading
import time

from .interfaces import WaitPrimitive

# Bounded waits are split into slices no longer than this, keeping every
# timeout handed to the platform well inside `threading.TIMEOUT_MAX`.
WAIT_SLICE_SECONDS = 3600.0


class EventWaitPrimitive(WaitPrimitive):
    """Wait primitive built on `threading.Event`.

    Waits on the main thread stay interruptible, so signal handlers run while
    the lifecycle is suspended. Cancelling is permanent: once cancelled, every
    wait returns immediately.
    """

    def __init__(self) -> None:
        self._cancelled = threading.Event()

    def lifecycle_wait(self, seconds: float) -> bool:
        deadline = time.monotonic() + max(seconds, 0.0)
        while True:
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                return not self._cancelled.is_set()
            if self._cancelled.wait(min(remaining, WAIT_SLICE_SECONDS)):
                return False

    def lifecycle_wait_forever(self) -> None:
        self._cancelled.wait()

    def lifecycle_cancel(self) -> None:
        self._cancelled.set()

    @property
    def cancelled(self) -> bool:
        """Return whether the primitive has been cancelled."""

        return self._cancelled.is_set()
