"""Typed interfaces for lifecycle-layer responsibilities."""

from enum import Enum
from typing import Protocol


class LifecyclePhase(str, Enum):
    """Observable phase of the lifecycle controller."""

    STARTING = "starting"
    WAITING = "waiting"
    READY = "ready"
    RUNNING = "running"
    FINISHED = "finished"


class ReadinessPort(Protocol):
    """Port definition for the shared readiness flag."""

    def readiness_get(self) -> bool:
        """Return whether the service currently reports ready.

        Returns:
            bool: True once the lifecycle has marked the service ready.
        """

    def readiness_set(self) -> None:
        """Mark the service ready. The transition is one-way.

        Returns:
            None: The flag is updated as a side effect.
        """


class WaitPrimitive(Protocol):
    """Port definition for the cancellable suspensions used by the lifecycle."""

    def lifecycle_wait(self, seconds: float) -> bool:
        """Suspend the caller for a bounded duration.

        Args:
            seconds: Duration to wait.

        Returns:
            bool: True when the full duration elapsed, False when cancelled.
        """

    def lifecycle_wait_forever(self) -> None:
        """Suspend the caller until the wait is cancelled.

        Returns:
            None: Returns only after cancellation.
        """

    def lifecycle_cancel(self) -> None:
        """Cancel current and future waits.

        Returns:
            None: Waiters are released as a side effect.
        """
