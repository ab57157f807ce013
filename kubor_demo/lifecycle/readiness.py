"""Thread-safe readiness flag shared by the lifecycle and the health route."""

import threading

from .interfaces import ReadinessPort


class ReadinessFlag(ReadinessPort):
    """Monotonic boolean that starts false and flips to true exactly once.

    One writer (the lifecycle controller) and any number of concurrent readers
    (request handlers) share it. There is no operation that clears it.
    """

    def __init__(self) -> None:
        self._ready = threading.Event()

    def readiness_get(self) -> bool:
        """Return whether the service currently reports ready.

        Returns:
            bool: True once `readiness_set` has been called.
        """

        return self._ready.is_set()

    def readiness_set(self) -> None:
        """Mark the service ready. Calling it again has no effect.

        Returns:
            None: The flag is updated as a side effect.
        """

        self._ready.set()

    def readiness_wait(self, timeout: float | None = None) -> bool:
        """Block until the flag is set or the timeout expires.

        Args:
            timeout: Optional maximum wait in seconds.

        Returns:
            bool: Flag state when the wait ends.
        """

        return self._ready.wait(timeout)
