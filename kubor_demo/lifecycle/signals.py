"""Termination signal handling that ends the process immediately.

SIGINT and SIGTERM both end the process with exit code 0, whatever the
lifecycle or the HTTP responder are doing at that moment. This races with the
lifecycle's own completion; an operator-requested shutdown wins whenever it
arrives first.
"""

import logging
import os
import signal
from collections.abc import Callable
from types import FrameType
from typing import Any, NoReturn

logger = logging.getLogger(__name__)

SIGNAL_EXIT_CODE = 0
TERMINATION_SIGNALS: tuple[signal.Signals, ...] = (signal.SIGINT, signal.SIGTERM)

ProcessTerminator = Callable[[int], Any]


def lifecycle_terminate_process(exit_code: int) -> NoReturn:
    """End the process right away with the given exit code.

    Log handlers are flushed first; atexit hooks, thread joins and pending
    work are skipped.

    Args:
        exit_code: Process exit status.
    """

    logging.shutdown()
    os._exit(exit_code)


def lifecycle_install_signal_handler(
    terminator: ProcessTerminator = lifecycle_terminate_process,
) -> dict[signal.Signals, Any]:
    """Register the termination handler for SIGINT and SIGTERM.

    Must be called from the main thread.

    Args:
        terminator: Callable that ends the process with the given exit code.

    Returns:
        dict[signal.Signals, Any]: Previously installed handlers, per signal.

    Raises:
        ValueError: Raised when called outside the main thread.
    """

    def _lifecycle_handle_signal(signal_number: int, _frame: FrameType | None) -> None:
        logger.info("Received %s signal. Bye!", signal.Signals(signal_number).name)
        terminator(SIGNAL_EXIT_CODE)

    previous_handlers: dict[signal.Signals, Any] = {}
    for termination_signal in TERMINATION_SIGNALS:
        previous_handlers[termination_signal] = signal.signal(termination_signal, _lifecycle_handle_signal)
    return previous_handlers


def lifecycle_restore_signal_handlers(previous_handlers: dict[signal.Signals, Any]) -> None:
    """Reinstall handlers returned by `lifecycle_install_signal_handler`.

    Args:
        previous_handlers: Handlers to restore, per signal.
    """

    for termination_signal, handler in previous_handlers.items():
        signal.signal(termination_signal, handler if handler is not None else signal.SIG_DFL)
