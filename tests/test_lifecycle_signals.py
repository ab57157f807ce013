"""Tests for termination signal handling and process termination."""

import logging
import signal
import sys
from collections.abc import Iterator

import pytest

import kubor_demo.lifecycle.signals as signals_module
from kubor_demo.lifecycle import (
    SIGNAL_EXIT_CODE,
    TERMINATION_SIGNALS,
    lifecycle_install_signal_handler,
    lifecycle_restore_signal_handlers,
    lifecycle_terminate_process,
)

pytestmark = pytest.mark.skipif(sys.platform == "win32", reason="POSIX signal delivery required")


@pytest.fixture
def exit_codes() -> Iterator[list[int]]:
    """Install the signal handler with a recording terminator for one test.

    Yields:
        list[int]: Exit codes the handler asked for, in order.
    """

    recorded: list[int] = []
    previous_handlers = lifecycle_install_signal_handler(terminator=recorded.append)
    yield recorded
    lifecycle_restore_signal_handlers(previous_handlers)


@pytest.mark.parametrize("termination_signal", [signal.SIGINT, signal.SIGTERM])
def test_lifecycle_signal_terminates_with_success_code(
    termination_signal: signal.Signals,
    exit_codes: list[int],
    caplog: pytest.LogCaptureFixture,
) -> None:
    """Terminate with exit code 0 and log the received signal.

    Args:
        termination_signal: Signal delivered to the process.
        exit_codes: Recording terminator output.
        caplog: Pytest log capture fixture.

    Raises:
        AssertionError: Raised when the handler does not terminate with 0.
    """

    with caplog.at_level(logging.INFO, logger="kubor_demo.lifecycle.signals"):
        signal.raise_signal(termination_signal)

    assert exit_codes == [SIGNAL_EXIT_CODE]
    assert f"Received {termination_signal.name} signal. Bye!" in caplog.text


def test_lifecycle_install_signal_handler_returns_previous_handlers() -> None:
    """Return the replaced handlers so they can be restored.

    Raises:
        AssertionError: Raised when handlers are not returned or restored.
    """

    def _sentinel_handler(_signal_number: int, _frame: object) -> None:
        return None

    original_handlers = {termination_signal: signal.getsignal(termination_signal) for termination_signal in TERMINATION_SIGNALS}
    try:
        for termination_signal in TERMINATION_SIGNALS:
            signal.signal(termination_signal, _sentinel_handler)

        previous_handlers = lifecycle_install_signal_handler(terminator=lambda _exit_code: None)

        assert set(previous_handlers) == set(TERMINATION_SIGNALS)
        assert all(handler is _sentinel_handler for handler in previous_handlers.values())
        assert signal.getsignal(signal.SIGTERM) is not _sentinel_handler

        lifecycle_restore_signal_handlers(previous_handlers)
        assert signal.getsignal(signal.SIGTERM) is _sentinel_handler
    finally:
        lifecycle_restore_signal_handlers(original_handlers)


def test_lifecycle_terminate_process_flushes_logging_then_exits(monkeypatch: pytest.MonkeyPatch) -> None:
    """Flush logging before ending the process with the requested code.

    Args:
        monkeypatch: Pytest monkeypatch fixture.

    Raises:
        AssertionError: Raised when the order or exit code differs.
    """

    calls: list[str] = []

    def _fake_exit(exit_code: int) -> None:
        calls.append(f"exit:{exit_code}")
        raise SystemExit(exit_code)

    monkeypatch.setattr(signals_module.logging, "shutdown", lambda: calls.append("shutdown"))
    monkeypatch.setattr(signals_module.os, "_exit", _fake_exit)

    with pytest.raises(SystemExit):
        lifecycle_terminate_process(7)

    assert calls == ["shutdown", "exit:7"]
