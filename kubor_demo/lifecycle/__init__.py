"""Lifecycle package for readiness state, the run sequence and signal handling."""

from .controller import LifecycleController
from .interfaces import LifecyclePhase, ReadinessPort, WaitPrimitive
from .readiness import ReadinessFlag
from .signals import (
    SIGNAL_EXIT_CODE,
    TERMINATION_SIGNALS,
    ProcessTerminator,
    lifecycle_install_signal_handler,
    lifecycle_restore_signal_handlers,
    lifecycle_terminate_process,
)
from .waiting import EventWaitPrimitive

__all__ = [
    "EventWaitPrimitive",
    "LifecycleController",
    "LifecyclePhase",
    "ProcessTerminator",
    "ReadinessFlag",
    "ReadinessPort",
    "SIGNAL_EXIT_CODE",
    "TERMINATION_SIGNALS",
    "WaitPrimitive",
    "lifecycle_install_signal_handler",
    "lifecycle_restore_signal_handlers",
    "lifecycle_terminate_process",
]
