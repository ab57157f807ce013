"""Application bootstrap wiring for the HTTP responder and the lifecycle."""

from fastapi import FastAPI

from kubor_demo.api import create_api_application
from kubor_demo.config import AppSettings
from kubor_demo.domain import RuntimeIdentity, domain_detect_platform
from kubor_demo.lifecycle import (
    EventWaitPrimitive,
    LifecycleController,
    ProcessTerminator,
    ReadinessPort,
    WaitPrimitive,
    lifecycle_terminate_process,
)
from kubor_demo.server import BackgroundServer, server_bind_socket


def bootstrap_create_runtime_identity(settings: AppSettings) -> RuntimeIdentity:
    """Build the process identity from build-time settings and the running platform.

    Args:
        settings: Validated runtime settings carrying branch and revision.

    Returns:
        RuntimeIdentity: Immutable identity reported by the diagnostic route.
    """

    return RuntimeIdentity(
        branch=settings.branch,
        revision=settings.revision,
        platform=domain_detect_platform(),
    )


def bootstrap_create_application(settings: AppSettings, readiness: ReadinessPort) -> FastAPI:
    """Assemble the HTTP application around the shared readiness flag.

    Args:
        settings: Validated runtime settings.
        readiness: Readiness flag shared with the lifecycle controller.

    Returns:
        FastAPI: Fully initialized FastAPI application instance.
    """

    return create_api_application(
        readiness=readiness,
        runtime_identity=bootstrap_create_runtime_identity(settings),
    )


def bootstrap_create_lifecycle_controller(
    settings: AppSettings,
    readiness: ReadinessPort,
    wait_primitive: WaitPrimitive | None = None,
) -> LifecycleController:
    """Build the lifecycle controller from configured delays and exit code.

    Args:
        settings: Validated runtime settings.
        readiness: Readiness flag the controller will set.
        wait_primitive: Optional wait primitive; a fresh event-based one by default.

    Returns:
        LifecycleController: Controller ready to run once.
    """

    return LifecycleController(
        readiness=readiness,
        wait_primitive=wait_primitive or EventWaitPrimitive(),
        ready_after=settings.ready_after,
        exit_after=settings.exit_after,
        exit_code=settings.exit_code,
    )


def bootstrap_create_background_server(
    settings: AppSettings,
    application: FastAPI,
    terminator: ProcessTerminator = lifecycle_terminate_process,
) -> BackgroundServer:
    """Bind the listen address and wrap the application in a background server.

    Args:
        settings: Validated runtime settings carrying the listen address.
        application: ASGI application to serve.
        terminator: Callable ending the process if serving stops unexpectedly.

    Returns:
        BackgroundServer: Server bound to the listen address, not yet started.

    Raises:
        ListenError: Raised when the listen address cannot be bound.
    """

    listen_socket = server_bind_socket(settings.listen_host, settings.listen_port)
    return BackgroundServer(application=application, listen_socket=listen_socket, terminator=terminator)
