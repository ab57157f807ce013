"""Background uvicorn server bound to a pre-opened listen socket.

The socket is bound synchronously on the calling thread so that a busy or
forbidden address fails start-up before the lifecycle begins. Serving then
happens on a daemon thread; uvicorn does not install signal handlers there,
which leaves SIGINT and SIGTERM to the lifecycle signal handler.
"""

import logging
import socket
import threading

import uvicorn
from fastapi import FastAPI

from kubor_demo.lifecycle import ProcessTerminator, lifecycle_terminate_process

logger = logging.getLogger(__name__)

SERVER_FAILURE_EXIT_CODE = 2
SERVER_THREAD_NAME = "http-responder"


class ListenError(OSError):
    """Raised when the HTTP listen address cannot be bound."""


def server_bind_socket(host: str, port: int) -> socket.socket:
    """Open a listening TCP socket for the given host and port.

    An empty host listens on every interface, dual-stack where the platform
    supports it.

    Args:
        host: Interface address; empty for all interfaces.
        port: TCP port; zero picks a free port.

    Returns:
        socket.socket: Bound, listening socket.

    Raises:
        ListenError: Raised when the address cannot be bound.
    """

    label = f"[{host}]:{port}" if ":" in host else f"{host}:{port}"
    try:
        if not host and socket.has_dualstack_ipv6():
            return socket.create_server(("", port), family=socket.AF_INET6, dualstack_ipv6=True)
        if ":" in host:
            return socket.create_server((host, port), family=socket.AF_INET6)
        return socket.create_server((host or "0.0.0.0", port), family=socket.AF_INET)
    except OSError as error:
        raise ListenError(f"Cannot listen to {label}: {error}") from error


def server_format_address(listen_socket: socket.socket) -> str:
    """Render the bound address of a socket as `host:port`.

    Args:
        listen_socket: Bound socket.

    Returns:
        str: Bound address, with brackets around IPv6 hosts.
    """

    bound_address = listen_socket.getsockname()
    host, port = bound_address[0], bound_address[1]
    if listen_socket.family == socket.AF_INET6:
        return f"[{host}]:{port}"
    return f"{host}:{port}"


class BackgroundServer:
    """uvicorn server running on a daemon thread for the life of the process."""

    def __init__(
        self,
        application: FastAPI,
        listen_socket: socket.socket,
        terminator: ProcessTerminator = lifecycle_terminate_process,
    ):
        """Initialize background server.

        Args:
            application: ASGI application to serve.
            listen_socket: Bound, listening socket from `server_bind_socket`.
            terminator: Callable ending the process when serving stops unexpectedly.

        Raises:
            ValueError: Raised when application or listen_socket is None.
        """

        if application is None:
            raise ValueError("application must not be None")
        if listen_socket is None:
            raise ValueError("listen_socket must not be None")

        self._listen_socket = listen_socket
        self._terminator = terminator
        self._stop_requested = threading.Event()
        self._server = uvicorn.Server(
            uvicorn.Config(
                application,
                log_config=None,
                lifespan="off",
                access_log=True,
            )
        )
        self._thread = threading.Thread(target=self._server_serve, name=SERVER_THREAD_NAME, daemon=True)

    @property
    def address(self) -> str:
        """Return the bound listen address as `host:port`."""

        return server_format_address(self._listen_socket)

    @property
    def started(self) -> bool:
        """Return whether uvicorn has finished start-up and accepts connections."""

        return bool(self._server.started)

    def server_start(self) -> None:
        """Start serving on the background thread.

        Returns:
            None: The server thread is started as a side effect.
        """

        logger.info("Listen to %s...", self.address)
        self._thread.start()

    def server_stop(self, timeout: float | None = 5.0) -> None:
        """Ask uvicorn to exit and wait for the server thread.

        Args:
            timeout: Maximum seconds to wait for the thread.

        Returns:
            None: The server is stopped as a side effect.
        """

        self._stop_requested.set()
        self._server.should_exit = True
        if self._thread.is_alive():
            self._thread.join(timeout)
        self._listen_socket.close()

    def _server_serve(self) -> None:
        try:
            self._server.run(sockets=[self._listen_socket])
        finally:
            if not self._stop_requested.is_set():
                logger.critical("HTTP responder on %s stopped unexpectedly", self.address)
                self._terminator(SERVER_FAILURE_EXIT_CODE)
