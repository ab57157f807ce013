"""Server package running the HTTP responder alongside the lifecycle."""

from .runner import (
    SERVER_FAILURE_EXIT_CODE,
    BackgroundServer,
    ListenError,
    server_bind_socket,
    server_format_address,
)

__all__ = [
    "SERVER_FAILURE_EXIT_CODE",
    "BackgroundServer",
    "ListenError",
    "server_bind_socket",
    "server_format_address",
]
