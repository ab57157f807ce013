"""Tests for socket binding and the background uvicorn server."""

import socket
import time

import httpx
import pytest

from kubor_demo.api import create_api_application
from kubor_demo.domain import RuntimeIdentity
from kubor_demo.lifecycle import ReadinessFlag
from kubor_demo.server import BackgroundServer, ListenError, server_bind_socket, server_format_address


def _wait_until_started(server: BackgroundServer, timeout: float = 10.0) -> None:
    """Poll until uvicorn reports start-up completion.

    Args:
        server: Started background server.
        timeout: Maximum seconds to wait.

    Raises:
        AssertionError: Raised when the server does not start in time.
    """

    deadline = time.monotonic() + timeout
    while not server.started:
        assert time.monotonic() < deadline, "server did not start in time"
        time.sleep(0.02)


def test_server_bind_socket_picks_free_port() -> None:
    """Bind an ephemeral port on the loopback interface."""

    listen_socket = server_bind_socket("127.0.0.1", 0)
    try:
        host, port = listen_socket.getsockname()[:2]
        assert host == "127.0.0.1"
        assert port > 0
        assert server_format_address(listen_socket) == f"127.0.0.1:{port}"
    finally:
        listen_socket.close()


def test_server_bind_socket_raises_listen_error_when_address_is_busy() -> None:
    """Raise ListenError when another socket already listens on the port.

    Raises:
        AssertionError: Raised when binding a busy port succeeds.
    """

    occupying_socket = socket.create_server(("127.0.0.1", 0))
    busy_port = occupying_socket.getsockname()[1]
    try:
        with pytest.raises(ListenError, match=f"Cannot listen to 127.0.0.1:{busy_port}"):
            server_bind_socket("127.0.0.1", busy_port)
    finally:
        occupying_socket.close()


def test_server_serves_health_and_diagnostic_routes_over_http() -> None:
    """Serve real HTTP requests from the background thread until stopped.

    Returns:
        None: Assertions validate responses from a live server.

    Raises:
        AssertionError: Raised when responses differ or the server stops the process.
    """

    readiness = ReadinessFlag()
    application = create_api_application(
        readiness=readiness,
        runtime_identity=RuntimeIdentity(branch="main", revision="0a1b2c3", platform="linux-amd64"),
    )
    terminations: list[int] = []
    server = BackgroundServer(
        application=application,
        listen_socket=server_bind_socket("127.0.0.1", 0),
        terminator=terminations.append,
    )
    base_url = f"http://{server.address}"

    server.server_start()
    try:
        _wait_until_started(server)
        with httpx.Client(base_url=base_url, timeout=5.0) as client:
            assert client.get("/healthz").status_code == 503
            readiness.readiness_set()
            health_response = client.get("/healthz")
            assert health_response.status_code == 200
            assert health_response.text == "OK"

            diagnostic_response = client.post("/echo?statusCode=202", data={"k": "v"})
            assert diagnostic_response.status_code == 202
            request_payload = diagnostic_response.json()["request"]
            assert request_payload["host"] == server.address
            assert request_payload["postForm"] == {"k": ["v"]}

            no_content_response = client.get("/?statusCode=204")
            assert no_content_response.status_code == 204
            assert no_content_response.content == b""
    finally:
        server.server_stop()

    assert terminations == []


def test_server_rejects_missing_dependencies() -> None:
    """Reject construction without an application or socket.

    Raises:
        AssertionError: Raised when invalid dependencies are accepted.
    """

    with socket.socket() as unbound_socket, pytest.raises(ValueError, match="application must not be None"):
        BackgroundServer(application=None, listen_socket=unbound_socket)  # type: ignore[arg-type]
