"""Tests for API health endpoint behavior.

These tests validate the plain-text readiness responses for both flag states
and the rejection of every method other than GET.
"""

import pytest
from fastapi.testclient import TestClient

from kubor_demo.api.application import create_api_application
from kubor_demo.domain import RuntimeIdentity
from kubor_demo.lifecycle import ReadinessFlag


def _build_client(ready: bool) -> TestClient:
    """Create a test client around a readiness flag in the requested state.

    Args:
        ready: Whether the flag should already be set.

    Returns:
        TestClient: Client bound to a fresh application.
    """

    readiness = ReadinessFlag()
    if ready:
        readiness.readiness_set()
    application = create_api_application(
        readiness=readiness,
        runtime_identity=RuntimeIdentity(branch="development", revision="latest", platform="linux-amd64"),
    )
    return TestClient(application)


def test_api_health_returns_ok_when_ready() -> None:
    """Return HTTP 200 and `OK` once the readiness flag is set.

    Returns:
        None: Assertions validate response behavior.

    Raises:
        AssertionError: Raised when response does not match expected payload.
    """

    response = _build_client(ready=True).get("/healthz")

    assert response.status_code == 200
    assert response.text == "OK"
    assert response.headers["content-type"].startswith("text/plain")


def test_api_health_returns_service_unavailable_when_not_ready() -> None:
    """Return HTTP 503 and `NOT_READY` while the readiness flag is unset.

    Returns:
        None: Assertions validate response behavior.

    Raises:
        AssertionError: Raised when response does not match expected payload.
    """

    response = _build_client(ready=False).get("/healthz")

    assert response.status_code == 503
    assert response.text == "NOT_READY"
    assert response.headers["content-type"].startswith("text/plain")


def test_api_health_follows_flag_transition() -> None:
    """Switch from 503 to 200 when the flag flips on a live application."""

    readiness = ReadinessFlag()
    client = TestClient(
        create_api_application(
            readiness=readiness,
            runtime_identity=RuntimeIdentity(branch="development", revision="latest", platform="linux-amd64"),
        )
    )

    assert client.get("/healthz").status_code == 503
    readiness.readiness_set()
    assert client.get("/healthz").status_code == 200


@pytest.mark.parametrize("ready", [True, False])
@pytest.mark.parametrize(
    "method", ["POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS", "TRACE", "PROPFIND", "PURGE"]
)
def test_api_health_rejects_non_get_methods(method: str, ready: bool) -> None:
    """Return HTTP 405 for every non-GET method regardless of readiness.

    Args:
        method: HTTP method to send.
        ready: Readiness flag state.

    Raises:
        AssertionError: Raised when a non-GET method is served.
    """

    response = _build_client(ready=ready).request(method, "/healthz")

    assert response.status_code == 405
    if method != "HEAD":
        assert response.text == "Method Not Allowed\n"
