"""Health endpoint router reflecting the lifecycle readiness flag."""

from fastapi import APIRouter, Request, Response, status

from kubor_demo.api.responses import LoggedPlainTextResponse
from kubor_demo.lifecycle import ReadinessPort

HEALTH_PATH = "/healthz"
HEALTH_BODY_READY = "OK"
HEALTH_BODY_NOT_READY = "NOT_READY"


def api_create_health_router(readiness: ReadinessPort) -> APIRouter:
    """Create health-check router backed by the readiness flag.

    The route is registered without a method list so that it owns `/healthz`
    for every method, including ones the diagnostic route would otherwise
    catch.

    Args:
        readiness: Readiness flag read on every request.

    Returns:
        APIRouter: Router exposing the `/healthz` endpoint.

    Raises:
        ValueError: Raised when readiness is invalid.
    """

    if readiness is None:
        raise ValueError("readiness must not be None")

    router = APIRouter(tags=["health"])

    def api_health_status(request: Request) -> Response:
        """Return readiness state as plain text.

        Only GET is served; every other method is rejected with 405 so probes
        and humans cannot confuse a misconfigured check with a healthy one.

        Returns:
            Response: 200 `OK` when ready, 503 `NOT_READY` otherwise.
        """

        if request.method != "GET":
            return LoggedPlainTextResponse(
                "Method Not Allowed\n",
                status_code=status.HTTP_405_METHOD_NOT_ALLOWED,
                headers={"X-Content-Type-Options": "nosniff"},
            )
        if readiness.readiness_get():
            return LoggedPlainTextResponse(HEALTH_BODY_READY, status_code=status.HTTP_200_OK)
        return LoggedPlainTextResponse(HEALTH_BODY_NOT_READY, status_code=status.HTTP_503_SERVICE_UNAVAILABLE)

    router.add_route(HEALTH_PATH, api_health_status, include_in_schema=False)
    return router
