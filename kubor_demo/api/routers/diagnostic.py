"""Catch-all diagnostic router echoing runtime identity and request metadata."""

import logging

from fastapi import APIRouter, Request, Response, status

from kubor_demo.api.request_snapshot import (
    STATUS_CODE_QUERY_PARAMETER,
    api_build_request_snapshot,
    api_request_carries_form_body,
    api_resolve_status_override,
)
from kubor_demo.api.responses import (
    JSON_MEDIA_TYPE,
    IndentedJSONResponse,
    LoggedResponse,
    api_format_client,
    api_status_forbids_body,
)
from kubor_demo.domain import RuntimeIdentity

logger = logging.getLogger(__name__)

DIAGNOSTIC_PATH = "/{request_path:path}"


def api_create_diagnostic_router(runtime_identity: RuntimeIdentity) -> APIRouter:
    """Create the catch-all router that reflects every request back as JSON.

    Must be included after every other router since it matches all paths.

    Args:
        runtime_identity: Process identity reported in every response.

    Returns:
        APIRouter: Router matching every path and every method, standard or not.

    Raises:
        ValueError: Raised when runtime_identity is invalid.
    """

    if runtime_identity is None:
        raise ValueError("runtime_identity must not be None")

    router = APIRouter(tags=["diagnostic"])

    async def api_diagnostic_echo(request: Request) -> Response:
        """Return runtime identity and request snapshot as indented JSON.

        The `statusCode` query parameter overrides the response status when it
        holds an integer within [100, 999]; anything else is ignored.

        Returns:
            Response: JSON document with `runtime` and `request` fields.
        """

        status_values = request.query_params.getlist(STATUS_CODE_QUERY_PARAMETER)
        status_code = api_resolve_status_override(status_values[0] if status_values else None) or status.HTTP_200_OK

        body = await request.body() if api_request_carries_form_body(request) else b""
        snapshot = api_build_request_snapshot(request, body)

        if api_status_forbids_body(status_code):
            logger.error(
                "ERROR writing response to %s: status %d does not allow a body",
                api_format_client(request.scope),
                status_code,
            )
            return LoggedResponse(status_code=status_code, media_type=JSON_MEDIA_TYPE)

        payload = {
            "runtime": runtime_identity.domain_to_payload(),
            "request": snapshot.domain_to_payload(),
        }
        return IndentedJSONResponse(content=payload, status_code=status_code)

    router.add_route(DIAGNOSTIC_PATH, api_diagnostic_echo, include_in_schema=False)
    return router
