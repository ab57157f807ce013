"""Response classes and constants shared by the HTTP routers.

Every response class here logs a failed write instead of raising it: once the
client connection breaks there is nobody left to report the error to, so the
response simply ends incomplete.
"""

import json
import logging
from typing import Any

from fastapi.responses import JSONResponse, PlainTextResponse, Response
from starlette.types import Receive, Scope, Send

logger = logging.getLogger(__name__)

JSON_MEDIA_TYPE = "application/json"


def api_format_client(scope: Scope) -> str:
    """Render the remote address of a request for log messages.

    Args:
        scope: ASGI connection scope.

    Returns:
        str: `host:port` of the client, or `unknown` when the server did not report it.
    """

    client = scope.get("client")
    if not client:
        return "unknown"
    return f"{client[0]}:{client[1]}"


def api_status_forbids_body(status_code: int) -> bool:
    """Return whether HTTP forbids a response body for the given status.

    Args:
        status_code: Response status code.

    Returns:
        bool: True for informational responses, 204 and 304.
    """

    return status_code < 200 or status_code in (204, 304)


class _WriteFailureLoggingMixin:
    """Log transport errors raised while sending a response."""

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        try:
            await super().__call__(scope, receive, send)  # type: ignore[misc]
        except OSError as error:
            logger.error("ERROR writing response to %s: %s", api_format_client(scope), error)


class LoggedResponse(_WriteFailureLoggingMixin, Response):
    """Plain response that logs write failures."""


class LoggedPlainTextResponse(_WriteFailureLoggingMixin, PlainTextResponse):
    """Plain-text response that logs write failures."""


class IndentedJSONResponse(_WriteFailureLoggingMixin, JSONResponse):
    """JSON response rendered with a two-space indent and a trailing newline."""

    def render(self, content: Any) -> bytes:
        return (json.dumps(content, ensure_ascii=False, indent=2) + "\n").encode("utf-8")
