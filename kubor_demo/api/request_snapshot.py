"""Request snapshot construction from framework request objects."""

import re
from urllib.parse import parse_qsl

from fastapi import Request

from kubor_demo.domain import RequestSnapshot, domain_canonical_header_name, domain_group_pairs

FORM_BODY_METHODS = frozenset({"POST", "PUT", "PATCH"})
FORM_URLENCODED_MEDIA_TYPE = "application/x-www-form-urlencoded"
STATUS_CODE_QUERY_PARAMETER = "statusCode"
STATUS_CODE_MIN = 100
STATUS_CODE_MAX = 999

_STATUS_CODE_PATTERN = re.compile(r"[+-]?[0-9]+")


def api_request_carries_form_body(request: Request) -> bool:
    """Return whether the request body should be decoded as form fields.

    Args:
        request: Incoming request.

    Returns:
        bool: True for POST, PUT and PATCH requests with a url-encoded body.
    """

    if request.method not in FORM_BODY_METHODS:
        return False
    media_type = request.headers.get("content-type", "").split(";", 1)[0].strip().lower()
    return media_type == FORM_URLENCODED_MEDIA_TYPE


def api_build_request_snapshot(request: Request, body: bytes = b"") -> RequestSnapshot:
    """Build the read-only view of one request echoed by the diagnostic route.

    Args:
        request: Incoming request.
        body: Raw request body; decoded only when it carries url-encoded form fields.

    Returns:
        RequestSnapshot: Fresh snapshot of protocol, host, method, URI, headers and form fields.
    """

    scope = request.scope
    raw_path = scope.get("raw_path") or request.url.path.encode("utf-8")
    raw_path = raw_path.split(b"?", 1)[0]
    query_string: bytes = scope.get("query_string", b"")
    request_uri = raw_path.decode("latin-1")
    if query_string:
        request_uri = f"{request_uri}?{query_string.decode('latin-1')}"

    header_pairs: list[tuple[str, str]] = []
    host = ""
    for raw_name, raw_value in request.headers.raw:
        name = raw_name.decode("latin-1")
        value = raw_value.decode("latin-1")
        if name.lower() == "host":
            host = host or value
            continue
        header_pairs.append((domain_canonical_header_name(name), value))
    if not host and scope.get("server"):
        server_host, server_port = scope["server"][0], scope["server"][1]
        host = f"{server_host}:{server_port}" if server_port is not None else server_host

    post_form_pairs: list[tuple[str, str]] = []
    if body and api_request_carries_form_body(request):
        post_form_pairs = parse_qsl(body.decode("utf-8", errors="replace"), keep_blank_values=True)
    query_pairs = parse_qsl(query_string.decode("latin-1"), keep_blank_values=True)

    return RequestSnapshot(
        proto=f"HTTP/{scope.get('http_version', '1.1')}",
        host=host,
        method=request.method,
        request_uri=request_uri,
        headers=domain_group_pairs(header_pairs),
        form=domain_group_pairs(post_form_pairs + query_pairs),
        post_form=domain_group_pairs(post_form_pairs),
    )


def api_resolve_status_override(raw_value: str | None) -> int | None:
    """Validate the optional status-code override of the diagnostic route.

    Args:
        raw_value: Raw query parameter value, if present.

    Returns:
        int | None: Status code within [100, 999], or None when absent or invalid.
    """

    if raw_value is None or not _STATUS_CODE_PATTERN.fullmatch(raw_value):
        return None
    status_code = int(raw_value)
    if STATUS_CODE_MIN <= status_code <= STATUS_CODE_MAX:
        return status_code
    return None
