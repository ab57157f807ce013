"""Typed domain models shared across runtime layers.

This module provides the immutable identity of the running process and the
per-request view echoed back by the diagnostic route.
"""

import platform
from dataclasses import dataclass, field
from typing import Any

_MACHINE_ALIASES = {
    "x86_64": "amd64",
    "amd64": "amd64",
    "i386": "386",
    "i686": "386",
    "aarch64": "arm64",
    "arm64": "arm64",
}


@dataclass(frozen=True)
class RuntimeIdentity:
    """Build and platform identity fixed at process start.

    Attributes:
        branch: Build-time branch name.
        revision: Build-time revision identifier.
        platform: Operating system and architecture label, e.g. `linux-amd64`.
    """

    branch: str
    revision: str
    platform: str

    def domain_to_payload(self) -> dict[str, str]:
        """Return the JSON-ready representation of this identity.

        Returns:
            dict[str, str]: Mapping with `branch`, `revision` and `platform` keys.
        """

        return {
            "branch": self.branch,
            "revision": self.revision,
            "platform": self.platform,
        }


@dataclass(frozen=True)
class RequestSnapshot:
    """Read-only view of one incoming request.

    Multi-valued maps keep values in arrival order and are omitted from the
    payload when empty.

    Attributes:
        proto: Protocol label such as `HTTP/1.1`.
        host: Host as requested by the client, including the port if sent.
        method: Request method.
        request_uri: Raw path and query from the request line.
        headers: Canonical header name to values, excluding `Host`.
        form: Body form values followed by query values, per field.
        post_form: Form values decoded from a url-encoded request body.
    """

    proto: str
    host: str
    method: str
    request_uri: str
    headers: dict[str, tuple[str, ...]] = field(default_factory=dict)
    form: dict[str, tuple[str, ...]] = field(default_factory=dict)
    post_form: dict[str, tuple[str, ...]] = field(default_factory=dict)

    def domain_to_payload(self) -> dict[str, Any]:
        """Return the JSON-ready representation of this snapshot.

        Returns:
            dict[str, Any]: Mapping using wire field names; empty maps are left out.
        """

        payload: dict[str, Any] = {
            "proto": self.proto,
            "host": self.host,
            "method": self.method,
            "requestURI": self.request_uri,
        }
        for wire_name, values in (("headers", self.headers), ("form", self.form), ("postForm", self.post_form)):
            if values:
                payload[wire_name] = {name: list(values[name]) for name in sorted(values)}
        return payload


def domain_detect_platform(system_name: str | None = None, machine_name: str | None = None) -> str:
    """Build the `<os>-<arch>` platform label of the running interpreter.

    Args:
        system_name: Optional operating system name override.
        machine_name: Optional machine architecture override.

    Returns:
        str: Lowercase platform label such as `linux-amd64` or `darwin-arm64`.
    """

    resolved_system = (system_name if system_name is not None else platform.system()).strip().lower() or "unknown"
    resolved_machine = (machine_name if machine_name is not None else platform.machine()).strip().lower() or "unknown"
    return f"{resolved_system}-{_MACHINE_ALIASES.get(resolved_machine, resolved_machine)}"


def domain_canonical_header_name(name: str) -> str:
    """Return the canonical MIME form of a header name.

    The first letter and every letter following a hyphen are upper-cased,
    the rest lower-cased. Names containing spaces are returned unchanged.

    Args:
        name: Header name as received.

    Returns:
        str: Canonical header name, e.g. `Content-Type`.
    """

    if " " in name:
        return name
    return "-".join(part[:1].upper() + part[1:].lower() for part in name.split("-"))


def domain_group_pairs(pairs: list[tuple[str, str]]) -> dict[str, tuple[str, ...]]:
    """Group name/value pairs into a multi-valued mapping preserving order.

    Args:
        pairs: Ordered name/value pairs.

    Returns:
        dict[str, tuple[str, ...]]: Values per name in arrival order.
    """

    grouped: dict[str, list[str]] = {}
    for name, value in pairs:
        grouped.setdefault(name, []).append(value)
    return {name: tuple(values) for name, values in grouped.items()}
