"""Duration and listen-address parsing for command-line and environment settings.

Durations use the compact unit notation common to container tooling
(`300ms`, `15s`, `1m30s`, `1.5h`) so probe timings can be copied verbatim
between manifests and this service.
"""

import re
from datetime import timedelta

_DURATION_UNIT_SECONDS: dict[str, float] = {
    "ns": 1e-9,
    "us": 1e-6,
    "µs": 1e-6,
    "μs": 1e-6,
    "ms": 1e-3,
    "s": 1.0,
    "m": 60.0,
    "h": 3600.0,
}
_DURATION_COMPONENT_PATTERN = re.compile(r"(\d+\.?\d*|\.\d+)(ns|us|µs|μs|ms|s|m|h)")

# Longest duration representable as a signed 64-bit nanosecond count.
DURATION_MAX = timedelta(microseconds=(2**63 - 1) // 1_000)


def config_parse_duration(value: str) -> timedelta:
    """Parse a unit-suffixed duration string into a timedelta.

    Args:
        value: Duration text such as `0`, `500ms`, `15s` or `1m30s`.

    Returns:
        timedelta: Parsed non-negative duration.

    Raises:
        ValueError: Raised when the text is blank, malformed, negative or longer
            than `DURATION_MAX`.
    """

    text = value.strip()
    if not text:
        raise ValueError("duration must not be blank")
    if text.startswith("-"):
        raise ValueError(f"duration must not be negative: {value!r}")
    if text.startswith("+"):
        text = text[1:]
    if text == "0":
        return timedelta(0)

    total_seconds = 0.0
    position = 0
    while position < len(text):
        component = _DURATION_COMPONENT_PATTERN.match(text, position)
        if component is None:
            raise ValueError(f"invalid duration {value!r}: expected a number followed by a unit")
        total_seconds += float(component.group(1)) * _DURATION_UNIT_SECONDS[component.group(2)]
        position = component.end()
    if total_seconds > DURATION_MAX.total_seconds():
        raise ValueError(f"duration {value!r} exceeds the maximum of {config_format_duration(DURATION_MAX)}")
    return timedelta(seconds=total_seconds)


def config_format_duration(value: timedelta) -> str:
    """Render a timedelta in the same compact notation accepted by the parser.

    Args:
        value: Duration to render.

    Returns:
        str: Compact representation such as `0s`, `250ms` or `1h2m3s`.
    """

    total_microseconds = value // timedelta(microseconds=1)
    if total_microseconds == 0:
        return "0s"
    sign = "-" if total_microseconds < 0 else ""
    total_microseconds = abs(total_microseconds)

    if total_microseconds < 1_000:
        return f"{sign}{total_microseconds}µs"
    if total_microseconds < 1_000_000:
        return f"{sign}{_config_trim_fraction(total_microseconds / 1_000)}ms"

    hours, remainder = divmod(total_microseconds, 3_600_000_000)
    minutes, remainder = divmod(remainder, 60_000_000)
    seconds = _config_trim_fraction(remainder / 1_000_000)
    if hours:
        return f"{sign}{hours}h{minutes}m{seconds}s"
    if minutes:
        return f"{sign}{minutes}m{seconds}s"
    return f"{sign}{seconds}s"


def _config_trim_fraction(number: float) -> str:
    return f"{number:.6f}".rstrip("0").rstrip(".")


def config_parse_listen_address(value: str) -> tuple[str, int]:
    """Split a `host:port` listen address into host and port.

    An empty host (`:8080`) means every interface. IPv6 hosts are written in
    brackets (`[::1]:8080`) and returned without them.

    Args:
        value: Listen address text.

    Returns:
        tuple[str, int]: Host (possibly empty) and TCP port.

    Raises:
        ValueError: Raised when the address has no port or the port is invalid.
    """

    text = value.strip()
    host, separator, port_text = text.rpartition(":")
    if not separator:
        raise ValueError(f"listen address {value!r} is missing a port")
    if host.startswith("["):
        if not host.endswith("]"):
            raise ValueError(f"listen address {value!r} has an unterminated IPv6 host")
        host = host[1:-1]
    elif ":" in host:
        raise ValueError(f"listen address {value!r} must enclose IPv6 hosts in brackets")
    if not (port_text.isascii() and port_text.isdigit()):
        raise ValueError(f"listen address {value!r} has an invalid port")
    port = int(port_text)
    if port > 65535:
        raise ValueError(f"listen address {value!r} has a port outside 0..65535")
    return host, port
