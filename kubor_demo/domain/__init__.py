"""Domain models used across application layer boundaries."""

from .models import (
    RequestSnapshot,
    RuntimeIdentity,
    domain_canonical_header_name,
    domain_detect_platform,
    domain_group_pairs,
)

__all__ = [
    "RequestSnapshot",
    "RuntimeIdentity",
    "domain_canonical_header_name",
    "domain_detect_platform",
    "domain_group_pairs",
]
