"""API router package for endpoint composition."""

from .diagnostic import api_create_diagnostic_router
from .health import api_create_health_router

__all__ = ["api_create_diagnostic_router", "api_create_health_router"]
