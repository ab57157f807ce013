"""FastAPI application factory for the demo service."""

from fastapi import FastAPI

from kubor_demo.domain import RuntimeIdentity
from kubor_demo.lifecycle import ReadinessPort

from .routers import api_create_diagnostic_router, api_create_health_router


def create_api_application(readiness: ReadinessPort, runtime_identity: RuntimeIdentity) -> FastAPI:
    """Create the FastAPI application instance for the service.

    Documentation routes are disabled so that every path other than the
    health route reaches the diagnostic route.

    Args:
        readiness: Readiness flag reported by the health route.
        runtime_identity: Identity reported by the diagnostic route.

    Returns:
        FastAPI: Framework application with the health and diagnostic routes.
    """

    application = FastAPI(title="kubor-demo", docs_url=None, redoc_url=None, openapi_url=None)
    application.include_router(api_create_health_router(readiness=readiness))
    application.include_router(api_create_diagnostic_router(runtime_identity=runtime_identity))
    return application
