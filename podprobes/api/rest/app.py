"""
FastAPI Application
HTTP host exposing the pod-identity probes.
"""

from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
import structlog

from podprobes import __version__
from podprobes.api.rest.v1.router import api_router
from podprobes.config.settings import Settings, load_settings
from podprobes.domain.exceptions import ConfigurationError
from podprobes.domain.health import HealthStatus
from podprobes.infrastructure.health import NMILivenessProbe, PodIdentityTokenProbe
from podprobes.infrastructure.http.client_factory import (
    DefaultHttpClientFactory,
    HttpClientFactory,
)

logger = structlog.get_logger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    client_factory: Optional[HttpClientFactory] = None,
) -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = settings or load_settings()
    client_factory = client_factory or DefaultHttpClientFactory(
        settings.probe.timeout_seconds
    )

    app = FastAPI(
        title="Pod Identity Probes",
        description="Health probes for the pod-identity sidecar stack",
        version=__version__,
        docs_url="/api/docs",
        redoc_url=None,
        openapi_url="/api/openapi.json",
    )

    app.state.token_probe = PodIdentityTokenProbe.from_settings(settings, client_factory)
    app.state.nmi_probe = NMILivenessProbe.from_settings(settings, client_factory)

    # Include API routes
    app.include_router(api_router, prefix="/api/v1")

    @app.exception_handler(ConfigurationError)
    async def configuration_error_handler(request: Request, exc: ConfigurationError):
        logger.error(
            "probe_misconfigured",
            path=request.url.path,
            error=str(exc),
        )
        return JSONResponse(
            status_code=500,
            content={"status": "misconfigured", "description": str(exc)},
        )

    # Global exception handler
    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.error(
            "unhandled_exception",
            path=request.url.path,
            error=str(exc),
        )
        return JSONResponse(
            status_code=500,
            content={
                "status": HealthStatus.UNHEALTHY.value,
                "description": "Internal server error",
            },
        )

    logger.info(
        "probes_registered",
        imds_endpoint=settings.probe.imds_endpoint,
        nmi_port=settings.probe.nmi_port,
    )

    return app
