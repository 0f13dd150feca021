"""
Health Check Endpoints
One endpoint per probe, plus the sidecar's own liveness.
"""

from datetime import datetime, timezone

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
import structlog

from podprobes.domain.health import HealthCheckContext, HealthCheckResult
from podprobes.infrastructure.health.base import HealthCheck

router = APIRouter()
logger = structlog.get_logger(__name__)


def _to_response(result: HealthCheckResult) -> JSONResponse:
    return JSONResponse(
        status_code=200 if result.is_healthy else 503,
        content=result.to_dict(),
    )


async def _run_probe(request: Request, state_attr: str) -> JSONResponse:
    probe: HealthCheck = getattr(request.app.state, state_attr)
    context = HealthCheckContext(name=probe.name, tags=("live",))

    result = await probe.check_health(context)

    logger.info(
        "probe_checked",
        probe=probe.name,
        status=result.status.value,
    )
    return _to_response(result)


@router.get("/identity")
async def identity_check(request: Request):
    """
    Pod Identity token probe.

    Returns:
        200 when a token could be obtained from IMDS, 503 otherwise
    """
    return await _run_probe(request, "token_probe")


@router.get("/nmi")
async def nmi_check(request: Request):
    """
    NMI liveness probe.

    Returns:
        200 when the node agent answers its liveness endpoint, 503 otherwise
    """
    return await _run_probe(request, "nmi_probe")


@router.get("/live")
async def liveness_check():
    """
    Liveness of the probe sidecar itself.

    Returns:
        Liveness status
    """
    return {
        "alive": True,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
