"""
One-shot Probe Runner
Runs a single probe once and turns the outcome into a process exit code,
for exec probes and init containers.
"""

import asyncio
from typing import Optional

import structlog

from podprobes.config.settings import Settings, load_settings
from podprobes.domain.exceptions import ConfigurationError
from podprobes.domain.health import HealthCheckContext
from podprobes.infrastructure.health import (
    HealthCheck,
    NMILivenessProbe,
    PodIdentityTokenProbe,
)
from podprobes.infrastructure.http.client_factory import HttpClientFactory

logger = structlog.get_logger(__name__)

EXIT_HEALTHY = 0
EXIT_UNHEALTHY = 1
EXIT_MISCONFIGURED = 2

PROBES = {
    "identity": PodIdentityTokenProbe,
    "nmi": NMILivenessProbe,
}


def build_probe(
    probe_name: str,
    settings: Settings,
    client_factory: Optional[HttpClientFactory] = None,
) -> HealthCheck:
    """
    Build a probe by its short name.

    Raises:
        ValueError: if the name is unknown
    """
    try:
        probe_cls = PROBES[probe_name]
    except KeyError:
        raise ValueError(
            f"Unknown probe '{probe_name}', expected one of: {', '.join(sorted(PROBES))}"
        ) from None
    return probe_cls.from_settings(settings, client_factory)


async def run_check_async(
    probe_name: str,
    settings: Optional[Settings] = None,
    client_factory: Optional[HttpClientFactory] = None,
    timeout: Optional[float] = None,
) -> int:
    """Async variant of run_check."""
    try:
        settings = settings or load_settings()
    except ConfigurationError as e:
        logger.error("probe_misconfigured", probe=probe_name, error=str(e))
        return EXIT_MISCONFIGURED

    probe = build_probe(probe_name, settings, client_factory)

    try:
        result = await probe.check_health(
            HealthCheckContext(name=probe.name),
            timeout=timeout,
        )
    except ConfigurationError as e:
        logger.error("probe_misconfigured", probe=probe.name, error=str(e))
        return EXIT_MISCONFIGURED

    if result.is_healthy:
        logger.info("probe_healthy", probe=probe.name, description=result.description)
        return EXIT_HEALTHY

    logger.error("probe_unhealthy", probe=probe.name, description=result.description)
    return EXIT_UNHEALTHY


def run_check(
    probe_name: str,
    settings: Optional[Settings] = None,
    client_factory: Optional[HttpClientFactory] = None,
    timeout: Optional[float] = None,
) -> int:
    """
    Run one probe once.

    Args:
        probe_name: "identity" or "nmi"
        settings: Application settings (defaults to the cached settings)
        client_factory: HTTP client factory (defaults to a fresh httpx client)
        timeout: Overrides the configured probe timeout

    Returns:
        0 when healthy, 1 when unhealthy, 2 when misconfigured
    """
    return asyncio.run(
        run_check_async(
            probe_name,
            settings=settings,
            client_factory=client_factory,
            timeout=timeout,
        )
    )
