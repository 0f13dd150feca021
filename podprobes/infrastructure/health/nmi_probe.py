"""
NMI Liveness Probe
Checks that the node-level identity agent answers its liveness endpoint.
"""

import asyncio
import os
from typing import Optional

import httpx
import structlog

from podprobes.config.settings import Settings
from podprobes.domain.exceptions import HostIPNotSetError
from podprobes.domain.health import HealthCheckContext, HealthCheckResult
from podprobes.infrastructure.health.base import HealthCheck
from podprobes.infrastructure.http.client_factory import HttpClientFactory

logger = structlog.get_logger(__name__)

HOST_IP_ENV_VAR = "HOST_IP"
DEFAULT_NMI_PORT = 8085
DEFAULT_NMI_PATH = "/healthz"

HEALTHY_MESSAGE = "The NMI liveness is responding."
UNHEALTHY_MESSAGE = "The NMI liveness probe did not respond as expected."


class NMILivenessProbe(HealthCheck):
    """
    Liveness probe against the NMI on the pod's node.

    The node address comes from the constructor or, failing that, from
    ``HOST_IP`` at check time. A missing address raises HostIPNotSetError
    before any request is made; everything else maps to a health result.
    """

    name = "nmi_liveness"

    def __init__(
        self,
        client_factory: Optional[HttpClientFactory] = None,
        host_ip: Optional[str] = None,
        port: int = DEFAULT_NMI_PORT,
        path: str = DEFAULT_NMI_PATH,
        expected_body: Optional[str] = None,
        timeout_seconds: float = 5.0,
    ):
        super().__init__(client_factory=client_factory, timeout_seconds=timeout_seconds)
        self._host_ip = host_ip
        self._port = port
        self._path = path
        self._expected_body = expected_body

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        client_factory: Optional[HttpClientFactory] = None,
    ) -> "NMILivenessProbe":
        """Build the probe from application settings."""
        probe_settings = settings.probe
        return cls(
            client_factory=client_factory,
            host_ip=probe_settings.host_ip,
            port=probe_settings.nmi_port,
            path=probe_settings.nmi_path,
            expected_body=probe_settings.nmi_expected_body,
            timeout_seconds=probe_settings.timeout_seconds,
        )

    def resolve_host_ip(self) -> str:
        """
        Get the node address.

        Raises:
            HostIPNotSetError: if neither the constructor nor the environment
                provides one
        """
        host_ip = self._host_ip or os.getenv(HOST_IP_ENV_VAR)
        if not host_ip:
            raise HostIPNotSetError(HOST_IP_ENV_VAR)
        return host_ip

    def liveness_url(self, host_ip: str) -> str:
        # IPv6 literals need brackets in a URL authority
        if ":" in host_ip and not host_ip.startswith("["):
            host_ip = f"[{host_ip}]"
        return f"http://{host_ip}:{self._port}{self._path}"

    async def check_health(
        self,
        context: Optional[HealthCheckContext] = None,
        timeout: Optional[float] = None,
    ) -> HealthCheckResult:
        # configuration errors escape; they are not a probe outcome
        url = self.liveness_url(self.resolve_host_ip())

        try:
            response = await self._send("GET", url, timeout=timeout)

            if not response.is_success:
                logger.warning(
                    "nmi_probe_unhealthy",
                    url=url,
                    status_code=response.status_code,
                )
                return HealthCheckResult.unhealthy(UNHEALTHY_MESSAGE)

            if self._expected_body is not None:
                body = response.text.strip()
                if body != self._expected_body:
                    logger.warning(
                        "nmi_probe_unexpected_body",
                        url=url,
                        expected=self._expected_body,
                        got=body[:100],
                    )
                    return HealthCheckResult.unhealthy(UNHEALTHY_MESSAGE)

            logger.debug("nmi_probe_healthy", url=url, status_code=response.status_code)
            return HealthCheckResult.healthy(HEALTHY_MESSAGE)

        except asyncio.TimeoutError:
            logger.warning("nmi_probe_timeout", url=url)
            return HealthCheckResult.unhealthy(UNHEALTHY_MESSAGE)
        except httpx.HTTPError as e:
            logger.warning("nmi_probe_request_failed", url=url, error=str(e), exc_type=type(e).__name__)
            return HealthCheckResult.unhealthy(UNHEALTHY_MESSAGE)
        except Exception as e:
            logger.error("nmi_probe_failed", url=url, error=str(e))
            return HealthCheckResult.unhealthy(UNHEALTHY_MESSAGE)
