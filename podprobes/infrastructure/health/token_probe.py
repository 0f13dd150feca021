"""
Pod Identity Token Probe
Checks that a managed-identity token can be obtained from the instance
metadata endpoint (IMDS).
"""

import asyncio
from typing import Optional
from urllib.parse import quote

import httpx
import structlog
from pydantic import ValidationError

from podprobes.config.settings import Settings
from podprobes.domain.health import HealthCheckContext, HealthCheckResult
from podprobes.domain.tokens import (
    TokenAcquired,
    TokenFailure,
    TokenOutcome,
    TokenResponse,
)
from podprobes.infrastructure.health.base import HealthCheck
from podprobes.infrastructure.http.client_factory import HttpClientFactory

logger = structlog.get_logger(__name__)

DEFAULT_IMDS_ENDPOINT = "http://169.254.169.254/metadata/identity/oauth2/token"
DEFAULT_API_VERSION = "2018-02-01"
DEFAULT_RESOURCE = "https://management.azure.com/"

HEALTHY_MESSAGE = "The Pod Identity is able to get token as expected."
UNHEALTHY_MESSAGE = "The Pod Identity is not able to get token."


class PodIdentityTokenProbe(HealthCheck):
    """
    Token probe against IMDS.

    Healthy iff the endpoint answers 2xx with a JSON object holding a
    non-empty ``access_token``. Every failure (network, timeout, status,
    body) is reported as the same unhealthy result. The token's identity
    is not verified against an expected client id.
    """

    name = "pod_identity_token"

    def __init__(
        self,
        client_factory: Optional[HttpClientFactory] = None,
        endpoint: str = DEFAULT_IMDS_ENDPOINT,
        api_version: str = DEFAULT_API_VERSION,
        resource: str = DEFAULT_RESOURCE,
        timeout_seconds: float = 5.0,
    ):
        super().__init__(client_factory=client_factory, timeout_seconds=timeout_seconds)
        self._endpoint = endpoint
        self._api_version = api_version
        self._resource = resource

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        client_factory: Optional[HttpClientFactory] = None,
    ) -> "PodIdentityTokenProbe":
        """Build the probe from application settings."""
        probe_settings = settings.probe
        return cls(
            client_factory=client_factory,
            endpoint=probe_settings.imds_endpoint,
            api_version=probe_settings.imds_api_version,
            resource=probe_settings.token_resource,
            timeout_seconds=probe_settings.timeout_seconds,
        )

    @property
    def token_url(self) -> str:
        """IMDS token URL with the resource fully percent-encoded."""
        return (
            f"{self._endpoint}?api-version={self._api_version}"
            f"&resource={quote(self._resource, safe='')}"
        )

    async def fetch_token(self, timeout: Optional[float] = None) -> TokenOutcome:
        """
        Request a token from IMDS.

        Args:
            timeout: Overrides the probe's default timeout for this call

        Returns:
            TokenAcquired on success, TokenFailure with a reason otherwise
        """
        try:
            response = await self._send(
                "GET",
                self.token_url,
                headers={"Metadata": "true"},
                timeout=timeout,
            )

            if not response.is_success:
                return TokenFailure(reason=f"HTTP {response.status_code}")

            payload = TokenResponse.model_validate_json(response.content)

            if not payload.access_token:
                return TokenFailure(reason="Missing access_token")

            return TokenAcquired(token=payload.access_token, client_id=payload.client_id)

        except asyncio.TimeoutError:
            return TokenFailure(reason="Request timeout")
        except httpx.ConnectError:
            return TokenFailure(reason="Connection refused")
        except httpx.TimeoutException:
            return TokenFailure(reason="Request timeout")
        except httpx.HTTPError as e:
            return TokenFailure(reason=f"{type(e).__name__}: {e}")
        except ValidationError:
            return TokenFailure(reason="Malformed token response")
        except Exception as e:
            logger.error("token_fetch_failed", error=str(e), exc_type=type(e).__name__)
            return TokenFailure(reason=str(e))

    async def check_health(
        self,
        context: Optional[HealthCheckContext] = None,
        timeout: Optional[float] = None,
    ) -> HealthCheckResult:
        outcome = await self.fetch_token(timeout=timeout)

        if isinstance(outcome, TokenAcquired):
            logger.debug("token_probe_healthy", client_id=outcome.client_id)
            return HealthCheckResult.healthy(HEALTHY_MESSAGE)

        logger.warning(
            "token_probe_unhealthy",
            url=self._endpoint,
            reason=outcome.reason,
        )
        return HealthCheckResult.unhealthy(UNHEALTHY_MESSAGE)
