"""
Health Check Contract
Common base for probes performing one bounded HTTP exchange.
"""

import asyncio
from abc import ABC, abstractmethod
from typing import Optional

import httpx

from podprobes.domain.health import HealthCheckContext, HealthCheckResult
from podprobes.infrastructure.http.client_factory import (
    DefaultHttpClientFactory,
    HttpClientFactory,
)


class HealthCheck(ABC):
    """
    Abstract base class for probes.

    Subclasses build a single request and interpret the response. Sending
    goes through ``_send``, which obtains a fresh client from the injected
    factory and bounds the exchange with a timeout. There are no retries.
    """

    name: str = "health_check"

    def __init__(
        self,
        client_factory: Optional[HttpClientFactory] = None,
        timeout_seconds: float = 5.0,
    ):
        self._client_factory = client_factory or DefaultHttpClientFactory(timeout_seconds)
        self._timeout = timeout_seconds

    @abstractmethod
    async def check_health(
        self,
        context: Optional[HealthCheckContext] = None,
        timeout: Optional[float] = None,
    ) -> HealthCheckResult:
        """
        Run the probe once.

        Args:
            context: Registration context supplied by the host
            timeout: Overrides the probe's default timeout for this call

        Returns:
            HealthCheckResult, healthy or unhealthy
        """

    async def _send(
        self,
        method: str,
        url: str,
        headers: Optional[dict] = None,
        timeout: Optional[float] = None,
    ) -> httpx.Response:
        """
        Build and send one request with a freshly created client.

        The request is built by the client so its configured timeout and
        default headers apply.

        Raises:
            httpx.HTTPError: on transport failures
            asyncio.TimeoutError: when the exchange exceeds the timeout
        """
        effective_timeout = timeout if timeout is not None else self._timeout
        async with self._client_factory.create_client() as client:
            request = client.build_request(method, url, headers=headers)
            return await asyncio.wait_for(
                client.send(request),
                timeout=effective_timeout,
            )
