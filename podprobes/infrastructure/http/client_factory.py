"""
HTTP Client Factory
Produces configured httpx clients for the probes.
"""

from typing import Protocol

import httpx


class HttpClientFactory(Protocol):
    """Anything able to hand out a ready-to-use async HTTP client."""

    def create_client(self) -> httpx.AsyncClient:
        ...


class DefaultHttpClientFactory:
    """
    Creates a fresh ``httpx.AsyncClient`` for every call.

    The caller owns the client and must close it (``async with``).
    """

    def __init__(self, timeout_seconds: float = 5.0):
        self._timeout = timeout_seconds

    def create_client(self) -> httpx.AsyncClient:
        """Create a new HTTP client."""
        # no env proxies: IMDS and NMI are link-local/node-local
        return httpx.AsyncClient(timeout=self._timeout, trust_env=False)
