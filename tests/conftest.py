"""
Pytest fixtures and configuration for probe tests.
"""
import asyncio

import httpx
import pytest

from podprobes.config.settings import AppSettings, ProbeSettings, Settings


class MockClientFactory:
    """Client factory whose clients answer from an in-process handler."""

    def __init__(self, handler):
        self.handler = handler
        self.requests = []
        self.clients_created = 0

    def _record(self, request: httpx.Request):
        self.requests.append(request)
        return self.handler(request)

    def create_client(self) -> httpx.AsyncClient:
        self.clients_created += 1
        return httpx.AsyncClient(transport=httpx.MockTransport(self._record))


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep the host environment from leaking into probe configuration."""
    for name in ("HOST_IP", "NMI_EXPECTED_BODY", "PROBE_TIMEOUT_SECONDS", "NMI_PORT", "NMI_PATH"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def make_factory():
    """Build a MockClientFactory from a handler function."""
    return MockClientFactory


@pytest.fixture
def json_factory():
    """Factory answering every request with the given status and JSON body."""
    def _make(status_code: int = 200, body=None) -> MockClientFactory:
        return MockClientFactory(lambda request: httpx.Response(status_code, json=body))
    return _make


@pytest.fixture
def failing_factory():
    """Factory whose requests fail with the given transport error type."""
    def _make(exc_type=httpx.ConnectError) -> MockClientFactory:
        def handler(request):
            raise exc_type("simulated failure", request=request)
        return MockClientFactory(handler)
    return _make


@pytest.fixture
def slow_factory():
    """Factory whose responses arrive after ``delay`` seconds."""
    def _make(delay: float = 1.0) -> MockClientFactory:
        async def handler(request):
            await asyncio.sleep(delay)
            return httpx.Response(200, json={"access_token": "late"})
        return MockClientFactory(handler)
    return _make


@pytest.fixture
def settings():
    """Settings with the NMI host configured."""
    return Settings(
        app=AppSettings(),
        probe=ProbeSettings(HOST_IP="10.0.0.5"),
    )
