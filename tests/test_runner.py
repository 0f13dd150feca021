"""
Tests for the one-shot probe runner.
"""
import httpx
import pytest

from podprobes.config.settings import ProbeSettings, Settings, get_settings
from podprobes.infrastructure.health import NMILivenessProbe, PodIdentityTokenProbe
from podprobes.runner import (
    EXIT_HEALTHY,
    EXIT_MISCONFIGURED,
    EXIT_UNHEALTHY,
    build_probe,
    run_check,
)


class TestBuildProbe:
    """Tests for probe lookup by name."""

    def test_known_probes(self, settings):
        assert isinstance(build_probe("identity", settings), PodIdentityTokenProbe)
        assert isinstance(build_probe("nmi", settings), NMILivenessProbe)

    def test_unknown_probe(self, settings):
        with pytest.raises(ValueError, match="Unknown probe 'dns'"):
            build_probe("dns", settings)


class TestRunCheck:
    """Tests for exit codes."""

    def test_identity_healthy(self, settings, json_factory):
        factory = json_factory(200, {"access_token": "abc123"})

        assert run_check("identity", settings, factory) == EXIT_HEALTHY

    def test_identity_unhealthy(self, settings, json_factory):
        factory = json_factory(200, {"access_token": ""})

        assert run_check("identity", settings, factory) == EXIT_UNHEALTHY

    def test_nmi_healthy(self, settings, make_factory):
        factory = make_factory(lambda request: httpx.Response(200, text="Active"))

        assert run_check("nmi", settings, factory) == EXIT_HEALTHY

    def test_nmi_network_failure(self, settings, failing_factory):
        assert run_check("nmi", settings, failing_factory()) == EXIT_UNHEALTHY

    def test_nmi_without_host_ip(self, make_factory):
        factory = make_factory(lambda request: httpx.Response(200))
        settings = Settings(probe=ProbeSettings())

        assert run_check("nmi", settings, factory) == EXIT_MISCONFIGURED
        assert factory.requests == []

    def test_timeout_override(self, settings, slow_factory):
        assert run_check("identity", settings, slow_factory(delay=1.0), timeout=0.05) == EXIT_UNHEALTHY


class TestInvalidConfiguration:
    """Tests for settings that fail validation."""

    @pytest.fixture(autouse=True)
    def fresh_settings_cache(self):
        get_settings.cache_clear()
        yield
        get_settings.cache_clear()

    @pytest.mark.parametrize(
        "name, value",
        [("PROBE_TIMEOUT_SECONDS", "0"), ("NMI_PORT", "abc"), ("LOG_JSON", "sometimes")],
    )
    def test_invalid_setting_is_misconfigured(self, monkeypatch, make_factory, name, value):
        monkeypatch.setenv("HOST_IP", "10.0.0.5")
        monkeypatch.setenv(name, value)
        factory = make_factory(lambda request: httpx.Response(200, text="Active"))

        assert run_check("nmi", client_factory=factory) == EXIT_MISCONFIGURED
        assert factory.requests == []

    def test_valid_environment_is_used(self, monkeypatch, make_factory):
        monkeypatch.setenv("HOST_IP", "10.0.0.5")
        factory = make_factory(lambda request: httpx.Response(200, text="Active"))

        assert run_check("nmi", client_factory=factory) == EXIT_HEALTHY
        assert factory.requests[0].url.host == "10.0.0.5"
