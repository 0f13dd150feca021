"""
Health Probes
IMDS token probe and NMI liveness probe.
"""

from podprobes.infrastructure.health.base import HealthCheck
from podprobes.infrastructure.health.token_probe import PodIdentityTokenProbe
from podprobes.infrastructure.health.nmi_probe import NMILivenessProbe

__all__ = [
    "HealthCheck",
    "PodIdentityTokenProbe",
    "NMILivenessProbe",
]
