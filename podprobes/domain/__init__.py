"""
Pod Identity Probes Domain Layer
Probe results, token schema and error types.
"""

from podprobes.domain.health import (
    HealthStatus,
    HealthCheckResult,
    HealthCheckContext,
)
from podprobes.domain.tokens import (
    TokenResponse,
    TokenAcquired,
    TokenFailure,
    TokenOutcome,
)
from podprobes.domain.exceptions import (
    ProbeError,
    ConfigurationError,
    HostIPNotSetError,
)

__all__ = [
    # Health
    "HealthStatus",
    "HealthCheckResult",
    "HealthCheckContext",
    # Token
    "TokenResponse",
    "TokenAcquired",
    "TokenFailure",
    "TokenOutcome",
    # Errors
    "ProbeError",
    "ConfigurationError",
    "HostIPNotSetError",
]
