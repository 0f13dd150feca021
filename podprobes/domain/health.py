"""
Health Check Result
Binary outcome reported by a probe to the hosting health-check registry.
"""

from dataclasses import dataclass, field
from enum import Enum


class HealthStatus(str, Enum):
    """Health status values."""
    HEALTHY = "healthy"
    UNHEALTHY = "unhealthy"


@dataclass(frozen=True)
class HealthCheckResult:
    """
    Outcome of a single probe invocation.

    Attributes:
        status: Healthy or unhealthy
        description: Short human-readable message for the consumer
    """

    status: HealthStatus
    description: str

    @classmethod
    def healthy(cls, description: str) -> "HealthCheckResult":
        return cls(status=HealthStatus.HEALTHY, description=description)

    @classmethod
    def unhealthy(cls, description: str) -> "HealthCheckResult":
        return cls(status=HealthStatus.UNHEALTHY, description=description)

    @property
    def is_healthy(self) -> bool:
        return self.status == HealthStatus.HEALTHY

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "status": self.status.value,
            "description": self.description,
        }


@dataclass(frozen=True)
class HealthCheckContext:
    """Registration context passed by the host when it invokes a probe."""

    name: str
    tags: tuple[str, ...] = field(default_factory=tuple)
