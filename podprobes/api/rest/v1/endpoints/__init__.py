"""
API V1 Endpoints
"""

from podprobes.api.rest.v1.endpoints import health

__all__ = ["health"]
