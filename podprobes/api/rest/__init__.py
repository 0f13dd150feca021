"""
REST API Module
FastAPI application hosting the probe endpoints.
"""

from podprobes.api.rest.app import create_app

__all__ = ["create_app"]
