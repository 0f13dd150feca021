"""
API V1 Router
Main router for API version 1.
"""

from fastapi import APIRouter

from podprobes.api.rest.v1.endpoints import health

api_router = APIRouter()

# Include endpoint routers
api_router.include_router(
    health.router,
    prefix="/health",
    tags=["Health"],
)
