"""API v1 router aggregator."""

from fastapi import APIRouter

from app.api.v1 import settings

api_router = APIRouter(tags=["API v1"])

# Include all API routers
api_router.include_router(settings.router, prefix="/settings", tags=["Settings"])
