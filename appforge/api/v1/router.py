"""Main router for API v1."""

from fastapi import APIRouter

from appforge.api.v1 import cache, generations, health

router = APIRouter(prefix="/v1")

# Include sub-routers
router.include_router(health.router, tags=["health"])
router.include_router(generations.router, prefix="/generations", tags=["generations"])
router.include_router(cache.router, prefix="/cache", tags=["cache"])
