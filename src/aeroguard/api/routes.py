"""API route handlers."""

from fastapi import APIRouter

from aeroguard.api.routers import health_router, stations_router

router = APIRouter()
router.include_router(health_router.router)
router.include_router(stations_router.router)
