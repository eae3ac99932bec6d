import logging

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from aeroguard.providers.base import StationDirectory
from aeroguard.services.stations_service import StationResolver

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


@router.get("/health")  # type: ignore[misc]
async def health(request: Request) -> JSONResponse:
    """Report whether the resolver and the AQI provider are wired up.

    No request is sent to the provider, so a healthy response does not mean
    WAQI itself is reachable.
    """
    state = request.app.state
    checks = {
        "station_resolver": isinstance(
            getattr(state, "station_resolver", None), StationResolver
        ),
        "aqi_provider": isinstance(getattr(state, "aqi_provider", None), StationDirectory),
    }

    if all(checks.values()):
        return JSONResponse(content={"status": "ok", "checks": checks})

    missing = [name for name, ready in checks.items() if not ready]
    logger.warning("Health check degraded, not wired: %s", ", ".join(missing))
    return JSONResponse(status_code=503, content={"status": "degraded", "checks": checks})
