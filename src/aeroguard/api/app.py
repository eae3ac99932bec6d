"""FastAPI application entrypoint."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI

from aeroguard.api.routes import router
from aeroguard.config import Settings
from aeroguard.logging import setup_logging
from aeroguard.providers.waqi import WaqiClient
from aeroguard.services.stations_service import StationResolver

setup_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup/shutdown events."""
    settings = Settings.from_env()
    logger.info("Application starting against %s", settings.waqi_base_url)

    async with httpx.AsyncClient(timeout=settings.http_timeout) as http:
        provider = WaqiClient(
            http,
            token=settings.waqi_token,
            base_url=settings.waqi_base_url,
        )
        app.state.aqi_provider = provider
        app.state.station_resolver = StationResolver(
            provider, box_delta=settings.box_delta
        )
        logger.info("Station resolver ready (box delta %.2f deg)", settings.box_delta)
        yield

    logger.info("Application shutting down")


app = FastAPI(title="AeroGuard", lifespan=lifespan)
app.include_router(router)
