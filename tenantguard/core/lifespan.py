"""Application lifespan: tracing on startup, span flush and engine dispose on shutdown."""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from tenantguard.core.config import get_settings
from tenantguard.infrastructure.persistence.database import dispose_engine, get_engine
from tenantguard.shared.telemetry.telemetry import configure_tracing, shutdown_tracing

logger = logging.getLogger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    settings = get_settings()
    configure_tracing(settings, app, get_engine())
    logger.info(
        "Startup complete: auth_strategy=%s environment=%s",
        app.state.auth_strategy.name,
        settings.environment,
    )
    try:
        yield
    finally:
        shutdown_tracing()
        await dispose_engine()
