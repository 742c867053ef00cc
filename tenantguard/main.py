"""FastAPI application entry point.

Wiring only: lifespan, exception handlers, middleware, routers and the
authentication strategy. See tenantguard.core.lifespan and
tenantguard.core.exception_handlers.

Settings are loaded inside create_app() so that tests can set env (and
clear the get_settings cache) before calling create_app().
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from tenantguard.api.v1 import api_router
from tenantguard.core.config import get_settings
from tenantguard.core.exception_handlers import register_exception_handlers
from tenantguard.core.lifespan import create_lifespan
from tenantguard.infrastructure.security.authentication import (
    build_authentication_strategy,
)
from tenantguard.middleware import RequestIDMiddleware
from tenantguard.shared.telemetry.logging import setup_logging


def create_app() -> FastAPI:
    """Build and return the FastAPI application. Settings are resolved here (deferred from import)."""
    settings = get_settings()
    setup_logging()
    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        debug=settings.debug,
        lifespan=create_lifespan,
    )

    # One strategy per process; request handling never re-reads the setting.
    app.state.auth_strategy = build_authentication_strategy(settings)

    register_exception_handlers(app)

    # Middleware: first added = innermost. Request ID wraps CORS so preflights carry it too.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[o.strip() for o in settings.allowed_origins.split(",") if o.strip()],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestIDMiddleware, header_name=settings.request_id_header)

    app.include_router(api_router, prefix="/api/v1")

    return app


app = create_app()
