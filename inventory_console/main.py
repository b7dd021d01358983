"""FastAPI application entry point.

Wiring only: lifespan, exception handlers, middleware, routers.
No business logic here. See inventory_console.core.lifespan and
inventory_console.core.exception_handlers.

Settings are loaded inside create_app() so that tests can set env (and
clear the get_settings cache) before calling create_app().
"""

from fastapi import FastAPI

from inventory_console.api.v1 import api_router, public_router
from inventory_console.core.config import get_settings
from inventory_console.core.exception_handlers import register_exception_handlers
from inventory_console.core.lifespan import create_lifespan
from inventory_console.middleware import RequestIDMiddleware
from inventory_console.shared.telemetry import setup_logging


def create_app() -> FastAPI:
    """Build and return the FastAPI application."""
    settings = get_settings()
    setup_logging()
    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        debug=settings.debug,
        lifespan=create_lifespan,
    )

    register_exception_handlers(app)

    app.add_middleware(RequestIDMiddleware, header_name=settings.request_id_header)

    app.include_router(api_router, prefix="/api/v1")
    app.include_router(public_router)

    return app


app = create_app()
