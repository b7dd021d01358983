"""Application lifespan: startup and shutdown.

Wiring only: the shared backend client used by the public endpoints is
created on startup and closed on shutdown.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from inventory_console.core.config import get_settings
from inventory_console.infrastructure.http.api_client import ConsoleApiClient

logger = logging.getLogger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Create the shared backend client, yield, then close it."""
    settings = get_settings()

    # ---- Startup ----
    # Public lookups never send credentials, so one client serves every request.
    app.state.product_lookup = ConsoleApiClient(settings=settings)
    logger.info("Backend client ready (%s)", settings.api_base_url)

    yield

    # ---- Shutdown ----
    if getattr(app.state, "product_lookup", None) is not None:
        await app.state.product_lookup.aclose()
        app.state.product_lookup = None
        logger.info("Backend client closed")
