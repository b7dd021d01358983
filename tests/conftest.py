"""Pytest configuration and fixtures for inventory-console.

Uses inventory_console.main.create_app() for HTTP tests with the backend
lookup overridden, and a fake monotonic clock for freshness tests.
"""

import os
from collections.abc import AsyncIterator
from unittest.mock import AsyncMock

import pytest
from httpx import ASGITransport, AsyncClient

from inventory_console.api.v1.dependencies import get_product_lookup
from inventory_console.application.services.scope_controller import (
    ActiveScope,
    ScopeSwitchController,
)
from inventory_console.application.services.sync_engine import ResourcePolicy, SyncEngine
from inventory_console.core.config import Settings, get_settings
from tests.helpers import FakeClock

TEST_SECRET_KEY = "test-secret-key-for-console-tokens"

os.environ["SECRET_KEY"] = TEST_SECRET_KEY
get_settings.cache_clear()


@pytest.fixture
def settings() -> Settings:
    """Settings with a known signing key (independent of the environment)."""
    return Settings(secret_key=TEST_SECRET_KEY)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def active_scope() -> ActiveScope:
    return ActiveScope()


@pytest.fixture
def controller(active_scope: ActiveScope) -> ScopeSwitchController:
    return ScopeSwitchController(active_scope)


@pytest.fixture
async def engine(active_scope: ActiveScope, clock: FakeClock) -> AsyncIterator[SyncEngine]:
    """SyncEngine on the fake clock; stale after 60s by default."""
    eng = SyncEngine(active_scope, clock=clock, default_policy=ResourcePolicy(stale_after=60))
    yield eng
    await eng.aclose()


@pytest.fixture
def product_lookup() -> AsyncMock:
    """Backend product lookup; returns no record unless a test says otherwise."""
    lookup = AsyncMock()
    lookup.fetch_product_by_lookup_key = AsyncMock(return_value=None)
    return lookup


@pytest.fixture
async def client(product_lookup: AsyncMock) -> AsyncIterator[AsyncClient]:
    """Async HTTP client against the FastAPI app (ASGI) with a mocked backend."""
    from inventory_console.main import create_app

    app = create_app()
    app.dependency_overrides[get_product_lookup] = lambda: product_lookup
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
