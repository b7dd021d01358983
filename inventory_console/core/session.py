"""Console session: creation and teardown of session-lifetime objects.

A session owns one ActiveScope, one SyncEngine and the services built on
them. Nothing here is module-global; two sessions never share cache
entries or scope state.
"""

from __future__ import annotations

import logging
from types import TracebackType
from typing import Any, Callable

from inventory_console.application.interfaces.services import ISelectionStore
from inventory_console.application.services.disclosure_gateway import DisclosureGateway
from inventory_console.application.services.scope_controller import (
    ActiveScope,
    ScopeSwitchController,
)
from inventory_console.application.services.sync_engine import ResourcePolicy, SyncEngine
from inventory_console.application.use_cases.dashboard import DashboardResources
from inventory_console.core.config import Settings, get_settings
from inventory_console.domain.scope import ScopeKey
from inventory_console.infrastructure.http.api_client import ConsoleApiClient
from inventory_console.infrastructure.security.auth_state import TokenAuthStateProvider
from inventory_console.infrastructure.storage.selection_store import (
    InMemorySelectionStore,
    JsonFileSelectionStore,
)

logger = logging.getLogger(__name__)


class ConsoleSession:
    """Bundle of the objects that live as long as one console session."""

    def __init__(
        self,
        settings: Settings,
        active_scope: ActiveScope,
        engine: SyncEngine,
        controller: ScopeSwitchController,
        resources: DashboardResources,
        gateway: DisclosureGateway,
        client: ConsoleApiClient | None = None,
    ) -> None:
        self.settings = settings
        self.active_scope = active_scope
        self.engine = engine
        self.controller = controller
        self.resources = resources
        self.gateway = gateway
        self._client = client
        self._closed = False

    @classmethod
    def start(
        cls,
        settings: Settings | None = None,
        *,
        backend: Any | None = None,
        token_provider: Callable[[], str | None] | None = None,
        selection_store: ISelectionStore | None = None,
    ) -> ConsoleSession:
        """Create a session.

        Args:
            settings: Defaults to get_settings().
            backend: Object implementing IDashboardBackend and IProductLookup;
                an HTTP ConsoleApiClient is created when None.
            token_provider: Returns the current session token (auth state
                and Bearer header).
            selection_store: Where the selected location is remembered;
                defaults to a JSON file when selection_store_path is set,
                otherwise memory.
        """
        settings = settings or get_settings()
        token_provider = token_provider or (lambda: None)
        client: ConsoleApiClient | None = None
        if backend is None:
            client = ConsoleApiClient(settings=settings, token_provider=token_provider)
            backend = client
        if selection_store is None:
            selection_store = (
                JsonFileSelectionStore(settings.selection_store_path)
                if settings.selection_store_path
                else InMemorySelectionStore()
            )

        active_scope = ActiveScope()
        engine = SyncEngine(
            active_scope,
            default_policy=ResourcePolicy(
                stale_after=settings.dashboard_stale_after_seconds,
                max_backoff=settings.refetch_max_backoff_seconds,
            ),
            max_entries=settings.cache_max_entries,
        )
        controller = ScopeSwitchController(active_scope, selection_store)
        resources = DashboardResources(engine, active_scope, backend, settings)
        gateway = DisclosureGateway(
            backend,
            auth_state_provider=TokenAuthStateProvider(token_provider, settings),
            search_path=settings.internal_search_path,
        )
        logger.info("Console session started (backend %s)", type(backend).__name__)
        return cls(settings, active_scope, engine, controller, resources, gateway, client)

    async def restore_selection(self) -> ScopeKey:
        """Load the location list and re-select the remembered location.

        If the list cannot be loaded the session stays on the network view.
        """
        self.resources.locations()
        await self.engine.drain()
        entry = self.resources.locations()
        if not entry.has_value:
            logger.warning("Location list unavailable; selection not restored: %s", entry.error)
            return self.active_scope.scope
        return self.controller.restore(loc.id for loc in entry.value)

    async def aclose(self) -> None:
        """End the session: stop refreshes, close the transport, reset the scope."""
        if self._closed:
            return
        self._closed = True
        await self.engine.aclose()
        if self._client is not None:
            await self._client.aclose()
        self.active_scope.reset()
        logger.info("Console session closed")

    async def __aenter__(self) -> ConsoleSession:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()
