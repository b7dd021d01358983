"""Service interfaces (ports) for the application layer.

Protocols define the contracts of external collaborators (DIP): the
backend REST API, the session store, and the navigation primitive.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from inventory_console.application.dtos.auth import AuthState
    from inventory_console.domain.enums import StatsRange
    from inventory_console.domain.scope import ScopeKey
    from inventory_console.schemas.dashboard import (
        DashboardStats,
        LocationRecord,
        StatsSummary,
    )
    from inventory_console.schemas.product import ProductRecord


# Dashboard backend interface
class IDashboardBackend(Protocol):
    """Protocol for scoped aggregate fetches (KPIs, charts, location stats)."""

    async def fetch_dashboard_stats(self, scope: ScopeKey) -> DashboardStats:
        """Fetch KPI and chart aggregates for a scope."""

    async def fetch_location_detail(self, location_id: str) -> LocationRecord:
        """Fetch one location's record."""

    async def fetch_location_stats(
        self, location_id: str, stats_range: StatsRange
    ) -> StatsSummary:
        """Fetch one location's sales summary over a time window."""

    async def fetch_locations(self) -> list[LocationRecord]:
        """Fetch all locations of the network."""


# Product lookup interface
class IProductLookup(Protocol):
    """Protocol for looking up a product record by its public key (SKU)."""

    async def fetch_product_by_lookup_key(self, lookup_key: str) -> ProductRecord | None:
        """Return the record, or None if no product has this key."""


# Auth state interface
class IAuthStateProvider(Protocol):
    """Protocol for reading the caller's authentication state.

    May raise AuthStateUnavailableException when the session cannot be read.
    """

    def get_auth_state(self) -> AuthState:
        """Return the current authentication state."""


# Navigation interface
class INavigator(Protocol):
    """Protocol for the router's navigation primitive."""

    def redirect_to(self, path: str) -> None:
        """Replace the current location with path."""


# Selection persistence interface
class ISelectionStore(Protocol):
    """Protocol for persisting the selected location across sessions."""

    def load(self) -> str | None:
        """Return the saved location id, or None for the network view."""

    def save(self, location_id: str | None) -> None:
        """Save the selected location id (None clears it)."""
