"""Dashboard use cases: scoped aggregate resources on top of the session cache.

Binds the backend fetchers to resource names and freshness policies, and
offers subscriptions that follow the active scope.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Any

from inventory_console.application.dtos.cache import CacheEntry
from inventory_console.application.dtos.network import NetworkSummary
from inventory_console.application.interfaces.services import IDashboardBackend
from inventory_console.application.services.scope_controller import ActiveScope
from inventory_console.application.services.sync_engine import (
    EntryCallback,
    Fetcher,
    ResourcePolicy,
    Subscription,
    SyncEngine,
)
from inventory_console.core.config import Settings, get_settings
from inventory_console.core.constants import (
    RESOURCE_DASHBOARD_STATS,
    RESOURCE_LOCATION_DETAIL,
    RESOURCE_LOCATION_STATS,
    RESOURCE_LOCATIONS,
)
from inventory_console.domain.enums import LocationStatus, StatsRange
from inventory_console.domain.scope import NETWORK, LocationScope, ScopeKey
from inventory_console.infrastructure.cache.keys import resource_variant
from inventory_console.schemas.dashboard import LocationRecord


def location_stats_resource(stats_range: StatsRange) -> str:
    """Resource name of a location's stats over one time window."""
    return resource_variant(RESOURCE_LOCATION_STATS, stats_range.value)


class ScopedSubscription:
    """Subscription to one resource that follows the active scope.

    On every scope change it releases the old slot, subscribes to the slot
    of the new scope, and reads it (which dispatches a fetch if needed).
    The callback gets the new scope's current entry right away, then every
    state change of that slot.
    """

    def __init__(
        self,
        engine: SyncEngine,
        active_scope: ActiveScope,
        resource_name: str,
        fetcher_for: Callable[[ScopeKey], Fetcher],
        callback: EntryCallback,
    ) -> None:
        self.engine = engine
        self.active_scope = active_scope
        self.resource_name = resource_name
        self._fetcher_for = fetcher_for
        self._callback = callback
        self._subscription: Subscription | None = None
        self._last_delivered: CacheEntry[Any] | None = None
        self.scope: ScopeKey = active_scope.scope
        self._unsubscribe_scope: Callable[[], None] | None = active_scope.subscribe(
            self._on_scope_change
        )
        self._bind(active_scope.scope)

    @property
    def active(self) -> bool:
        return self._unsubscribe_scope is not None

    def current(self) -> CacheEntry[Any]:
        """Read the entry of the scope currently followed."""
        return self.engine.get(self.resource_name, self.scope, self._fetcher_for(self.scope))

    def close(self) -> None:
        """Stop following the active scope and release the slot subscription."""
        if self._unsubscribe_scope is not None:
            self._unsubscribe_scope()
            self._unsubscribe_scope = None
        if self._subscription is not None:
            self._subscription.unsubscribe()
            self._subscription = None

    def _deliver(self, entry: CacheEntry[Any]) -> None:
        self._last_delivered = entry
        self._callback(entry)

    def _on_scope_change(self, scope: ScopeKey, epoch: int) -> None:
        # A listener earlier in line may already have moved the scope again.
        if epoch != self.active_scope.epoch or self._unsubscribe_scope is None:
            return
        self._bind(self.active_scope.scope)

    def _bind(self, scope: ScopeKey) -> None:
        if self._subscription is not None:
            self._subscription.unsubscribe()
        self.scope = scope
        fetcher = self._fetcher_for(scope)
        self._last_delivered = None
        self._subscription = self.engine.subscribe(
            self.resource_name, scope, self._deliver, fetcher
        )
        entry = self.engine.get(self.resource_name, scope, fetcher)
        if self._last_delivered is None:
            self._deliver(entry)


class DashboardResources:
    """Scoped dashboard resources: aggregates, location detail and stats, location list."""

    def __init__(
        self,
        engine: SyncEngine,
        active_scope: ActiveScope,
        backend: IDashboardBackend,
        settings: Settings | None = None,
    ) -> None:
        """Register the resource policies on the engine.

        Args:
            engine: Session cache.
            active_scope: Session ActiveScope (default scope of reads).
            backend: Backend fetchers.
            settings: Freshness configuration; defaults to get_settings().
        """
        self.engine = engine
        self.active_scope = active_scope
        self.backend = backend
        self.settings = settings or get_settings()
        s = self.settings
        engine.register(
            RESOURCE_DASHBOARD_STATS,
            ResourcePolicy(
                stale_after=s.dashboard_stale_after_seconds,
                refetch_interval=s.dashboard_refetch_interval_seconds,
                max_backoff=s.refetch_max_backoff_seconds,
            ),
        )
        engine.register(
            RESOURCE_LOCATION_DETAIL,
            ResourcePolicy(stale_after=s.location_stats_stale_after_seconds),
        )
        for stats_range in StatsRange:
            engine.register(
                location_stats_resource(stats_range),
                ResourcePolicy(
                    stale_after=s.location_stats_stale_after_seconds,
                    refetch_interval=s.dashboard_refetch_interval_seconds,
                    max_backoff=s.refetch_max_backoff_seconds,
                ),
            )
        engine.register(
            RESOURCE_LOCATIONS,
            ResourcePolicy(stale_after=s.locations_stale_after_seconds),
        )

    def _stats_fetcher(self, scope: ScopeKey) -> Fetcher:
        return lambda: self.backend.fetch_dashboard_stats(scope)

    def dashboard_stats(self, scope: ScopeKey | None = None) -> CacheEntry[Any]:
        """KPI and chart aggregates for scope (the active scope if None)."""
        scope = scope if scope is not None else self.active_scope.scope
        return self.engine.get(RESOURCE_DASHBOARD_STATS, scope, self._stats_fetcher(scope))

    def location_detail(self, location_id: str) -> CacheEntry[Any]:
        """One location's record. Raises InvalidScopeException for bad ids."""
        scope = LocationScope(location_id)
        return self.engine.get(
            RESOURCE_LOCATION_DETAIL,
            scope,
            lambda: self.backend.fetch_location_detail(scope.location_id),
        )

    def location_stats(
        self, location_id: str, stats_range: StatsRange | str
    ) -> CacheEntry[Any]:
        """One location's sales summary over today, week or month.

        Raises:
            InvalidScopeException: For bad location ids.
            ValueError: For an unknown range.
        """
        scope = LocationScope(location_id)
        stats_range = StatsRange(stats_range)
        return self.engine.get(
            location_stats_resource(stats_range),
            scope,
            lambda: self.backend.fetch_location_stats(scope.location_id, stats_range),
        )

    def locations(self) -> CacheEntry[Any]:
        """All locations of the network."""
        return self.engine.get(RESOURCE_LOCATIONS, NETWORK, self.backend.fetch_locations)

    def watch_dashboard_stats(self, callback: EntryCallback) -> ScopedSubscription:
        """Follow the dashboard aggregates of whatever scope is active."""
        return ScopedSubscription(
            self.engine,
            self.active_scope,
            RESOURCE_DASHBOARD_STATS,
            self._stats_fetcher,
            callback,
        )

    def refresh_all(self) -> int:
        """Invalidate every cached resource; observed ones refetch now."""
        return self.engine.invalidate_all()


def summarize_locations(locations: Iterable[LocationRecord]) -> NetworkSummary:
    """Network-wide summary: revenue and performance over active locations."""
    all_locations = list(locations)
    active = [loc for loc in all_locations if loc.status == LocationStatus.ACTIVE.value]
    total_revenue = sum(loc.sales_today for loc in active)
    average_performance = (
        sum(loc.performance for loc in active) / len(active) if active else 0.0
    )
    top_performer = max(active, key=lambda loc: loc.performance) if active else None
    return NetworkSummary(
        total_revenue=total_revenue,
        total_locations=len(all_locations),
        active_locations=len(active),
        average_performance=average_performance,
        top_performer=top_performer,
    )
