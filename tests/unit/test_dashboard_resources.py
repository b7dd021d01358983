"""DashboardResources, ScopedSubscription and the network summary."""

from unittest.mock import AsyncMock

import pytest

from inventory_console.application.services.scope_controller import (
    ActiveScope,
    ScopeSwitchController,
)
from inventory_console.application.services.sync_engine import SyncEngine
from inventory_console.application.use_cases.dashboard import (
    DashboardResources,
    location_stats_resource,
    summarize_locations,
)
from inventory_console.core.config import Settings
from inventory_console.domain.enums import EntryStatus, StatsRange
from inventory_console.domain.exceptions import InvalidScopeException
from inventory_console.domain.scope import NETWORK, LocationScope
from inventory_console.schemas.dashboard import LocationRecord, StatsSummary


def _backend() -> AsyncMock:
    backend = AsyncMock()

    async def stats(scope):
        return {"scope": str(scope)}

    backend.fetch_dashboard_stats = AsyncMock(side_effect=stats)
    backend.fetch_location_stats = AsyncMock(
        side_effect=lambda location_id, stats_range: StatsSummary(range=stats_range, revenue=5)
    )
    backend.fetch_locations = AsyncMock(
        return_value=[LocationRecord(id="a", name="A", code="A1")]
    )
    return backend


@pytest.fixture
def resources(engine: SyncEngine, active_scope: ActiveScope) -> DashboardResources:
    return DashboardResources(engine, active_scope, _backend(), Settings())


async def test_dashboard_stats_default_to_active_scope(
    resources: DashboardResources, engine: SyncEngine, controller: ScopeSwitchController
) -> None:
    resources.dashboard_stats()
    await engine.drain()
    controller.switch_to_location("a")
    resources.dashboard_stats()
    await engine.drain()

    assert resources.dashboard_stats(NETWORK).value == {"scope": "network"}
    assert resources.dashboard_stats().value == {"scope": "location(a)"}
    resources.backend.fetch_dashboard_stats.assert_any_await(LocationScope("a"))


async def test_location_stats_are_cached_per_range(
    resources: DashboardResources, engine: SyncEngine
) -> None:
    resources.location_stats("a", "week")
    resources.location_stats("a", StatsRange.MONTH)
    await engine.drain()

    week = engine.peek(location_stats_resource(StatsRange.WEEK), LocationScope("a"))
    assert week.value.range is StatsRange.WEEK
    assert resources.backend.fetch_location_stats.await_count == 2


async def test_bad_location_id_raises_before_fetch(resources: DashboardResources) -> None:
    with pytest.raises(InvalidScopeException):
        resources.location_detail("")
    with pytest.raises(ValueError):
        resources.location_stats("a", "year")
    resources.backend.fetch_location_detail.assert_not_awaited()


async def test_locations_use_network_scope(
    resources: DashboardResources, engine: SyncEngine
) -> None:
    resources.locations()
    await engine.drain()
    assert engine.peek("locations", NETWORK).value[0].id == "a"


async def test_refresh_all_invalidates_everything(
    resources: DashboardResources, engine: SyncEngine
) -> None:
    resources.dashboard_stats()
    resources.locations()
    await engine.drain()
    assert resources.refresh_all() == 2
    resources.locations()
    assert resources.backend.fetch_locations.await_count == 1
    await engine.drain()
    assert resources.backend.fetch_locations.await_count == 2


async def test_watch_follows_scope_changes(
    resources: DashboardResources, engine: SyncEngine, controller: ScopeSwitchController
) -> None:
    """After a switch the watcher reads the new scope's key and drops the old one."""
    seen = []
    watch = resources.watch_dashboard_stats(seen.append)
    await engine.drain()
    assert watch.current().value == {"scope": "network"}

    controller.switch_to_location("b")
    assert watch.scope == LocationScope("b")
    assert engine.subscriber_count("dashboard_stats", NETWORK) == 0
    assert engine.subscriber_count("dashboard_stats", LocationScope("b")) == 1
    await engine.drain()
    assert seen[-1].value == {"scope": "location(b)"}
    assert seen[-1].status is EntryStatus.FRESH

    watch.close()
    assert watch.active is False
    assert engine.subscriber_count("dashboard_stats", LocationScope("b")) == 0
    controller.switch_to_network()
    assert watch.scope == LocationScope("b")


async def test_watch_delivers_cached_entry_on_switch_back(
    resources: DashboardResources, engine: SyncEngine, controller: ScopeSwitchController
) -> None:
    seen = []
    resources.watch_dashboard_stats(seen.append)
    await engine.drain()
    controller.switch_to_location("b")
    await engine.drain()

    seen.clear()
    controller.switch_to_network()
    assert seen[0].value == {"scope": "network"}


class TestSummarizeLocations:
    def test_summary_over_active_locations(self) -> None:
        locations = [
            LocationRecord(id="a", name="A", code="A", salesToday=100, performance=80),
            LocationRecord(id="b", name="B", code="B", salesToday=300, performance=90),
            LocationRecord(id="c", name="C", code="C", status="inactive", salesToday=999, performance=99),
        ]
        summary = summarize_locations(locations)
        assert summary.total_revenue == 400
        assert summary.total_locations == 3
        assert summary.active_locations == 2
        assert summary.average_performance == pytest.approx(85)
        assert summary.top_performer.id == "b"

    def test_empty(self) -> None:
        summary = summarize_locations([])
        assert summary.total_revenue == 0
        assert summary.average_performance == 0.0
        assert summary.top_performer is None
