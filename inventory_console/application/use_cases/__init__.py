"""Use cases composed from application services."""

from inventory_console.application.use_cases.dashboard import (
    DashboardResources,
    ScopedSubscription,
    location_stats_resource,
    summarize_locations,
)

__all__ = [
    "DashboardResources",
    "ScopedSubscription",
    "location_stats_resource",
    "summarize_locations",
]
