"""DTOs for network-wide summaries derived from the location list."""

from __future__ import annotations

from dataclasses import dataclass

from inventory_console.schemas.dashboard import LocationRecord


@dataclass(frozen=True)
class NetworkSummary:
    """Aggregate view across locations (active ones drive revenue and performance)."""

    total_revenue: float
    total_locations: int
    active_locations: int
    average_performance: float
    top_performer: LocationRecord | None = None
