"""Dashboard and location schemas as served by the backend REST API.

Backend JSON is camelCase; fields are snake_case here. Unknown fields are
kept so newer backend versions do not break the console.
"""

from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from inventory_console.domain.enums import LocationStatus, StatsRange


class _BackendModel(BaseModel):
    """Base for backend payloads: camelCase aliases, extra fields allowed."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
    )


class ChannelSales(_BackendModel):
    """Revenue and order count for one sales channel."""

    revenue: float = 0.0
    count: int = 0


class DashboardKpis(_BackendModel):
    """Headline KPIs of the dashboard."""

    total_revenue: float = 0.0
    total_profit: float = 0.0
    total_loss: float = 0.0
    inventory_value: float = 0.0
    total_products: int = 0
    low_stock_alerts: int = 0
    online_sales_today: ChannelSales = Field(default_factory=ChannelSales)
    offline_sales_today: ChannelSales = Field(default_factory=ChannelSales)


class SalesTrendPoint(_BackendModel):
    """One day of the sales trend chart."""

    date: str
    revenue: float = 0.0
    profit: float = 0.0
    orders: int = 0


class DashboardCharts(_BackendModel):
    """Chart series of the dashboard."""

    sales_trend: list[SalesTrendPoint] = Field(default_factory=list)
    profit_by_category: list[dict[str, Any]] = Field(default_factory=list)
    top_products: list[dict[str, Any]] = Field(default_factory=list)
    dead_stock: list[dict[str, Any]] = Field(default_factory=list)


class DashboardStats(_BackendModel):
    """KPI and chart aggregates for one scope (network or a location)."""

    kpis: DashboardKpis = Field(default_factory=DashboardKpis)
    charts: DashboardCharts = Field(default_factory=DashboardCharts)


class LocationRecord(_BackendModel):
    """A location (franchise) as returned by the backend."""

    id: str = Field(validation_alias=AliasChoices("_id", "id"))
    name: str
    code: str
    status: str = LocationStatus.ACTIVE.value
    sales_today: float = 0.0
    performance: float = 0.0


class StatsSummary(_BackendModel):
    """Sales summary of one location over a time window."""

    range: StatsRange
    revenue: float = 0.0
    profit: float = 0.0
    sales_count: int = 0
    average_order_value: float = 0.0
