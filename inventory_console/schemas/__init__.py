"""Pydantic schemas: backend payloads and the public product contract."""

from inventory_console.schemas.dashboard import (
    ChannelSales,
    DashboardCharts,
    DashboardKpis,
    DashboardStats,
    LocationRecord,
    SalesTrendPoint,
    StatsSummary,
)
from inventory_console.schemas.health import HealthResponse
from inventory_console.schemas.product import (
    PUBLIC_PRODUCT_FIELDS,
    FranchiseRef,
    ProductImage,
    ProductRecord,
    PublicFranchise,
    PublicProductView,
)

__all__ = [
    "ChannelSales",
    "DashboardCharts",
    "DashboardKpis",
    "DashboardStats",
    "FranchiseRef",
    "HealthResponse",
    "LocationRecord",
    "PUBLIC_PRODUCT_FIELDS",
    "ProductImage",
    "ProductRecord",
    "PublicFranchise",
    "PublicProductView",
    "SalesTrendPoint",
    "StatsSummary",
]
