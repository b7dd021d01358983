"""API v1: router aggregation."""

from inventory_console.api.v1.router import api_router, public_router

__all__ = ["api_router", "public_router"]
