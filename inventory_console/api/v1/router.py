"""API v1 router aggregation.

api_router is mounted under /api/v1. public_router carries the
shareable product page and is mounted at the root.
"""

from fastapi import APIRouter

from inventory_console.api.v1.endpoints import health, public_products

api_router = APIRouter()
api_router.include_router(health.router, prefix="/health", tags=["health"])

public_router = APIRouter()
public_router.include_router(public_products.router, prefix="/product", tags=["public"])
