"""Backend REST API client for the console.

All HTTP calls use httpx.AsyncClient so they do not block the event loop.
Responses wrapped as {"success": ..., "data": ...} are unwrapped; transport
errors and non-2xx statuses raise FetchFailureException. Timeouts are
configured on the client (settings.api_timeout_seconds).
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from inventory_console.core.config import Settings, get_settings
from inventory_console.domain.enums import StatsRange
from inventory_console.domain.exceptions import FetchFailureException
from inventory_console.domain.scope import LocationScope, ScopeKey
from inventory_console.schemas.dashboard import (
    DashboardStats,
    LocationRecord,
    StatsSummary,
)
from inventory_console.schemas.product import ProductRecord

logger = logging.getLogger(__name__)

TokenProvider = Callable[[], str | None]


def _unwrap(payload: Any) -> Any:
    """Return the inner data of a {success, data} envelope, or payload as-is."""
    if isinstance(payload, dict) and "success" in payload and "data" in payload:
        return payload["data"]
    return payload


class ConsoleApiClient:
    """Implements the dashboard backend and product lookup contracts over HTTP.

    Internal endpoints send the session token as a Bearer header; the
    public product lookup never does.
    """

    def __init__(
        self,
        http: httpx.AsyncClient | None = None,
        *,
        settings: Settings | None = None,
        token_provider: TokenProvider | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            http: Optional AsyncClient (for DI/testing); created from settings if None.
            settings: Base URL and timeout; defaults to get_settings().
            token_provider: Returns the current session token, if any.
        """
        self.settings = settings or get_settings()
        self._owns_http = http is None
        self._http = http or httpx.AsyncClient(
            base_url=self.settings.api_base_url,
            timeout=self.settings.api_timeout_seconds,
        )
        self._token_provider = token_provider

    async def aclose(self) -> None:
        """Close the underlying HTTP client if this instance created it."""
        if self._owns_http:
            await self._http.aclose()

    def _auth_headers(self) -> dict[str, str]:
        token = self._token_provider() if self._token_provider else None
        return {"Authorization": f"Bearer {token}"} if token else {}

    async def _get(
        self,
        resource: str,
        path: str,
        *,
        params: dict[str, str] | None = None,
        authenticated: bool = True,
        allow_404: bool = False,
    ) -> Any:
        """GET path and return the unwrapped JSON body (None on 404 if allowed)."""
        headers = self._auth_headers() if authenticated else {}
        try:
            resp = await self._http.get(path, params=params, headers=headers)
        except httpx.HTTPError as e:
            raise FetchFailureException(resource, f"{type(e).__name__}: {e}") from e
        if resp.status_code == 404 and allow_404:
            return None
        if resp.status_code >= 400:
            raise FetchFailureException(
                resource, f"HTTP {resp.status_code}", status_code=resp.status_code
            )
        try:
            payload = resp.json()
        except ValueError as e:
            raise FetchFailureException(resource, "invalid JSON body") from e
        if isinstance(payload, dict) and payload.get("success") is False:
            if allow_404:
                return None
            raise FetchFailureException(resource, str(payload.get("message") or "unsuccessful"))
        return _unwrap(payload)

    @staticmethod
    def _parse(resource: str, model: Any, data: Any) -> Any:
        try:
            return model.model_validate(data)
        except ValidationError as e:
            raise FetchFailureException(resource, f"unexpected payload: {e.error_count()} errors") from e

    async def fetch_dashboard_stats(self, scope: ScopeKey) -> DashboardStats:
        """GET /dashboard/stats, filtered by franchise for a location scope."""
        params = {"franchise": scope.location_id} if isinstance(scope, LocationScope) else None
        data = await self._get("dashboard_stats", "/dashboard/stats", params=params)
        return self._parse("dashboard_stats", DashboardStats, data)

    async def fetch_location_detail(self, location_id: str) -> LocationRecord:
        """GET /franchises/{id}."""
        data = await self._get("location_detail", f"/franchises/{quote(location_id, safe='')}")
        return self._parse("location_detail", LocationRecord, data)

    async def fetch_location_stats(
        self, location_id: str, stats_range: StatsRange
    ) -> StatsSummary:
        """GET /franchises/{id}/stats?range=today|week|month."""
        data = await self._get(
            "location_stats",
            f"/franchises/{quote(location_id, safe='')}/stats",
            params={"range": StatsRange(stats_range).value},
        )
        return self._parse("location_stats", StatsSummary, data)

    async def fetch_locations(self) -> list[LocationRecord]:
        """GET /franchises."""
        data = await self._get("locations", "/franchises")
        if not isinstance(data, list):
            raise FetchFailureException("locations", "expected a list")
        return [self._parse("locations", LocationRecord, item) for item in data]

    async def fetch_product_by_lookup_key(self, lookup_key: str) -> ProductRecord | None:
        """GET /products/public/{sku} without credentials. 404 returns None."""
        data = await self._get(
            "product",
            f"/products/public/{quote(lookup_key, safe='')}",
            authenticated=False,
            allow_404=True,
        )
        if data is None:
            return None
        return self._parse("product", ProductRecord, data)
