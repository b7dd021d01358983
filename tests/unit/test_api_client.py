"""ConsoleApiClient against an httpx MockTransport."""

import httpx
import pytest

from inventory_console.core.config import Settings
from inventory_console.domain.enums import StatsRange
from inventory_console.domain.exceptions import FetchFailureException
from inventory_console.domain.scope import NETWORK, LocationScope
from inventory_console.infrastructure.http.api_client import ConsoleApiClient


def _client(handler, token: str | None = "session-token") -> ConsoleApiClient:
    http = httpx.AsyncClient(
        transport=httpx.MockTransport(handler), base_url="http://backend/api"
    )
    return ConsoleApiClient(http, settings=Settings(), token_provider=lambda: token)


async def test_dashboard_stats_network_and_location() -> None:
    requests: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(
            200,
            json={"success": True, "data": {"kpis": {"totalRevenue": 1500}, "charts": {}}},
        )

    client = _client(handler)
    stats = await client.fetch_dashboard_stats(NETWORK)
    await client.fetch_dashboard_stats(LocationScope("f1"))

    assert stats.kpis.total_revenue == 1500
    assert requests[0].url.path == "/api/dashboard/stats"
    assert "franchise" not in requests[0].url.params
    assert requests[1].url.params["franchise"] == "f1"
    assert requests[0].headers["Authorization"] == "Bearer session-token"


async def test_location_stats_sends_range() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/api/franchises/f1/stats"
        assert request.url.params["range"] == "week"
        return httpx.Response(200, json={"range": "week", "revenue": 10, "salesCount": 2})

    summary = await _client(handler).fetch_location_stats("f1", StatsRange.WEEK)
    assert summary.sales_count == 2


async def test_locations_list() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            200,
            json={"success": True, "data": [{"_id": "f1", "name": "Downtown", "code": "DT"}]},
        )

    locations = await _client(handler).fetch_locations()
    assert [loc.id for loc in locations] == ["f1"]


async def test_locations_must_be_a_list() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"success": True, "data": {"_id": "f1"}})

    with pytest.raises(FetchFailureException):
        await _client(handler).fetch_locations()


async def test_public_lookup_sends_no_credentials() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert "Authorization" not in request.headers
        assert request.url.path == "/api/products/public/SKU-1"
        return httpx.Response(
            200, json={"success": True, "data": {"sku": "SKU-1", "name": "Shirt", "category": "Apparel"}}
        )

    record = await _client(handler).fetch_product_by_lookup_key("SKU-1")
    assert record.sku == "SKU-1"


async def test_public_lookup_404_is_none() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(404, json={"success": False, "message": "Product not found"})

    assert await _client(handler).fetch_product_by_lookup_key("NOPE") is None


@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(500, json={"message": "boom"}),
        httpx.Response(401, json={"message": "unauthorized"}),
        httpx.Response(200, content=b"<html>"),
        httpx.Response(200, json={"success": False, "message": "denied"}),
        httpx.Response(200, json={"success": True, "data": {"kpis": {"totalRevenue": "lots"}}}),
    ],
)
async def test_backend_errors_raise_fetch_failure(response: httpx.Response) -> None:
    with pytest.raises(FetchFailureException) as exc_info:
        await _client(lambda request: response).fetch_dashboard_stats(NETWORK)
    assert exc_info.value.error_code == "FETCH_FAILURE"


async def test_transport_error_raises_fetch_failure() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(FetchFailureException):
        await _client(handler).fetch_location_detail("f1")


async def test_ids_are_path_escaped() -> None:
    seen: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request.url.raw_path.decode())
        return httpx.Response(200, json={"_id": "a/b", "name": "X", "code": "X"})

    await _client(handler).fetch_location_detail("a/b")
    assert seen == ["/api/franchises/a%2Fb"]


async def test_aclose_leaves_injected_client_open() -> None:
    http = httpx.AsyncClient(transport=httpx.MockTransport(lambda r: httpx.Response(200, json={})))
    client = ConsoleApiClient(http, settings=Settings())
    await client.aclose()
    assert http.is_closed is False
    await http.aclose()
