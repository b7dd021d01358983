"""HTTP transport to the backend REST API."""

from inventory_console.infrastructure.http.api_client import ConsoleApiClient

__all__ = ["ConsoleApiClient"]
