"""Application DTOs (no dependency on transport or framework)."""

from inventory_console.application.dtos.auth import ANONYMOUS, AuthState
from inventory_console.application.dtos.cache import CacheEntry
from inventory_console.application.dtos.disclosure import (
    DisclosureResult,
    NotFound,
    Redirect,
)
from inventory_console.application.dtos.network import NetworkSummary

__all__ = [
    "ANONYMOUS",
    "AuthState",
    "CacheEntry",
    "DisclosureResult",
    "NetworkSummary",
    "NotFound",
    "Redirect",
]
