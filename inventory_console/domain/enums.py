"""Domain enumerations for the inventory console."""

from enum import Enum


class _ValuesMixin:
    """Mixin that adds a values() classmethod to str Enums."""

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid values as strings."""
        return [member.value for member in cls]


class ScopeKind(_ValuesMixin, str, Enum):
    """Addressing dimension of cached aggregates."""

    NETWORK = "network"
    LOCATION = "location"


class EntryStatus(_ValuesMixin, str, Enum):
    """Lifecycle status of a cache entry."""

    IDLE = "idle"
    LOADING = "loading"
    FRESH = "fresh"
    STALE = "stale"
    ERROR = "error"


class StatsRange(_ValuesMixin, str, Enum):
    """Time window for per-location stats summaries."""

    TODAY = "today"
    WEEK = "week"
    MONTH = "month"


class ProductStatus(_ValuesMixin, str, Enum):
    """Catalog status of a product. Only ACTIVE products are publicly disclosable."""

    ACTIVE = "active"
    INACTIVE = "inactive"
    DISCONTINUED = "discontinued"


class LocationStatus(_ValuesMixin, str, Enum):
    """Operating status of a location (franchise)."""

    ACTIVE = "active"
    INACTIVE = "inactive"
