"""Domain layer: scope value objects, enums, and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from inventory_console.domain.enums import (
    EntryStatus,
    LocationStatus,
    ProductStatus,
    ScopeKind,
    StatsRange,
)
from inventory_console.domain.exceptions import (
    AuthStateUnavailableException,
    ConsoleException,
    FetchFailureException,
    InvalidScopeException,
    NotFoundException,
)
from inventory_console.domain.scope import (
    NETWORK,
    LocationScope,
    NetworkScope,
    ScopeKey,
    location_scope,
    scope_equals,
    scope_from_location_id,
)

__all__ = [
    # Enums
    "EntryStatus",
    "LocationStatus",
    "ProductStatus",
    "ScopeKind",
    "StatsRange",
    # Exceptions
    "AuthStateUnavailableException",
    "ConsoleException",
    "FetchFailureException",
    "InvalidScopeException",
    "NotFoundException",
    # Scope
    "NETWORK",
    "LocationScope",
    "NetworkScope",
    "ScopeKey",
    "location_scope",
    "scope_equals",
    "scope_from_location_id",
]
