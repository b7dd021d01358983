"""Cache key builders. Single place for key format (DRY).

Key components (resource name, location id) must not contain
CACHE_KEY_SEP to avoid ambiguous or colliding keys. Location ids are
already restricted by LocationScope; resource names are checked here.
"""

import re

from inventory_console.core.constants import (
    CACHE_KEY_SEP,
    SCOPE_SEGMENT_LOCATION,
    SCOPE_SEGMENT_NETWORK,
)
from inventory_console.domain.scope import LocationScope, NetworkScope, ScopeKey

_RESOURCE_NAME_RE = re.compile(r"^[a-z][a-z0-9_.]*$")


def _validate_resource_name(resource_name: str) -> None:
    """Raise ValueError if resource_name is not a lowercase identifier.

    Args:
        resource_name: Resource name used as the key prefix.

    Raises:
        ValueError: If empty, contains CACHE_KEY_SEP, or has other characters.
    """
    if CACHE_KEY_SEP in resource_name:
        raise ValueError(
            f"Resource name {resource_name!r} must not contain separator {CACHE_KEY_SEP!r}"
        )
    if not _RESOURCE_NAME_RE.match(resource_name):
        raise ValueError(
            f"Resource name {resource_name!r} must be lowercase alphanumeric "
            "with optional underscores or dots"
        )


def scope_segment(scope: ScopeKey) -> str:
    """Key segment for a scope (network, or location plus id)."""
    if isinstance(scope, NetworkScope):
        return SCOPE_SEGMENT_NETWORK
    if isinstance(scope, LocationScope):
        return f"{SCOPE_SEGMENT_LOCATION}{CACHE_KEY_SEP}{scope.location_id}"
    raise TypeError(f"Unsupported scope: {scope!r}")


def key_for(resource_name: str, scope: ScopeKey) -> str:
    """Cache key for a resource under a scope.

    Pure function of its arguments: equal scopes address the same slot,
    different scopes never collide.
    """
    _validate_resource_name(resource_name)
    return f"{resource_name}{CACHE_KEY_SEP}{scope_segment(scope)}"


def resource_variant(resource_name: str, variant: str) -> str:
    """Resource name for a parameterized resource (e.g. location_stats.week)."""
    name = f"{resource_name}.{variant}"
    _validate_resource_name(name)
    return name
