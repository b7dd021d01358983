"""Scope value objects: network-wide vs. single-location addressing.

Scopes are immutable and compare by value. Every cached aggregate is
namespaced by a scope so that one location's data can never be served
for another.
"""

import re
from dataclasses import dataclass
from typing import ClassVar, TypeAlias

from inventory_console.core.constants import LOCATION_ID_MAX_LENGTH
from inventory_console.domain.enums import ScopeKind
from inventory_console.domain.exceptions import InvalidScopeException

_LOCATION_ID_RE = re.compile(r"^[A-Za-z0-9_-]+$")


def _validate_location_id(location_id: object) -> str:
    """Return the normalized location id or raise InvalidScopeException."""
    if not isinstance(location_id, str):
        raise InvalidScopeException(location_id, "must be a string")
    value = location_id.strip()
    if not value:
        raise InvalidScopeException(location_id, "must be non-empty")
    if len(value) > LOCATION_ID_MAX_LENGTH:
        raise InvalidScopeException(
            location_id, f"must not exceed {LOCATION_ID_MAX_LENGTH} characters"
        )
    if not _LOCATION_ID_RE.match(value):
        raise InvalidScopeException(
            location_id, "must be alphanumeric with optional hyphens or underscores"
        )
    return value


@dataclass(frozen=True)
class NetworkScope:
    """The whole network of locations. Has no parameters."""

    kind: ClassVar[ScopeKind] = ScopeKind.NETWORK

    def __str__(self) -> str:
        return self.kind.value


@dataclass(frozen=True)
class LocationScope:
    """A single location (franchise), addressed by its id.

    Raises:
        InvalidScopeException: If location_id is empty or malformed.
    """

    location_id: str
    kind: ClassVar[ScopeKind] = ScopeKind.LOCATION

    def __post_init__(self) -> None:
        object.__setattr__(self, "location_id", _validate_location_id(self.location_id))

    def __str__(self) -> str:
        return f"{self.kind.value}({self.location_id})"


ScopeKey: TypeAlias = NetworkScope | LocationScope

NETWORK = NetworkScope()


def location_scope(location_id: str) -> LocationScope:
    """Build a LocationScope. Raises InvalidScopeException for bad ids."""
    return LocationScope(location_id)


def scope_from_location_id(location_id: str | None) -> ScopeKey:
    """Map an optional selected location id to a scope (None means network)."""
    if location_id is None:
        return NETWORK
    return LocationScope(location_id)


def scope_equals(a: ScopeKey, b: ScopeKey) -> bool:
    """Return True if both scopes address the same data."""
    return a == b
