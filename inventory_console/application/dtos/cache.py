"""DTOs for the session cache read model."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

from inventory_console.domain.enums import EntryStatus

T = TypeVar("T")


@dataclass(frozen=True)
class CacheEntry(Generic[T]):
    """Immutable snapshot of one (resource, scope) cache slot.

    fresh implies value is present and younger than the resource's
    stale_after; stale implies value is present and at least that old.
    fetched_at is a monotonic timestamp of the last successful fetch.
    """

    value: T | None = None
    fetched_at: float | None = None
    status: EntryStatus = EntryStatus.IDLE
    error: BaseException | None = None
    is_fetching: bool = False

    @property
    def has_value(self) -> bool:
        """Return True if a value (possibly stale) is available to render."""
        return self.fetched_at is not None
