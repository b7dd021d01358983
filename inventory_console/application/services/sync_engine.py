"""Session cache with stale-while-revalidate and background refresh.

One slot per (resource name, scope). Reads are synchronous and return an
immutable CacheEntry snapshot; fetching happens in asyncio tasks started
as a side effect of reads, subscriptions, invalidation and the periodic
refresh of observed slots.

Every fetch is tagged with the ActiveScope epoch at dispatch and a
per-slot sequence number. A response is applied only if the epoch is
still current and no later dispatch for the slot has been applied.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections import OrderedDict
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Any

from inventory_console.application.dtos.cache import CacheEntry
from inventory_console.application.services.scope_controller import ActiveScope
from inventory_console.domain.enums import EntryStatus
from inventory_console.domain.scope import ScopeKey
from inventory_console.infrastructure.cache.keys import key_for

logger = logging.getLogger(__name__)

Fetcher = Callable[[], Awaitable[Any]]
EntryCallback = Callable[[CacheEntry[Any]], None]


@dataclass(frozen=True)
class ResourcePolicy:
    """Freshness policy of one resource type.

    Attributes:
        stale_after: Seconds after a successful fetch before the value is stale.
        refetch_interval: Seconds between background refreshes while the
            slot has subscribers; None disables periodic refresh.
        max_backoff: Ceiling for the periodic delay after repeated failures.
    """

    stale_after: float = 60.0
    refetch_interval: float | None = None
    max_backoff: float = 300.0

    def __post_init__(self) -> None:
        if self.stale_after <= 0:
            raise ValueError("stale_after must be positive")
        if self.refetch_interval is not None and self.refetch_interval <= 0:
            raise ValueError("refetch_interval must be positive")
        if self.max_backoff <= 0:
            raise ValueError("max_backoff must be positive")

    def refetch_delay(self, failures: int) -> float | None:
        """Periodic delay: doubles per consecutive failure, capped at max_backoff."""
        if self.refetch_interval is None:
            return None
        if failures <= 0:
            return self.refetch_interval
        ceiling = max(self.max_backoff, self.refetch_interval)
        return min(self.refetch_interval * 2 ** min(failures, 32), ceiling)


@dataclass
class _Fetch:
    """One dispatched fetch: its order within the slot and the epoch it belongs to."""

    seq: int
    epoch: int


@dataclass
class _Slot:
    """Mutable cache slot. Only SyncEngine touches it."""

    key: str
    resource: str
    scope: ScopeKey
    value: Any = None
    fetched_at: float | None = None
    status: EntryStatus = EntryStatus.IDLE
    error: BaseException | None = None
    failed_at: float | None = None
    failures: int = 0
    fetcher: Fetcher | None = None
    in_flight: _Fetch | None = None
    next_seq: int = 0
    applied_seq: int = -1
    invalidated: bool = False
    subscribers: list[EntryCallback] = field(default_factory=list)
    refresh_task: asyncio.Task[None] | None = None
    stale_timer: asyncio.TimerHandle | None = None


class Subscription:
    """Handle returned by SyncEngine.subscribe. unsubscribe() is idempotent."""

    def __init__(self, engine: SyncEngine, key: str, callback: EntryCallback) -> None:
        self._engine = engine
        self._key = key
        self._callback: EntryCallback | None = callback

    @property
    def active(self) -> bool:
        return self._callback is not None

    def unsubscribe(self) -> None:
        """Release the registration; stops periodic refresh if it was the last one."""
        if self._callback is None:
            return
        self._engine._remove_subscriber(self._key, self._callback)
        self._callback = None


class SyncEngine:
    """Fetches, caches and refreshes named resources per scope.

    Freshness policy:
    - first read of a slot dispatches a fetch (status loading);
    - fresh values are served without fetching;
    - once older than stale_after the slot turns stale, keeps serving its
      value, and dispatches one background refetch;
    - observed slots are refreshed every refetch_interval, backing off on
      repeated failures;
    - a failed fetch keeps the last good value (status error) and is retried
      at the next natural refresh point or on invalidate().
    """

    def __init__(
        self,
        active_scope: ActiveScope,
        *,
        clock: Callable[[], float] = time.monotonic,
        default_policy: ResourcePolicy | None = None,
        max_entries: int | None = None,
    ) -> None:
        """Initialize an empty cache table.

        Args:
            active_scope: Session ActiveScope whose epoch tags each fetch.
            clock: Monotonic clock in seconds (injectable for tests).
            default_policy: Policy for resources not registered explicitly.
            max_entries: Optional soft bound on the number of slots.
        """
        self.active_scope = active_scope
        self._clock = clock
        self._default_policy = default_policy or ResourcePolicy()
        self._policies: dict[str, ResourcePolicy] = {}
        self._max_entries = max_entries
        self._slots: OrderedDict[str, _Slot] = OrderedDict()
        self._fetch_tasks: set[asyncio.Task[None]] = set()

    # ---- Configuration ----

    def register(self, resource_name: str, policy: ResourcePolicy) -> None:
        """Set the freshness policy of a resource type."""
        self._policies[resource_name] = policy

    def policy_for(self, resource_name: str) -> ResourcePolicy:
        """Return the policy of a resource (the default if unregistered)."""
        return self._policies.get(resource_name, self._default_policy)

    # ---- Public contract ----

    def get(self, resource_name: str, scope: ScopeKey, fetcher: Fetcher) -> CacheEntry[Any]:
        """Return the slot's current state, dispatching a fetch if the policy says so.

        Never waits for the fetch. Must be called from within a running
        event loop when a fetch is needed.
        """
        slot = self._slot(resource_name, scope)
        slot.fetcher = fetcher
        policy = self.policy_for(resource_name)
        now = self._clock()
        if slot.status is EntryStatus.FRESH and self._is_past_stale(slot):
            self._set_status(slot, EntryStatus.STALE)
        if self._needs_fetch(slot, policy, now):
            self._dispatch(slot)
        return self._snapshot(slot)

    def peek(self, resource_name: str, scope: ScopeKey) -> CacheEntry[Any] | None:
        """Return the slot's state without side effects (None if never requested)."""
        slot = self._slots.get(key_for(resource_name, scope))
        return self._snapshot(slot) if slot is not None else None

    def invalidate(self, resource_name: str, scope: ScopeKey) -> None:
        """Force the next read of the slot to refetch regardless of freshness.

        Observed slots with a known fetcher are refetched right away.
        """
        slot = self._slots.get(key_for(resource_name, scope))
        if slot is not None:
            self._invalidate_slot(slot)

    def invalidate_all(self, resource_name: str | None = None) -> int:
        """Invalidate every slot, or every slot of one resource. Returns the count."""
        slots = [
            slot
            for slot in self._slots.values()
            if resource_name is None or slot.resource == resource_name
        ]
        for slot in slots:
            self._invalidate_slot(slot)
        if slots:
            logger.info("Cache INVALIDATE: %s (%s entries)", resource_name or "*", len(slots))
        return len(slots)

    def subscribe(
        self,
        resource_name: str,
        scope: ScopeKey,
        callback: EntryCallback,
        fetcher: Fetcher | None = None,
    ) -> Subscription:
        """Call callback with the new entry on every state change of the slot.

        While at least one subscriber is registered the slot is refreshed
        periodically (if its policy has a refetch_interval).
        """
        slot = self._slot(resource_name, scope)
        if fetcher is not None:
            slot.fetcher = fetcher
        slot.subscribers.append(callback)
        self._ensure_refresh_task(slot)
        self._schedule_stale_timer(slot)
        return Subscription(self, slot.key, callback)

    def subscriber_count(self, resource_name: str, scope: ScopeKey) -> int:
        slot = self._slots.get(key_for(resource_name, scope))
        return len(slot.subscribers) if slot is not None else 0

    def __len__(self) -> int:
        return len(self._slots)

    async def drain(self) -> None:
        """Wait until no fetch is in flight (refresh loops keep running)."""
        while self._fetch_tasks:
            await asyncio.gather(*list(self._fetch_tasks), return_exceptions=True)

    async def aclose(self) -> None:
        """Cancel periodic refreshes and in-flight fetches (session end)."""
        tasks: list[asyncio.Task[None]] = list(self._fetch_tasks)
        for slot in self._slots.values():
            slot.subscribers.clear()
            if slot.refresh_task is not None:
                tasks.append(slot.refresh_task)
                slot.refresh_task = None
            self._cancel_stale_timer(slot)
            slot.in_flight = None
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
        self._fetch_tasks.clear()

    # ---- Slots ----

    def _slot(self, resource_name: str, scope: ScopeKey) -> _Slot:
        key = key_for(resource_name, scope)
        slot = self._slots.get(key)
        if slot is not None:
            self._slots.move_to_end(key)
            return slot
        slot = _Slot(key=key, resource=resource_name, scope=scope)
        self._slots[key] = slot
        self._evict_overflow(keep=key)
        return slot

    def _evict_overflow(self, keep: str) -> None:
        """Drop least recently used unobserved, idle slots beyond max_entries."""
        if self._max_entries is None:
            return
        overflow = len(self._slots) - self._max_entries
        if overflow <= 0:
            return
        for key in list(self._slots):
            if overflow <= 0:
                break
            slot = self._slots[key]
            if key == keep or slot.subscribers or slot.in_flight is not None:
                continue
            del self._slots[key]
            overflow -= 1
            logger.debug("Cache EVICT: %s", key)

    def _is_past_stale(self, slot: _Slot) -> bool:
        return (
            slot.fetched_at is not None
            and self._clock() - slot.fetched_at >= self.policy_for(slot.resource).stale_after
        )

    def _snapshot(self, slot: _Slot) -> CacheEntry[Any]:
        status = slot.status
        # Reads between state changes still report a fresh value as stale once it ages out.
        if status is EntryStatus.FRESH and self._is_past_stale(slot):
            status = EntryStatus.STALE
        return CacheEntry(
            value=slot.value,
            fetched_at=slot.fetched_at,
            status=status,
            error=slot.error,
            is_fetching=slot.in_flight is not None,
        )

    def _set_status(self, slot: _Slot, status: EntryStatus) -> None:
        if slot.status is status:
            return
        slot.status = status
        self._notify(slot)

    def _notify(self, slot: _Slot) -> None:
        entry = self._snapshot(slot)
        for callback in list(slot.subscribers):
            try:
                callback(entry)
            except Exception:
                logger.exception("Cache subscriber failed for %s", slot.key)

    # ---- Fetching ----

    def _needs_fetch(self, slot: _Slot, policy: ResourcePolicy, now: float) -> bool:
        if slot.invalidated:
            return True
        if slot.in_flight is not None and slot.in_flight.epoch == self.active_scope.epoch:
            return False
        if slot.status in (EntryStatus.IDLE, EntryStatus.LOADING, EntryStatus.STALE):
            return True
        if slot.status is EntryStatus.ERROR:
            return slot.failed_at is None or now - slot.failed_at >= policy.stale_after
        return False

    def _invalidate_slot(self, slot: _Slot) -> None:
        slot.invalidated = True
        if slot.subscribers and slot.fetcher is not None:
            self._dispatch(slot)

    def _dispatch(self, slot: _Slot) -> asyncio.Task[None] | None:
        """Start a fetch for the slot tagged with the current epoch."""
        if slot.fetcher is None:
            return None
        loop = asyncio.get_running_loop()
        fetch = _Fetch(seq=slot.next_seq, epoch=self.active_scope.epoch)
        slot.next_seq += 1
        slot.in_flight = fetch
        slot.invalidated = False
        logger.debug("Cache FETCH: %s (seq %s, epoch %s)", slot.key, fetch.seq, fetch.epoch)
        try:
            pending: Awaitable[Any] = slot.fetcher()
        except Exception as e:
            pending = _reraise(e)
        task = loop.create_task(self._settle(slot, fetch, pending))
        self._fetch_tasks.add(task)
        task.add_done_callback(self._fetch_tasks.discard)
        if slot.fetched_at is None:
            self._set_status(slot, EntryStatus.LOADING)
        return task

    async def _settle(self, slot: _Slot, fetch: _Fetch, pending: Awaitable[Any]) -> None:
        try:
            value = await pending
        except Exception as e:
            self._apply(slot, fetch, error=e)
        else:
            self._apply(slot, fetch, value=value)

    def _apply(
        self,
        slot: _Slot,
        fetch: _Fetch,
        *,
        value: Any = None,
        error: BaseException | None = None,
    ) -> None:
        """Apply a fetch result unless it was superseded."""
        if slot.in_flight is fetch:
            slot.in_flight = None
        if fetch.epoch != self.active_scope.epoch:
            logger.debug(
                "Cache DISCARD: %s (epoch %s, current %s)",
                slot.key,
                fetch.epoch,
                self.active_scope.epoch,
            )
            return
        if fetch.seq <= slot.applied_seq:
            logger.debug("Cache DISCARD: %s (seq %s already superseded)", slot.key, fetch.seq)
            return
        slot.applied_seq = fetch.seq
        now = self._clock()
        if error is None:
            slot.value = value
            slot.fetched_at = now
            slot.status = EntryStatus.FRESH
            slot.error = None
            slot.failed_at = None
            slot.failures = 0
            self._schedule_stale_timer(slot)
        else:
            slot.status = EntryStatus.ERROR
            slot.error = error
            slot.failed_at = now
            slot.failures += 1
            logger.warning(
                "Fetch failed for %s (%s consecutive): %s", slot.key, slot.failures, error
            )
        self._notify(slot)

    # ---- Stale transition ----

    def _schedule_stale_timer(self, slot: _Slot) -> None:
        """Arm a timer that turns an observed fresh slot stale when it ages out."""
        self._cancel_stale_timer(slot)
        if not slot.subscribers or slot.status is not EntryStatus.FRESH or slot.fetched_at is None:
            return
        remaining = self.policy_for(slot.resource).stale_after - (self._clock() - slot.fetched_at)
        slot.stale_timer = asyncio.get_running_loop().call_later(
            max(remaining, 0.0), self._mark_stale, slot, slot.fetched_at
        )

    def _cancel_stale_timer(self, slot: _Slot) -> None:
        if slot.stale_timer is not None:
            slot.stale_timer.cancel()
            slot.stale_timer = None

    def _mark_stale(self, slot: _Slot, fetched_at: float) -> None:
        slot.stale_timer = None
        if slot.fetched_at == fetched_at and slot.status is EntryStatus.FRESH:
            logger.debug("Cache STALE: %s", slot.key)
            self._set_status(slot, EntryStatus.STALE)

    # ---- Periodic refresh ----

    def _ensure_refresh_task(self, slot: _Slot) -> None:
        policy = self.policy_for(slot.resource)
        if policy.refetch_interval is None:
            return
        if slot.refresh_task is not None and not slot.refresh_task.done():
            return
        slot.refresh_task = asyncio.get_running_loop().create_task(
            self._refresh_periodically(slot, policy)
        )

    async def _refresh_periodically(self, slot: _Slot, policy: ResourcePolicy) -> None:
        while True:
            delay = policy.refetch_delay(slot.failures)
            if delay is None:
                return
            await asyncio.sleep(delay)
            if not slot.subscribers:
                return
            if slot.in_flight is not None and slot.in_flight.epoch == self.active_scope.epoch:
                continue
            task = self._dispatch(slot)
            if task is not None:
                # Next delay depends on this fetch's outcome.
                await asyncio.wait({task})

    def _remove_subscriber(self, key: str, callback: EntryCallback) -> None:
        slot = self._slots.get(key)
        if slot is None:
            return
        try:
            slot.subscribers.remove(callback)
        except ValueError:
            return
        if slot.subscribers:
            return
        self._cancel_stale_timer(slot)
        if slot.refresh_task is not None:
            slot.refresh_task.cancel()
            slot.refresh_task = None


async def _reraise(error: Exception) -> Any:
    raise error
