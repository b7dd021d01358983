"""Active scope and the controller that switches it.

ActiveScope is the session-lifetime record of which scope the console is
looking at, plus an epoch that increases on every change. It is created at
session start, reset at session end, and passed explicitly to whatever
needs it. Only ScopeSwitchController moves it.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable

from inventory_console.application.interfaces.services import ISelectionStore
from inventory_console.domain.exceptions import InvalidScopeException
from inventory_console.domain.scope import (
    NETWORK,
    LocationScope,
    NetworkScope,
    ScopeKey,
)

logger = logging.getLogger(__name__)

ScopeListener = Callable[[ScopeKey, int], None]


class ActiveScope:
    """Current scope plus a monotonically increasing epoch.

    Listeners are called synchronously, in registration order, with the
    (scope, epoch) pair of each transition. If a listener triggers another
    transition, the rest of the older notification is dropped: the newer
    transition has already reached every listener.
    """

    def __init__(self) -> None:
        """Start in the network view at epoch 0."""
        self._scope: ScopeKey = NETWORK
        self._epoch = 0
        self._listeners: list[ScopeListener] = []

    @property
    def scope(self) -> ScopeKey:
        """The scope currently in view."""
        return self._scope

    @property
    def epoch(self) -> int:
        """Number of transitions so far (never decreases)."""
        return self._epoch

    def snapshot(self) -> tuple[ScopeKey, int]:
        """Return a consistent (scope, epoch) pair."""
        return self._scope, self._epoch

    def subscribe(self, listener: ScopeListener) -> Callable[[], None]:
        """Register a listener; returns a callable that removes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            try:
                self._listeners.remove(listener)
            except ValueError:
                pass

        return unsubscribe

    def _advance(self, scope: ScopeKey) -> int:
        """Move to scope, bump the epoch, notify listeners. Controller use only."""
        self._scope = scope
        self._epoch += 1
        epoch = self._epoch
        logger.debug("Active scope -> %s (epoch %s)", scope, epoch)
        for listener in list(self._listeners):
            if self._epoch != epoch:
                break
            try:
                listener(scope, epoch)
            except Exception:
                logger.exception("Scope listener failed for %s (epoch %s)", scope, epoch)
        return epoch

    def reset(self) -> None:
        """End of session: drop listeners and return to the network view.

        The epoch still advances so responses to fetches dispatched during
        the session are discarded.
        """
        self._listeners.clear()
        self._scope = NETWORK
        self._epoch += 1


class ScopeSwitchController:
    """Transitions between NetworkView and LocationView(id).

    Every transition bumps the epoch, even when switching to the scope
    already in view. Cache entries of other scopes are left in place.
    """

    def __init__(
        self,
        active_scope: ActiveScope,
        selection_store: ISelectionStore | None = None,
    ) -> None:
        """Initialize with the session's active scope.

        Args:
            active_scope: Session ActiveScope to mutate.
            selection_store: Optional store that remembers the selected location.
        """
        self.active_scope = active_scope
        self.selection_store = selection_store

    @property
    def is_network_view(self) -> bool:
        """True when the whole network is in view."""
        return isinstance(self.active_scope.scope, NetworkScope)

    @property
    def current_location_id(self) -> str | None:
        """Selected location id, or None in the network view."""
        scope = self.active_scope.scope
        return scope.location_id if isinstance(scope, LocationScope) else None

    def switch_to_location(self, location_id: str) -> LocationScope:
        """Switch to a single location.

        Raises:
            InvalidScopeException: If location_id is empty or malformed.
                The active scope is left unchanged.
        """
        scope = LocationScope(location_id)
        self._transition(scope)
        return scope

    def switch_to_network(self) -> NetworkScope:
        """Switch to the network-wide view."""
        self._transition(NETWORK)
        return NETWORK

    def restore(self, known_location_ids: Iterable[str]) -> ScopeKey:
        """Re-select the saved location if it is still one of known_location_ids.

        With an empty known set nothing happens (the location list has not
        loaded yet). A saved id that is unknown or malformed is cleared.
        """
        known = set(known_location_ids)
        if self.selection_store is None or not known:
            return self.active_scope.scope
        saved = self.selection_store.load()
        if saved is None:
            return self.active_scope.scope
        if saved not in known:
            logger.info("Saved location %s no longer exists; staying on network view", saved)
            self.selection_store.save(None)
            return self.active_scope.scope
        try:
            return self.switch_to_location(saved)
        except InvalidScopeException:
            logger.warning("Discarding malformed saved location id %r", saved)
            self.selection_store.save(None)
            return self.active_scope.scope

    def reconcile(self, known_location_ids: Iterable[str]) -> ScopeKey:
        """Fall back to the network view if the selected location disappeared."""
        known = set(known_location_ids)
        location_id = self.current_location_id
        if location_id is not None and known and location_id not in known:
            logger.info("Location %s no longer exists; switching to network view", location_id)
            return self.switch_to_network()
        return self.active_scope.scope

    def _transition(self, scope: ScopeKey) -> None:
        if self.selection_store is not None:
            self.selection_store.save(
                scope.location_id if isinstance(scope, LocationScope) else None
            )
        self.active_scope._advance(scope)
