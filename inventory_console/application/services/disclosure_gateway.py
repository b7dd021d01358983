"""Disclosure gateway for the anonymous product page.

Decides, in a fixed order, between three outcomes for a lookup key:

1. authenticated caller -> Redirect to the internal search (no fetch);
2. record missing, not disclosable, or backend failure -> NotFound;
3. otherwise -> PublicProductView, a projection of enumerated fields.

Auth-state failures count as unauthenticated. Backend failures and
missing records produce the same NotFound so the public surface cannot be
used to discover which keys exist.
"""

from __future__ import annotations

import logging
from urllib.parse import urlencode

from inventory_console.application.dtos.auth import ANONYMOUS, AuthState
from inventory_console.application.dtos.disclosure import (
    DisclosureResult,
    NotFound,
    Redirect,
)
from inventory_console.application.interfaces.services import (
    IAuthStateProvider,
    INavigator,
    IProductLookup,
)
from inventory_console.core.constants import SEARCH_QUERY_PARAM
from inventory_console.schemas.product import (
    FranchiseRef,
    ProductRecord,
    PublicFranchise,
    PublicProductView,
)

logger = logging.getLogger(__name__)


def normalize_lookup_key(lookup_key: str | None) -> str:
    """Strip and upper-case a SKU (SKUs are stored upper-case)."""
    return (lookup_key or "").strip().upper()


def internal_search_location(search_path: str, lookup_key: str) -> str:
    """Path of the internal product search filtered by lookup_key."""
    return f"{search_path}?{urlencode({SEARCH_QUERY_PARAM: lookup_key})}"


def project_public_view(record: ProductRecord) -> PublicProductView:
    """Project a record onto the public fields only.

    Stock is reduced to a boolean; the franchise is included only when it
    is a populated reference with a name and code.
    """
    franchise: PublicFranchise | None = None
    if isinstance(record.franchise, FranchiseRef) and record.franchise.name and record.franchise.code:
        franchise = PublicFranchise(name=record.franchise.name, code=record.franchise.code)
    image = next((img.url for img in record.images if img.url), None)
    return PublicProductView(
        name=record.name,
        sku=record.sku,
        category=record.category,
        selling_price=record.selling_price,
        tax_percentage=record.tax_percentage,
        description=record.description or "",
        brand=record.brand or "",
        image=image,
        is_in_stock=record.stock_quantity > 0,
        franchise=franchise,
    )


def tax_amount(view: PublicProductView) -> float:
    """Tax on the selling price, from the view's own price and tax percentage."""
    return view.selling_price * view.tax_percentage / 100


def total_price(view: PublicProductView) -> float:
    """Selling price including tax."""
    return view.selling_price + tax_amount(view)


class DisclosureGateway:
    """Resolves a public lookup key into Redirect, PublicProductView or NotFound."""

    def __init__(
        self,
        lookup: IProductLookup,
        *,
        auth_state_provider: IAuthStateProvider | None = None,
        navigator: INavigator | None = None,
        search_path: str = "/products",
    ) -> None:
        """Initialize the gateway.

        Args:
            lookup: Backend product lookup by key.
            auth_state_provider: Source of the caller's auth state when
                resolve() is not given one explicitly.
            navigator: Optional navigation primitive told about redirects.
            search_path: Internal search page authenticated callers go to.
        """
        self.lookup = lookup
        self.auth_state_provider = auth_state_provider
        self.navigator = navigator
        self.search_path = search_path

    def _evaluate_auth_state(self, auth_state: AuthState | None) -> AuthState:
        """Return the caller's auth state; any failure reads as anonymous."""
        if auth_state is not None:
            return auth_state
        if self.auth_state_provider is None:
            return ANONYMOUS
        try:
            return self.auth_state_provider.get_auth_state()
        except Exception as e:
            logger.warning("Auth state unavailable, treating caller as anonymous: %s", e)
            return ANONYMOUS

    async def resolve(
        self,
        lookup_key: str | None,
        auth_state: AuthState | None = None,
    ) -> DisclosureResult:
        """Resolve lookup_key for the caller.

        Args:
            lookup_key: Public product key (SKU) from the URL.
            auth_state: Caller's auth state; read from the provider if None.

        Returns:
            Redirect, PublicProductView, or NotFound.
        """
        key = normalize_lookup_key(lookup_key)

        # Auth is checked before anything is fetched.
        state = self._evaluate_auth_state(auth_state)
        if state.authenticated and key:
            redirect = Redirect(location=internal_search_location(self.search_path, key))
            if self.navigator is not None:
                self.navigator.redirect_to(redirect.location)
            return redirect

        if not key:
            return NotFound()

        try:
            record = await self.lookup.fetch_product_by_lookup_key(key)
        except Exception as e:
            logger.warning("Public product lookup failed: %s", e)
            return NotFound()

        if record is None or not record.is_disclosable():
            return NotFound()
        return project_public_view(record)
