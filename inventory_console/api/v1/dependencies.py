"""Presentation-layer dependency injection.

Routes depend on these providers, not on infrastructure directly. Tests
override get_product_lookup to swap the backend.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from inventory_console.application.interfaces.services import IProductLookup
from inventory_console.application.services.disclosure_gateway import DisclosureGateway
from inventory_console.core.config import get_settings
from inventory_console.infrastructure.security.auth_state import StaticAuthStateProvider

SESSION_COOKIE_NAME = "token"

security = HTTPBearer(auto_error=False)


def get_product_lookup(request: Request) -> IProductLookup:
    """Shared backend client created by the lifespan."""
    return request.app.state.product_lookup


def get_session_token(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
) -> str | None:
    """Session token from the Bearer header, else from the session cookie."""
    if credentials is not None and credentials.credentials:
        return credentials.credentials
    return request.cookies.get(SESSION_COOKIE_NAME)


def get_disclosure_gateway(
    lookup: Annotated[IProductLookup, Depends(get_product_lookup)],
    token: Annotated[str | None, Depends(get_session_token)],
) -> DisclosureGateway:
    """Gateway bound to this request's auth state."""
    settings = get_settings()
    return DisclosureGateway(
        lookup,
        auth_state_provider=StaticAuthStateProvider(token, settings),
        search_path=settings.internal_search_path,
    )
