"""Session-token security: JWT verification and caller auth state."""

from inventory_console.infrastructure.security.auth_state import (
    StaticAuthStateProvider,
    TokenAuthStateProvider,
    auth_state_from_token,
)
from inventory_console.infrastructure.security.jwt import (
    create_access_token,
    verify_token,
)

__all__ = [
    "StaticAuthStateProvider",
    "TokenAuthStateProvider",
    "auth_state_from_token",
    "create_access_token",
    "verify_token",
]
