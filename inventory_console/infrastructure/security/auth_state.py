"""Caller authentication state derived from a session token.

A missing token is anonymous. A token that is present but cannot be
verified raises AuthStateUnavailableException; the disclosure gateway
treats that as anonymous too.
"""

from __future__ import annotations

from collections.abc import Callable

from inventory_console.application.dtos.auth import ANONYMOUS, AuthState
from inventory_console.core.config import Settings
from inventory_console.domain.exceptions import AuthStateUnavailableException
from inventory_console.infrastructure.security.jwt import verify_token


def auth_state_from_token(token: str | None, settings: Settings | None = None) -> AuthState:
    """Return the auth state for a raw session token.

    Raises:
        AuthStateUnavailableException: If the token is present but invalid.
    """
    if token is None or not token.strip():
        return ANONYMOUS
    try:
        payload = verify_token(token.strip(), settings)
    except ValueError as e:
        raise AuthStateUnavailableException(str(e)) from e
    return AuthState(authenticated=True, principal=str(payload["sub"]))


class TokenAuthStateProvider:
    """Reads the session token from a store callable on every evaluation."""

    def __init__(
        self,
        token_provider: Callable[[], str | None],
        settings: Settings | None = None,
    ) -> None:
        self._token_provider = token_provider
        self._settings = settings

    def get_auth_state(self) -> AuthState:
        try:
            token = self._token_provider()
        except Exception as e:
            raise AuthStateUnavailableException(f"token store unreadable: {e}") from e
        return auth_state_from_token(token, self._settings)


class StaticAuthStateProvider:
    """Auth state decided up front (e.g. per HTTP request)."""

    def __init__(self, token: str | None, settings: Settings | None = None) -> None:
        self._token = token
        self._settings = settings

    def get_auth_state(self) -> AuthState:
        return auth_state_from_token(self._token, self._settings)
