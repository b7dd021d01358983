"""DTOs for the caller's authentication state."""

from dataclasses import dataclass


@dataclass(frozen=True)
class AuthState:
    """Whether the caller holds a valid session, and who they are."""

    authenticated: bool
    principal: str | None = None


ANONYMOUS = AuthState(authenticated=False)
