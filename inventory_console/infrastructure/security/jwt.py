"""JWT session token creation and verification.

Uses inventory_console.core.config for secret and algorithm.
"""

from datetime import UTC, datetime, timedelta
from typing import Any, cast

from jose import JWTError, jwt

from inventory_console.core.config import Settings, get_settings


def create_access_token(
    data: dict[str, Any],
    expires_delta: timedelta | None = None,
    settings: Settings | None = None,
) -> str:
    """Create a JWT access token with the given claims.

    Args:
        data: Claims to encode (e.g. sub, role).
        expires_delta: Optional TTL; else uses settings.access_token_expire_minutes.
        settings: Optional settings; defaults to get_settings().

    Returns:
        Encoded JWT string.
    """
    settings = settings or get_settings()
    to_encode = data.copy()
    if expires_delta is not None:
        expire = datetime.now(UTC) + expires_delta
    else:
        expire = datetime.now(UTC) + timedelta(
            minutes=settings.access_token_expire_minutes
        )
    to_encode["exp"] = expire
    encoded = jwt.encode(
        to_encode,
        settings.secret_key.get_secret_value(),
        algorithm=settings.algorithm,
    )
    return cast(str, encoded)


def verify_token(token: str, settings: Settings | None = None) -> dict[str, Any]:
    """Verify and decode a JWT. Returns the payload.

    Enforces presence of exp and sub. Raises ValueError if the token is
    invalid, expired, missing required claims, or no secret is configured.

    Args:
        token: JWT string (e.g. from Authorization header or cookie).
        settings: Optional settings; defaults to get_settings().

    Returns:
        Decoded payload dict.

    Raises:
        ValueError: If the token cannot be verified.
    """
    settings = settings or get_settings()
    secret = settings.secret_key.get_secret_value()
    if not secret:
        raise ValueError("No secret key configured; tokens cannot be verified")
    try:
        payload = jwt.decode(
            token,
            secret,
            algorithms=[settings.algorithm],
            options={"require_exp": True, "require_sub": True},
        )
    except JWTError as e:
        raise ValueError(f"Invalid token: {e!s}") from e
    if "sub" not in payload:
        raise ValueError("Token missing required claim: sub")
    return payload
