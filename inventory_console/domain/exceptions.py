"""Domain exceptions for the inventory console.

Scope, fetch, disclosure and auth-state failures. Scope and disclosure
errors are resolved into typed results before they reach the rendering
layer; the HTTP surface maps them to responses in exception handlers.
"""

from typing import Any


class ConsoleException(Exception):
    """Base exception for all console errors.

    All custom exceptions inherit from this class to allow consistent
    error handling and logging.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. location_id, resource).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON error responses."""
        data: dict[str, Any] = {"error": self.error_code, "message": self.message}
        if self.details:
            data["details"] = self.details
        return data


class InvalidScopeException(ConsoleException):
    """Raised when a location identifier is empty or malformed.

    Rejected before any fetch; never falls back to the network scope.
    """

    def __init__(self, location_id: object, reason: str) -> None:
        super().__init__(
            f"Invalid location id {location_id!r}: {reason}",
            "INVALID_SCOPE",
            {"location_id": repr(location_id), "reason": reason},
        )


class FetchFailureException(ConsoleException):
    """Raised by the transport when the backend cannot be reached or errors.

    Stored on the cache entry by the sync engine; never fatal.
    """

    def __init__(
        self,
        resource: str,
        reason: str,
        status_code: int | None = None,
    ) -> None:
        details: dict[str, Any] = {"resource": resource, "reason": reason}
        if status_code is not None:
            details["status_code"] = status_code
        super().__init__(f"Failed to fetch {resource}: {reason}", "FETCH_FAILURE", details)


class NotFoundException(ConsoleException):
    """Raised when a public record is absent or not eligible for disclosure.

    The message is identical for both cases.
    """

    def __init__(self, message: str = "Product not found") -> None:
        super().__init__(message, "NOT_FOUND")


class AuthStateUnavailableException(ConsoleException):
    """Raised when the session token cannot be read or verified.

    Callers treat it as an unauthenticated caller (fail closed).
    """

    def __init__(self, reason: str) -> None:
        super().__init__(
            "Authentication state unavailable",
            "AUTH_STATE_UNAVAILABLE",
            {"reason": reason},
        )
