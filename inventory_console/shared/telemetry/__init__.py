"""Telemetry: logging setup."""

from inventory_console.shared.telemetry.logging import (
    RequestIdFilter,
    get_logger,
    setup_logging,
)

__all__ = ["RequestIdFilter", "get_logger", "setup_logging"]
