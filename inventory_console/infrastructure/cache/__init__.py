"""Cache: key utilities for the session cache.

Key format is in keys.py (DRY). The cache table itself is owned by
application.services.sync_engine.
"""

from inventory_console.infrastructure.cache.keys import (
    key_for,
    resource_variant,
    scope_segment,
)

__all__ = [
    "key_for",
    "resource_variant",
    "scope_segment",
]
