"""Core: config, constants, session composition and application bootstrap.

Single place for settings and shared constants.
"""

from inventory_console.core.config import Settings, get_settings

__all__ = ["Settings", "get_settings"]
