"""Inventory analytics console: scope-aware data sync and public product disclosure."""

__version__ = "1.0.0"
