"""Application interfaces (ports) implemented by infrastructure."""

from inventory_console.application.interfaces.services import (
    IAuthStateProvider,
    IDashboardBackend,
    INavigator,
    IProductLookup,
    ISelectionStore,
)

__all__ = [
    "IAuthStateProvider",
    "IDashboardBackend",
    "INavigator",
    "IProductLookup",
    "ISelectionStore",
]
