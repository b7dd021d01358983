"""Application services: scope control, session cache, disclosure gateway."""

from inventory_console.application.services.disclosure_gateway import (
    DisclosureGateway,
    project_public_view,
    tax_amount,
    total_price,
)
from inventory_console.application.services.scope_controller import (
    ActiveScope,
    ScopeSwitchController,
)
from inventory_console.application.services.sync_engine import (
    ResourcePolicy,
    Subscription,
    SyncEngine,
)

__all__ = [
    "ActiveScope",
    "DisclosureGateway",
    "ResourcePolicy",
    "ScopeSwitchController",
    "Subscription",
    "SyncEngine",
    "project_public_view",
    "tax_amount",
    "total_price",
]
