"""DTOs for the disclosure gateway's three outcomes."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TypeAlias

from inventory_console.core.constants import PUBLIC_NOT_FOUND_MESSAGE
from inventory_console.schemas.product import PublicProductView


@dataclass(frozen=True)
class Redirect:
    """Send an authenticated caller to the internal search page."""

    location: str


@dataclass(frozen=True)
class NotFound:
    """Record missing, not disclosable, or backend unreachable (indistinguishable)."""

    message: str = PUBLIC_NOT_FOUND_MESSAGE


DisclosureResult: TypeAlias = Redirect | PublicProductView | NotFound
