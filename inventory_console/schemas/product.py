"""Product schemas: the internal record and its public projection.

ProductRecord is whatever the backend holds (cost, stock, supplier and
audit fields included). PublicProductView is the only shape that may
reach an anonymous caller; it forbids extra fields and serializes with
the camelCase names of the public contract.
"""

from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from inventory_console.domain.enums import ProductStatus


class ProductImage(BaseModel):
    """Product image reference."""

    model_config = ConfigDict(extra="allow")

    url: str | None = None


class FranchiseRef(BaseModel):
    """Populated franchise reference on a product record."""

    model_config = ConfigDict(extra="allow")

    id: str | None = Field(default=None, validation_alias=AliasChoices("_id", "id"))
    name: str | None = None
    code: str | None = None


class ProductRecord(BaseModel):
    """Internal product record as returned by the backend (never exposed as-is)."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
    )

    id: str | None = Field(default=None, validation_alias=AliasChoices("_id", "id"))
    sku: str
    name: str
    category: str
    brand: str | None = None
    description: str | None = None
    buying_price: float = 0.0
    selling_price: float = 0.0
    tax_percentage: float = 0.0
    stock_quantity: int = 0
    minimum_stock: int = 0
    images: list[ProductImage] = Field(default_factory=list)
    status: str = ProductStatus.ACTIVE.value
    # Populated reference, a bare id, or absent
    franchise: FranchiseRef | str | None = None

    def is_disclosable(self) -> bool:
        """Return True if the record may be shown on the public surface."""
        return self.status == ProductStatus.ACTIVE.value


class PublicFranchise(BaseModel):
    """Franchise name and code; no internal identifiers."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str
    code: str


class PublicProductView(BaseModel):
    """Minimized, read-only projection of a product for anonymous callers.

    Exact stock quantity, cost price, supplier data, internal ids and audit
    fields are excluded by construction: only the fields below exist.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
        frozen=True,
    )

    name: str
    sku: str
    category: str
    selling_price: float
    tax_percentage: float
    description: str = ""
    brand: str = ""
    image: str | None = None
    is_in_stock: bool
    franchise: PublicFranchise | None = None

    def to_public_dict(self) -> dict[str, Any]:
        """Serialize with the public camelCase field names."""
        return self.model_dump(by_alias=True)


PUBLIC_PRODUCT_FIELDS: frozenset[str] = frozenset(
    field.alias or name for name, field in PublicProductView.model_fields.items()
)
