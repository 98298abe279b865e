"""Core domain models for the product catalog.

This module defines the read-only view of products the matcher works on:
- CatalogVariant: a purchasable variant with its own SKU
- CatalogProduct: a product with a primary SKU, a display name and variants

Both models are frozen. A catalog snapshot is a tuple of CatalogProduct and is
never mutated while a batch runs against it.
"""

from typing import Iterator, Optional, Tuple

from pydantic import BaseModel, Field, field_validator


class CatalogVariant(BaseModel):
    """A product variant with its own stock-keeping unit."""

    id: str = Field(..., description="Variant identifier")
    sku: str = Field(..., description="Variant SKU, expected unique catalog-wide")
    name: Optional[str] = Field(None, description="Variant label, e.g. 'Black'")

    @field_validator("id", "sku", mode="before")
    @classmethod
    def coerce_and_strip(cls, v):
        """Accept numeric identifiers from YAML/SQL and strip whitespace."""
        if isinstance(v, int):
            v = str(v)
        if isinstance(v, str):
            return v.strip()
        return v

    model_config = {"frozen": True}


class CatalogProduct(BaseModel):
    """Read-only product entry available for matching.

    The primary SKU is unique within a catalog (compared case-insensitively);
    variant SKUs are expected to be unique too, but that is not enforced here.
    The display name is a fallback matching signal.
    """

    id: str = Field(..., description="Opaque product identifier")
    sku: str = Field(..., description="Primary SKU")
    name: str = Field("", description="Display name")
    description: Optional[str] = Field(None, description="Long product description")
    variants: Tuple[CatalogVariant, ...] = Field(
        default_factory=tuple, description="Ordered product variants"
    )

    @field_validator("id", "sku", mode="before")
    @classmethod
    def coerce_and_strip(cls, v):
        """Accept numeric identifiers from YAML/SQL and strip whitespace."""
        if isinstance(v, int):
            v = str(v)
        if isinstance(v, str):
            stripped = v.strip()
            if not stripped:
                raise ValueError("Field cannot be empty or whitespace-only")
            return stripped
        return v

    @field_validator("name", mode="before")
    @classmethod
    def default_name(cls, v):
        """Treat a missing name as empty."""
        return "" if v is None else v

    def all_skus(self) -> Iterator[Tuple[str, Optional[CatalogVariant]]]:
        """Yield (sku, variant) pairs: the product's own SKU first, then variants.

        The variant is None for the product's own SKU.
        """
        yield self.sku, None
        for variant in self.variants:
            yield variant.sku, variant

    model_config = {"frozen": True, "json_schema_extra": {"example": {
        "id": "1",
        "sku": "DEMO-001",
        "name": "Premium Wireless Headphones",
        "description": "High-quality wireless headphones with noise cancellation",
        "variants": [{"id": "1", "sku": "DEMO-001-BLK", "name": "Black"}],
    }}}
