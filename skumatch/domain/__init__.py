"""Domain models for catalog products and variants."""

from .models import CatalogProduct, CatalogVariant

__all__ = ["CatalogProduct", "CatalogVariant"]
