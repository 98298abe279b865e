"""Catalog snapshot sources.

Public API:
    - CatalogProvider: base class, ``async load() -> tuple[CatalogProduct, ...]``
    - StaticCatalogProvider, YamlCatalogProvider, SqlCatalogProvider, HttpCatalogProvider
    - load_snapshot(): resolve a provider or a plain sequence into a snapshot
    - build_provider(): provider from configuration
    - DEMO_CATALOG: illustrative five-product catalog
    - CatalogError, CatalogUnavailableError
"""

from .database import SqlCatalogProvider
from .demo import DEMO_CATALOG
from .exceptions import CatalogError, CatalogUnavailableError
from .factory import build_provider
from .http import HttpCatalogProvider
from .provider import (
    CatalogProvider,
    CatalogSnapshot,
    StaticCatalogProvider,
    YamlCatalogProvider,
    coerce_products,
    load_snapshot,
)

__all__ = [
    "CatalogProvider",
    "CatalogSnapshot",
    "StaticCatalogProvider",
    "YamlCatalogProvider",
    "SqlCatalogProvider",
    "HttpCatalogProvider",
    "build_provider",
    "coerce_products",
    "load_snapshot",
    "DEMO_CATALOG",
    "CatalogError",
    "CatalogUnavailableError",
]
