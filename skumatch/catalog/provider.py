"""Catalog providers supplying immutable product snapshots.

A provider is read once per batch. Whatever it returns is frozen into a tuple
so the matcher works on a stable snapshot even if the underlying store
changes while the batch runs.
"""

import asyncio
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Iterable, Sequence, Tuple, Union

import yaml
from pydantic import ValidationError

from skumatch.domain.models import CatalogProduct
from skumatch.logging import get_logger

from .exceptions import CatalogUnavailableError

logger = get_logger(__name__, component="catalog")

CatalogSnapshot = Tuple[CatalogProduct, ...]


class CatalogProvider(ABC):
    """Source of catalog snapshots.

    Subclasses implement load(). Any failure to produce a snapshot must be
    raised as CatalogUnavailableError.
    """

    #: Short label used in logs and error messages.
    source: str = "unknown"

    @abstractmethod
    async def load(self) -> CatalogSnapshot:
        """Read the current catalog snapshot.

        Returns:
            Tuple of CatalogProduct in catalog order

        Raises:
            CatalogUnavailableError: If the snapshot cannot be obtained
        """
        pass

    def close(self) -> None:
        """Release connections or sessions held by the provider."""
        pass


class StaticCatalogProvider(CatalogProvider):
    """Provider over an in-memory product sequence."""

    source = "memory"

    def __init__(self, products: Iterable[CatalogProduct]):
        self._products: CatalogSnapshot = tuple(products)

    async def load(self) -> CatalogSnapshot:
        return self._products


class YamlCatalogProvider(CatalogProvider):
    """Reads a catalog from a YAML file with a top-level ``products`` list.

    Example file::

        products:
          - id: "1"
            sku: DEMO-001
            name: Premium Wireless Headphones
            variants:
              - {id: "1", sku: DEMO-001-BLK, name: Black}
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        self.source = str(self.path)

    async def load(self) -> CatalogSnapshot:
        return await asyncio.to_thread(self.load_sync)

    def load_sync(self) -> CatalogSnapshot:
        """Blocking variant of load()."""
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except FileNotFoundError as e:
            raise CatalogUnavailableError(
                f"Catalog file not found: {self.path}", source=self.source
            ) from e
        except yaml.YAMLError as e:
            raise CatalogUnavailableError(
                f"Failed to parse catalog YAML {self.path}: {e}", source=self.source
            ) from e
        except OSError as e:
            raise CatalogUnavailableError(
                f"Failed to read catalog file {self.path}: {e}", source=self.source
            ) from e

        if data is None:
            data = {}
        if not isinstance(data, dict) or not isinstance(data.get("products", []), list):
            raise CatalogUnavailableError(
                f"Catalog file {self.path} must contain a 'products' list",
                source=self.source,
            )

        products = coerce_products(data.get("products") or [], source=self.source)
        logger.debug(
            "Catalog file loaded",
            extra={
                "event": "catalog.yaml.loaded",
                "path": self.source,
                "product_count": len(products),
            },
        )
        return products


def coerce_products(entries: Sequence[Any], source: str = "memory") -> CatalogSnapshot:
    """Validate raw entries (dicts or CatalogProduct) into a snapshot tuple.

    Args:
        entries: Products or product dicts in catalog order
        source: Label for error messages

    Returns:
        Tuple of CatalogProduct

    Raises:
        CatalogUnavailableError: If any entry is not a valid product
    """
    products = []
    for index, entry in enumerate(entries):
        if isinstance(entry, CatalogProduct):
            products.append(entry)
            continue
        try:
            products.append(CatalogProduct.model_validate(entry))
        except ValidationError as e:
            errors = "; ".join(
                f"{'.'.join(str(loc) for loc in err['loc'])}: {err['msg']}"
                for err in e.errors()
            )
            raise CatalogUnavailableError(
                f"Invalid catalog entry #{index} in {source}: {errors}", source=source
            ) from e
    return tuple(products)


async def load_snapshot(
    catalog: Union[CatalogProvider, Sequence[CatalogProduct], None],
) -> CatalogSnapshot:
    """Resolve a provider or a plain sequence into an immutable snapshot.

    Args:
        catalog: CatalogProvider, sequence of products/dicts, or None

    Returns:
        Tuple of CatalogProduct

    Raises:
        CatalogUnavailableError: If the provider fails or the catalog is missing
    """
    if catalog is None:
        raise CatalogUnavailableError("No catalog supplied", source="none")

    if not isinstance(catalog, CatalogProvider):
        return coerce_products(list(catalog))

    try:
        snapshot = await catalog.load()
    except CatalogUnavailableError:
        raise
    except Exception as e:
        logger.error(
            f"Catalog provider failed: {e}",
            extra={
                "event": "catalog.load.failed",
                "catalog_source": catalog.source,
                "error_type": type(e).__name__,
            },
        )
        raise CatalogUnavailableError(
            f"Catalog could not be loaded from {catalog.source}: {e}",
            source=catalog.source,
        ) from e

    return coerce_products(list(snapshot), source=catalog.source)
