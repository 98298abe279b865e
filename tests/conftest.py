"""Shared fixtures for the SKU matcher tests."""

import logging

import pytest

from skumatch.catalog import DEMO_CATALOG
from skumatch.domain.models import CatalogProduct, CatalogVariant
from skumatch.logging.context import clear_log_context
from skumatch.matching import SkuMatcher


@pytest.fixture(autouse=True)
def clean_log_context():
    """Clear logging context before and after each test."""
    clear_log_context()
    yield
    clear_log_context()


@pytest.fixture
def demo_catalog():
    """The five-product demo catalog."""
    return DEMO_CATALOG


@pytest.fixture
def matcher():
    """Matcher with the default score table."""
    return SkuMatcher()


@pytest.fixture
def small_catalog():
    """Two products with overlapping SKUs and names for tie-break tests."""
    return (
        CatalogProduct(
            id="10",
            sku="ABC-100",
            name="Red Widget",
            variants=(CatalogVariant(id="10a", sku="ABC-100-L"),),
        ),
        CatalogProduct(
            id="20",
            sku="ABC-200",
            name="Blue Widget",
            variants=(
                CatalogVariant(id="20a", sku="XYZ-9"),
                CatalogVariant(id="20b", sku="ABC-200-XL"),
            ),
        ),
    )


ENV_VARS = ("LOG_LEVEL", "DATABASE_URL", "CATALOG_PATH", "CATALOG_API_TOKEN", "ENVIRONMENT")


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Unset the variables the environment loader reads."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def restore_root_logger():
    """Undo configure_logging(): drop its handler and reset the root level."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    for handler in list(root.handlers):
        if handler not in handlers:
            root.removeHandler(handler)
    root.setLevel(level)
