"""Illustrative five-product catalog.

Handy for the CLI's ``demo`` catalog type and for tests. Nothing reads it
implicitly: callers pass it (or a provider wrapping it) explicitly.
"""

from typing import Tuple

from skumatch.domain.models import CatalogProduct, CatalogVariant

DEMO_CATALOG: Tuple[CatalogProduct, ...] = (
    CatalogProduct(
        id="1",
        sku="DEMO-001",
        name="Premium Wireless Headphones",
        description="High-quality wireless headphones with noise cancellation",
        variants=(CatalogVariant(id="1", sku="DEMO-001-BLK", name="Black"),),
    ),
    CatalogProduct(
        id="2",
        sku="DEMO-002",
        name="Smart Watch Series X",
        description="Advanced smartwatch with health monitoring",
        variants=(
            CatalogVariant(id="2", sku="DEMO-002-42-SLV", name="42mm Silver"),
            CatalogVariant(id="3", sku="DEMO-002-46-BLK", name="46mm Black"),
        ),
    ),
    CatalogProduct(
        id="3",
        sku="DEMO-003",
        name="Gaming Mechanical Keyboard",
        description="RGB mechanical keyboard for gaming",
        variants=(CatalogVariant(id="4", sku="DEMO-003-BLUE", name="Blue Switches"),),
    ),
    CatalogProduct(
        id="4",
        sku="DEMO-004",
        name="Wireless Mouse Pro",
        description="Professional wireless mouse with precision tracking",
        variants=(CatalogVariant(id="5", sku="DEMO-004-WHT", name="White"),),
    ),
    CatalogProduct(
        id="5",
        sku="DEMO-005",
        name="USB-C Hub Multi-Port",
        description="7-in-1 USB-C hub with multiple ports",
        variants=(CatalogVariant(id="6", sku="DEMO-005-GRAY", name="Space Gray"),),
    ),
)
