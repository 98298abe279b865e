"""ORM models for the product store the SQL catalog provider reads.

Products and their variants live in two tables. ``position`` columns keep the
catalog order stable, since match tie-breaks depend on it.
"""

from sqlalchemy import Column, ForeignKey, Index, Integer, String, Text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, relationship

from skumatch.domain.models import CatalogProduct, CatalogVariant
from skumatch.logging import get_logger

logger = get_logger(__name__, component="catalog")

Base = declarative_base()


class ProductModel(Base):
    """ORM model for the products table."""

    __tablename__ = "products"

    id = Column(String(64), primary_key=True, nullable=False)
    sku = Column(String(255), nullable=False, unique=True)
    name = Column(Text, nullable=False, default="")
    description = Column(Text, nullable=True)
    position = Column(Integer, nullable=False, default=0)

    variants = relationship(
        "VariantModel",
        back_populates="product",
        order_by="VariantModel.position",
        cascade="all, delete-orphan",
    )

    __table_args__ = (Index("idx_products_position", "position"),)

    def to_domain(self) -> CatalogProduct:
        """Convert ORM model to domain model."""
        return CatalogProduct(
            id=self.id,
            sku=self.sku,
            name=self.name or "",
            description=self.description,
            variants=tuple(variant.to_domain() for variant in self.variants),
        )

    @classmethod
    def from_domain(cls, product: CatalogProduct, position: int = 0) -> "ProductModel":
        """Create ORM model (with variants) from a domain product.

        Args:
            product: Domain product
            position: Catalog order of the product

        Returns:
            ProductModel instance, not yet added to a session
        """
        return cls(
            id=product.id,
            sku=product.sku,
            name=product.name,
            description=product.description,
            position=position,
            variants=[
                VariantModel(
                    id=variant.id,
                    sku=variant.sku,
                    name=variant.name,
                    position=index,
                )
                for index, variant in enumerate(product.variants)
            ],
        )


class VariantModel(Base):
    """ORM model for the product_variants table."""

    __tablename__ = "product_variants"

    id = Column(String(64), primary_key=True, nullable=False)
    product_id = Column(
        String(64), ForeignKey("products.id", ondelete="CASCADE"), nullable=False
    )
    sku = Column(String(255), nullable=False)
    name = Column(String(255), nullable=True)
    position = Column(Integer, nullable=False, default=0)

    product = relationship("ProductModel", back_populates="variants")

    __table_args__ = (
        Index("idx_variants_product", "product_id"),
        Index("idx_variants_sku", "sku"),
    )

    def to_domain(self) -> CatalogVariant:
        """Convert ORM model to domain model."""
        return CatalogVariant(id=self.id, sku=self.sku, name=self.name)


def create_schema(engine: Engine) -> None:
    """Create the catalog tables if they don't exist.

    Args:
        engine: SQLAlchemy engine instance
    """
    Base.metadata.create_all(engine)
    logger.debug("Catalog schema ensured", extra={"event": "catalog.schema.created"})
