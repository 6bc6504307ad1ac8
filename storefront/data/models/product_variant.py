# storefront/data/models/product_variant.py
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Enum, ForeignKey, Integer, Numeric, String, UniqueConstraint
from sqlalchemy.orm import relationship

from storefront.data.database import Base
from storefront.domain.enums import ShoeColor, ShoeSize, enum_values


class ProductVariantModel(Base):
    __tablename__ = "product_variants"

    id = Column(Integer, primary_key=True)
    product_id = Column(Integer, ForeignKey("products.id", ondelete="CASCADE"), nullable=False, index=True)

    size = Column(Enum(ShoeSize, name="shoe_size", values_callable=enum_values), nullable=False)
    color = Column(Enum(ShoeColor, name="shoe_color", values_callable=enum_values), nullable=False)
    stock_quantity = Column(Integer, nullable=False, default=0)
    price_adjustment = Column(Numeric(10, 2), nullable=False, default=0)
    sku = Column(String, nullable=False, unique=True)

    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
    updated_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))

    product = relationship("ProductModel", back_populates="variants")

    __table_args__ = (
        UniqueConstraint("product_id", "size", "color", name="u_variant_product_size_color"),
    )
