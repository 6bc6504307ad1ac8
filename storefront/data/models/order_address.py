# storefront/data/models/order_address.py
from sqlalchemy import Column, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import relationship

from storefront.data.database import Base
from storefront.data.models.address import address_type_enum


class OrderAddressModel(Base):
    """Kopia adresu z chwili złożenia zamówienia."""

    __tablename__ = "order_addresses"

    id = Column(Integer, primary_key=True)
    order_id = Column(Integer, ForeignKey("orders.id", ondelete="CASCADE"), nullable=False, index=True)
    type = Column(address_type_enum, nullable=False)

    street_address = Column(String, nullable=False)
    apartment = Column(String, nullable=True)
    city = Column(String, nullable=False)
    state = Column(String, nullable=False)
    postal_code = Column(String, nullable=False)
    country = Column(String, nullable=False)

    order = relationship("OrderModel", back_populates="addresses")

    __table_args__ = (UniqueConstraint("order_id", "type", name="u_order_address_type"),)
