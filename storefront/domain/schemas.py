# storefront/domain/schemas.py
from datetime import datetime
from decimal import Decimal
from typing import Annotated, List

from pydantic import BaseModel, ConfigDict, EmailStr, Field, HttpUrl, PlainSerializer, field_validator

from storefront.domain.enums import AddressType, OrderStatus, ShoeColor, ShoeSize

# w bazie NUMERIC(10,2), w JSON liczba
Money = Annotated[Decimal, PlainSerializer(lambda v: float(v), return_type=float, when_used="json")]


# ---------------------------------------------------------------
# Produkty
# ---------------------------------------------------------------
class ProductCreate(BaseModel):
    """Schema dla tworzenia produktu."""

    name: str = Field(..., min_length=1)
    description: str | None = None
    brand: str = Field(..., min_length=1)
    category: str = Field(..., min_length=1)
    base_price: Decimal = Field(..., gt=0, description="Cena bazowa (musi być > 0)")
    image_url: HttpUrl | None = None


class ProductUpdate(BaseModel):
    """Częściowa aktualizacja produktu, pola pominięte zostają bez zmian."""

    name: str | None = Field(None, min_length=1)
    description: str | None = None
    brand: str | None = Field(None, min_length=1)
    category: str | None = Field(None, min_length=1)
    base_price: Decimal | None = Field(None, gt=0)
    image_url: HttpUrl | None = None
    is_active: bool | None = None


class ProductVariantOut(BaseModel):
    id: int
    product_id: int
    size: ShoeSize
    color: ShoeColor
    stock_quantity: int
    price_adjustment: Money
    sku: str
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ProductOut(BaseModel):
    id: int
    name: str
    description: str | None
    brand: str
    category: str
    base_price: Money
    image_url: str | None
    is_active: bool
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ProductWithVariantsOut(ProductOut):
    variants: List[ProductVariantOut]


# ---------------------------------------------------------------
# Warianty
# ---------------------------------------------------------------
class ProductVariantCreate(BaseModel):
    product_id: int = Field(..., gt=0)
    size: ShoeSize
    color: ShoeColor
    stock_quantity: int = Field(..., ge=0)
    price_adjustment: Decimal = Decimal("0")
    sku: str = Field(..., min_length=1)


class ProductVariantUpdate(BaseModel):
    """Restock / zmiana ceny wariantu."""

    stock_quantity: int | None = Field(None, ge=0)
    price_adjustment: Decimal | None = None
    sku: str | None = Field(None, min_length=1)


class StockCheckOut(BaseModel):
    variant_id: int
    quantity: int
    available: bool


# ---------------------------------------------------------------
# Klienci
# ---------------------------------------------------------------
class CustomerCreate(BaseModel):
    email: EmailStr
    first_name: str = Field(..., min_length=1)
    last_name: str = Field(..., min_length=1)
    phone: str | None = None


class CustomerOut(BaseModel):
    id: int
    email: str
    first_name: str
    last_name: str
    phone: str | None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


# ---------------------------------------------------------------
# Adresy
# ---------------------------------------------------------------
class AddressCreate(BaseModel):
    type: AddressType
    street_address: str = Field(..., min_length=1)
    apartment: str | None = None
    city: str = Field(..., min_length=1)
    state: str = Field(..., min_length=1)
    postal_code: str = Field(..., min_length=1)
    country: str = Field(..., min_length=1)
    is_default: bool = False


class AddressOut(BaseModel):
    id: int
    customer_id: int
    type: AddressType
    street_address: str
    apartment: str | None
    city: str
    state: str
    postal_code: str
    country: str
    is_default: bool
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


# ---------------------------------------------------------------
# Koszyk
# ---------------------------------------------------------------
class CartItemIn(BaseModel):
    """Schema dla dodawania wariantu do koszyka."""

    product_variant_id: int = Field(..., gt=0)
    quantity: int = Field(..., gt=0, description="Ilość (musi być > 0)")


class CartItemUpdate(BaseModel):
    """Nowa ilość pozycji; 0 usuwa pozycję z koszyka."""

    quantity: int = Field(..., ge=0)


class CartProductOut(BaseModel):
    name: str
    brand: str
    base_price: Money
    image_url: str | None


class CartVariantOut(BaseModel):
    id: int
    size: ShoeSize
    color: ShoeColor
    price_adjustment: Money
    product: CartProductOut


class CartLineOut(BaseModel):
    id: int
    quantity: int
    unit_price: Money
    line_total: Money
    product_variant: CartVariantOut


class CartOut(BaseModel):
    """Koszyk z pozycjami i podsumowaniem cen."""

    id: int
    customer_id: int
    created_at: datetime
    updated_at: datetime
    items: List[CartLineOut]
    subtotal: Money
    tax: Money
    shipping: Money
    total: Money


# ---------------------------------------------------------------
# Zamówienia
# ---------------------------------------------------------------
class OrderItemIn(BaseModel):
    product_variant_id: int = Field(..., gt=0)
    quantity: int = Field(..., gt=0)


class OrderCreate(BaseModel):
    """Schema dla tworzenia zamówienia z koszyka klienta."""

    billing_address_id: int = Field(..., gt=0)
    shipping_address_id: int = Field(..., gt=0)
    items: List[OrderItemIn] = Field(..., min_length=1)

    @field_validator("items")
    @classmethod
    def unique_variants(cls, items: List[OrderItemIn]) -> List[OrderItemIn]:
        ids = [i.product_variant_id for i in items]
        if len(ids) != len(set(ids)):
            raise ValueError("Each product variant may appear only once in an order")
        return items


class OrderStatusUpdate(BaseModel):
    status: OrderStatus


class OrderOut(BaseModel):
    id: int
    customer_id: int
    status: OrderStatus
    total_amount: Money
    tax_amount: Money
    shipping_amount: Money
    billing_address_id: int
    shipping_address_id: int
    order_date: datetime
    shipped_date: datetime | None
    delivered_date: datetime | None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class OrderProductOut(BaseModel):
    name: str
    brand: str
    image_url: str | None


class OrderVariantOut(BaseModel):
    size: ShoeSize
    color: ShoeColor
    product: OrderProductOut


class OrderLineOut(BaseModel):
    id: int
    quantity: int
    unit_price: Money
    total_price: Money
    product_variant: OrderVariantOut


class OrderAddressOut(BaseModel):
    type: AddressType
    street_address: str
    apartment: str | None
    city: str
    state: str
    postal_code: str
    country: str


class OrderWithItemsOut(OrderOut):
    items: List[OrderLineOut]
    billing_address: OrderAddressOut
    shipping_address: OrderAddressOut


class HealthOut(BaseModel):
    status: str
    timestamp: datetime
