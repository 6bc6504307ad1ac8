#import wszystkich modeli żeby SQLAlchemy je zarejestrował w Base.metadata

from storefront.data.models.product import ProductModel
from storefront.data.models.product_variant import ProductVariantModel
from storefront.data.models.customer import CustomerModel
from storefront.data.models.cart import CartModel
from storefront.data.models.cart_item import CartItemModel
from storefront.data.models.address import AddressModel
from storefront.data.models.order import OrderModel
from storefront.data.models.order_item import OrderItemModel
from storefront.data.models.order_address import OrderAddressModel

__all__ = [
    "ProductModel",
    "ProductVariantModel",
    "CustomerModel",
    "CartModel",
    "CartItemModel",
    "AddressModel",
    "OrderModel",
    "OrderItemModel",
    "OrderAddressModel",
]
