# storefront/services/cart_service.py
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Dict

from sqlalchemy.orm import Session

from storefront.data.models.cart import CartModel
from storefront.data.models.cart_item import CartItemModel
from storefront.domain.errors import ConflictError, NotFoundError
from storefront.domain.pricing import price_summary, round2, unit_price
from storefront.repos.cart_repo import CartRepo
from storefront.repos.customer_repo import CustomerRepo
from storefront.repos.product_repo import ProductRepo
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class CartService:
    """
    Use case'y koszyka:
    query (get_customer_cart) - odczyt + podsumowanie cen,
    commands (add, update quantity, remove) - zmiany pozycji ze sprawdzeniem stanu magazynu
    """

    def __init__(self, db: Session):
        self.repo = CartRepo(db)
        self.customer_repo = CustomerRepo(db)
        self.product_repo = ProductRepo(db)

    def _ensure_cart(self, customer_id: int) -> CartModel:
        if not self.customer_repo.get_customer(customer_id):
            raise NotFoundError(f"Customer not found (id {customer_id})")

        cart = self.repo.get_cart_by_customer(customer_id)
        if cart:
            return cart

        # koszyk tworzony leniwie przy pierwszym dostępie
        cart = self.repo.create_cart(CartModel(customer_id=customer_id))
        self.repo.commit()
        logger.info(f"Created missing cart {cart.id} for customer {customer_id}")
        return cart

    def _get_owned_item(self, customer_id: int, item_id: int) -> CartItemModel:
        item = self.repo.get_cart_item_by_id(item_id)
        if not item:
            raise NotFoundError(f"Cart item not found (id {item_id})")
        if item.cart.customer_id != customer_id:
            raise PermissionError("Cart item does not belong to customer")
        return item

    def _touch(self, cart: CartModel) -> None:
        cart.updated_at = datetime.now(timezone.utc)

    #query
    def get_customer_cart(self, customer_id: int) -> Dict[str, Any]:
        cart = self._ensure_cart(customer_id)
        items = self.repo.get_cart_items(cart.id)

        lines = []
        subtotal = Decimal("0.00")
        for item in items:
            variant = item.product_variant
            product = variant.product
            price = unit_price(product.base_price, variant.price_adjustment)
            line_total = round2(price * item.quantity)
            subtotal += line_total

            lines.append(
                {
                    "id": item.id,
                    "quantity": item.quantity,
                    "unit_price": price,
                    "line_total": line_total,
                    "product_variant": {
                        "id": variant.id,
                        "size": variant.size,
                        "color": variant.color,
                        "price_adjustment": variant.price_adjustment,
                        "product": {
                            "name": product.name,
                            "brand": product.brand,
                            "base_price": product.base_price,
                            "image_url": product.image_url,
                        },
                    },
                }
            )

        summary = price_summary(subtotal)

        return {
            "id": cart.id,
            "customer_id": cart.customer_id,
            "created_at": cart.created_at,
            "updated_at": cart.updated_at,
            "items": lines,
            "subtotal": summary.subtotal,
            "tax": summary.tax,
            "shipping": summary.shipping,
            "total": summary.total,
        }

    #commands
    def add_to_cart(self, customer_id: int, variant_id: int, quantity: int) -> Dict[str, Any]:
        if quantity <= 0:
            raise ValueError("Quantity must be greater than 0")

        cart = self._ensure_cart(customer_id)

        variant = self.product_repo.get_variant(variant_id)
        if not variant:
            raise NotFoundError(f"Product variant not found (id {variant_id})")

        if variant.stock_quantity < quantity:
            raise ConflictError(
                f"Insufficient stock available for variant {variant_id} "
                f"(available {variant.stock_quantity}, requested {quantity})"
            )

        existing_item = self.repo.get_cart_item(cart.id, variant_id)

        try:
            if existing_item:
                # sprawdzamy łączną ilość, nie tylko przyrost
                new_quantity = existing_item.quantity + quantity
                if variant.stock_quantity < new_quantity:
                    raise ConflictError(
                        f"Insufficient stock: total quantity {new_quantity} would exceed "
                        f"available stock {variant.stock_quantity}"
                    )
                logger.info(
                    f"Variant {variant_id} already in cart {cart.id}, quantity "
                    f"{existing_item.quantity} -> {new_quantity}"
                )
                existing_item.quantity = new_quantity
                existing_item.updated_at = datetime.now(timezone.utc)
            else:
                logger.info(f"Adding variant {variant_id} x{quantity} to cart {cart.id}")
                self.repo.add_cart_item(
                    CartItemModel(
                        cart_id=cart.id,
                        product_variant_id=variant_id,
                        quantity=quantity,
                    )
                )

            self._touch(cart)
            self.repo.commit()
        except Exception:
            self.repo.rollback()
            raise

        return self.get_customer_cart(customer_id)

    def update_cart_item_quantity(self, customer_id: int, item_id: int, quantity: int) -> Dict[str, Any]:
        if quantity < 0:
            raise ValueError("Quantity cannot be negative")

        item = self._get_owned_item(customer_id, item_id)
        cart = item.cart

        try:
            if quantity == 0:
                logger.info(f"Quantity 0 - removing cart item {item_id}")
                self.repo.delete_cart_item(item)
            else:
                if quantity > item.quantity:
                    variant = self.product_repo.get_variant(item.product_variant_id)
                    if quantity > variant.stock_quantity:
                        raise ConflictError(
                            f"Insufficient stock. Available: {variant.stock_quantity}, "
                            f"Requested: {quantity}"
                        )
                item.quantity = quantity
                item.updated_at = datetime.now(timezone.utc)

            self._touch(cart)
            self.repo.commit()
        except Exception:
            self.repo.rollback()
            raise

        return self.get_customer_cart(customer_id)

    def remove_from_cart(self, customer_id: int, item_id: int) -> Dict[str, Any]:
        item = self._get_owned_item(customer_id, item_id)
        cart = item.cart

        try:
            self.repo.delete_cart_item(item)
            self._touch(cart)
            self.repo.commit()
        except Exception:
            self.repo.rollback()
            raise

        logger.info(f"Cart item {item_id} removed from cart {cart.id}")
        return self.get_customer_cart(customer_id)
