# storefront/services/order_service.py
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Dict, List

from sqlalchemy.orm import Session

from storefront.data.models.address import AddressModel
from storefront.data.models.order import OrderModel
from storefront.data.models.order_address import OrderAddressModel
from storefront.data.models.order_item import OrderItemModel
from storefront.domain.enums import AddressType, OrderStatus
from storefront.domain.errors import ConflictError, NotFoundError
from storefront.domain.order_status import can_transition
from storefront.domain.pricing import price_summary, round2, unit_price
from storefront.domain.schemas import OrderCreate
from storefront.repos.address_repo import AddressRepo
from storefront.repos.cart_repo import CartRepo
from storefront.repos.order_repo import OrderRepo
from storefront.repos.product_repo import ProductRepo
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

_ADDRESS_FIELDS = ("street_address", "apartment", "city", "state", "postal_code", "country")


class OrderService:
    """
    Serwis odpowiedzialny za domenę zamówień.
    Złożenie zamówienia, odczyty oraz zmiany statusu.
    """

    def __init__(self, db: Session):
        self.db = db
        self.repo = OrderRepo(db)
        self.address_repo = AddressRepo(db)
        self.cart_repo = CartRepo(db)
        self.product_repo = ProductRepo(db)

    def create_order(self, customer_id: int, payload: OrderCreate) -> Dict[str, Any]:
        """
        Use Case: Zamówienie z (części) koszyka klienta.

        1. Walidacja adresów, koszyka, pozycji i stanów magazynowych
        2. Ceny liczone i zamrażane w order_items
        3. Zamówienie + kopie adresów
        4. Warunkowe zmniejszenie stanów
        5. Rozliczenie koszyka (usuń albo zmniejsz pozycje)

        Wszystko w jednej transakcji - błąd w dowolnym kroku = rollback.
        """
        try:
            billing = self._require_address(payload.billing_address_id, customer_id, "Billing")
            shipping = self._require_address(payload.shipping_address_id, customer_id, "Shipping")

            cart = self.cart_repo.get_cart_by_customer(customer_id)
            if not cart:
                raise NotFoundError(f"Cart not found for customer {customer_id}")

            cart_items = self.cart_repo.get_cart_items(cart.id)
            if not cart_items:
                raise ConflictError("Cart is empty")

            by_variant = {ci.product_variant_id: ci for ci in cart_items}

            lines = []
            subtotal = Decimal("0.00")
            for requested in payload.items:
                cart_item = by_variant.get(requested.product_variant_id)
                if not cart_item:
                    raise NotFoundError(
                        f"Product variant not found in cart (variant {requested.product_variant_id})"
                    )

                variant = cart_item.product_variant
                if requested.quantity > variant.stock_quantity:
                    raise ConflictError(
                        f"Insufficient stock for variant {variant.id} "
                        f"(available {variant.stock_quantity}, requested {requested.quantity})"
                    )

                if requested.quantity > cart_item.quantity:
                    raise ConflictError(
                        f"Requested quantity {requested.quantity} exceeds cart quantity "
                        f"{cart_item.quantity} for variant {variant.id}"
                    )

                price = unit_price(variant.product.base_price, variant.price_adjustment)
                line_total = round2(price * requested.quantity)
                subtotal += line_total
                lines.append((cart_item, requested.quantity, price, line_total))

            summary = price_summary(subtotal)
            now = datetime.now(timezone.utc)

            order = self.repo.add_order(
                OrderModel(
                    customer_id=customer_id,
                    status=OrderStatus.PENDING,
                    total_amount=summary.total,
                    tax_amount=summary.tax,
                    shipping_amount=summary.shipping,
                    billing_address_id=billing.id,
                    shipping_address_id=shipping.id,
                    order_date=now,
                    created_at=now,
                    updated_at=now,
                )
            )

            # kopie adresów - późniejsza edycja adresu nie zmienia historii
            self.db.add_all(
                [
                    self._snapshot(order.id, AddressType.BILLING, billing),
                    self._snapshot(order.id, AddressType.SHIPPING, shipping),
                ]
            )

            for cart_item, quantity, price, line_total in lines:
                variant_id = cart_item.product_variant_id
                self.db.add(
                    OrderItemModel(
                        order_id=order.id,
                        product_variant_id=variant_id,
                        quantity=quantity,
                        unit_price=price,
                        total_price=line_total,
                        created_at=now,
                    )
                )

                rowcount = self.product_repo.decrement_stock(variant_id, quantity)
                if rowcount == 0:
                    # ktoś inny wykupił towar między walidacją a update
                    raise ConflictError(f"Insufficient stock for variant {variant_id}")

                if quantity == cart_item.quantity:
                    self.cart_repo.delete_cart_item(cart_item)
                else:
                    cart_item.quantity -= quantity
                    cart_item.updated_at = now

            cart.updated_at = now
            self.repo.commit()

        except Exception as e:
            logger.warning(f"Order for customer {customer_id} rejected: {e}")
            self.repo.rollback()
            raise

        logger.info(
            f"Order {order.id} placed by customer {customer_id}: {len(lines)} line(s), "
            f"subtotal {summary.subtotal}, tax {summary.tax}, shipping {summary.shipping}, "
            f"total {summary.total}"
        )

        return self.get_order(order.id)

    def get_order(self, order_id: int, customer_id: int | None = None) -> Dict[str, Any]:
        """
        Use Case: Pobranie zamówienia (Query).
        Z customer_id - tylko własne zamówienia klienta.
        """
        order = self.repo.get_order(order_id)

        if not order:
            raise NotFoundError(f"Order not found (id {order_id})")

        if customer_id is not None and order.customer_id != customer_id:
            raise PermissionError("Order does not belong to customer")

        return self._to_dict(order)

    def get_customer_orders(self, customer_id: int) -> List[Dict[str, Any]]:
        return [self._to_dict(o) for o in self.repo.list_for_customer(customer_id)]

    def get_all_orders(self) -> List[Dict[str, Any]]:
        return [self._to_dict(o) for o in self.repo.list_all()]

    def update_order_status(self, order_id: int, status: OrderStatus) -> OrderModel:
        order = self.repo.get_order(order_id)
        if not order:
            raise NotFoundError(f"Order not found (id {order_id})")

        current = OrderStatus(order.status)
        target = OrderStatus(status)

        if not can_transition(current, target):
            raise ConflictError(
                f"Invalid status transition from '{current.value}' to '{target.value}'"
            )

        now = datetime.now(timezone.utc)
        order.status = target
        # daty ustawiane tylko raz
        if target == OrderStatus.SHIPPED and order.shipped_date is None:
            order.shipped_date = now
        if target == OrderStatus.DELIVERED and order.delivered_date is None:
            order.delivered_date = now
        order.updated_at = now

        try:
            self.repo.commit()
        except Exception:
            self.repo.rollback()
            raise

        logger.info(f"Order {order_id} status {current.value} -> {target.value}")
        return order

    def _require_address(self, address_id: int, customer_id: int, label: str) -> AddressModel:
        address = self.address_repo.get_customer_address(address_id, customer_id)
        if not address:
            raise NotFoundError(f"{label} address not found for customer {customer_id} (address {address_id})")
        return address

    @staticmethod
    def _snapshot(order_id: int, address_type: AddressType, address: AddressModel) -> OrderAddressModel:
        return OrderAddressModel(
            order_id=order_id,
            type=address_type,
            **{field: getattr(address, field) for field in _ADDRESS_FIELDS},
        )

    @staticmethod
    def _to_dict(order: OrderModel) -> Dict[str, Any]:
        addresses = {
            AddressType(a.type): {"type": a.type, **{f: getattr(a, f) for f in _ADDRESS_FIELDS}}
            for a in order.addresses
        }

        return {
            "id": order.id,
            "customer_id": order.customer_id,
            "status": order.status,
            "total_amount": order.total_amount,
            "tax_amount": order.tax_amount,
            "shipping_amount": order.shipping_amount,
            "billing_address_id": order.billing_address_id,
            "shipping_address_id": order.shipping_address_id,
            "order_date": order.order_date,
            "shipped_date": order.shipped_date,
            "delivered_date": order.delivered_date,
            "created_at": order.created_at,
            "updated_at": order.updated_at,
            "items": [
                {
                    "id": item.id,
                    "quantity": item.quantity,
                    "unit_price": item.unit_price,
                    "total_price": item.total_price,
                    "product_variant": {
                        "size": item.product_variant.size,
                        "color": item.product_variant.color,
                        "product": {
                            "name": item.product_variant.product.name,
                            "brand": item.product_variant.product.brand,
                            "image_url": item.product_variant.product.image_url,
                        },
                    },
                }
                for item in order.items
            ],
            "billing_address": addresses.get(AddressType.BILLING),
            "shipping_address": addresses.get(AddressType.SHIPPING),
        }
