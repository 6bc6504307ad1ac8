# storefront/repos/cart_repo.py
from sqlalchemy import select
from sqlalchemy.orm import joinedload

from storefront.data.models.cart import CartModel
from storefront.data.models.cart_item import CartItemModel
from storefront.data.models.product_variant import ProductVariantModel
from storefront.repos.base import BaseRepo


class CartRepo(BaseRepo):
    def get_cart_by_customer(self, customer_id: int) -> CartModel | None:
        return self.db.execute(
            select(CartModel).where(CartModel.customer_id == customer_id)
        ).scalar_one_or_none()

    def create_cart(self, cart: CartModel) -> CartModel:
        self.db.add(cart)
        self.db.flush()
        return cart

    def get_cart_items(self, cart_id: int) -> list[CartItemModel]:
        stmt = (
            select(CartItemModel)
            .options(
                joinedload(CartItemModel.product_variant).joinedload(ProductVariantModel.product)
            )
            .where(CartItemModel.cart_id == cart_id)
            .order_by(CartItemModel.id)
        )
        return list(self.db.execute(stmt).scalars().all())

    def get_cart_item(self, cart_id: int, variant_id: int) -> CartItemModel | None:
        return self.db.execute(
            select(CartItemModel).where(
                CartItemModel.cart_id == cart_id,
                CartItemModel.product_variant_id == variant_id,
            )
        ).scalar_one_or_none()

    def get_cart_item_by_id(self, item_id: int) -> CartItemModel | None:
        return self.db.get(CartItemModel, item_id)

    def add_cart_item(self, item: CartItemModel) -> CartItemModel:
        self.db.add(item)
        self.db.flush()
        return item

    def delete_cart_item(self, item: CartItemModel) -> None:
        self.db.delete(item)
        self.db.flush()
