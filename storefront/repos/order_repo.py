# storefront/repos/order_repo.py
from sqlalchemy import select
from sqlalchemy.orm import selectinload

from storefront.data.models.order import OrderModel
from storefront.data.models.order_item import OrderItemModel
from storefront.data.models.product_variant import ProductVariantModel
from storefront.repos.base import BaseRepo


class OrderRepo(BaseRepo):
    def _with_details(self):
        return select(OrderModel).options(
            selectinload(OrderModel.items)
            .selectinload(OrderItemModel.product_variant)
            .selectinload(ProductVariantModel.product),
            selectinload(OrderModel.addresses),
        )

    def add_order(self, order: OrderModel) -> OrderModel:
        self.db.add(order)
        self.db.flush()
        return order

    def get_order(self, order_id: int) -> OrderModel | None:
        return self.db.execute(
            self._with_details().where(OrderModel.id == order_id)
        ).scalar_one_or_none()

    def list_for_customer(self, customer_id: int) -> list[OrderModel]:
        stmt = (
            self._with_details()
            .where(OrderModel.customer_id == customer_id)
            .order_by(OrderModel.order_date.desc(), OrderModel.id.desc())
        )
        return list(self.db.execute(stmt).scalars().all())

    def list_all(self) -> list[OrderModel]:
        stmt = self._with_details().order_by(OrderModel.order_date.desc(), OrderModel.id.desc())
        return list(self.db.execute(stmt).scalars().all())
