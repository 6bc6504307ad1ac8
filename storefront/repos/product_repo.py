# storefront/repos/product_repo.py
from datetime import datetime, timezone

from sqlalchemy import or_, select, update
from sqlalchemy.orm import selectinload

from storefront.data.models.product import ProductModel
from storefront.data.models.product_variant import ProductVariantModel
from storefront.repos.base import BaseRepo


class ProductRepo(BaseRepo):
    def _with_variants(self):
        return select(ProductModel).options(selectinload(ProductModel.variants))

    # produkty
    def get_product(self, product_id: int) -> ProductModel | None:
        return self.db.execute(
            self._with_variants().where(ProductModel.id == product_id)
        ).scalar_one_or_none()

    def add_product(self, product: ProductModel) -> ProductModel:
        self.db.add(product)
        self.db.flush()
        return product

    def list_active(self) -> list[ProductModel]:
        stmt = self._with_variants().where(ProductModel.is_active.is_(True)).order_by(ProductModel.id)
        return list(self.db.execute(stmt).scalars().all())

    def search_active(self, query: str) -> list[ProductModel]:
        term = f"%{query.lower()}%"
        stmt = (
            self._with_variants()
            .where(
                ProductModel.is_active.is_(True),
                or_(
                    ProductModel.name.ilike(term),
                    ProductModel.brand.ilike(term),
                    ProductModel.description.ilike(term),
                ),
            )
            .order_by(ProductModel.name)
        )
        return list(self.db.execute(stmt).scalars().all())

    def list_active_by(self, **filters) -> list[ProductModel]:
        stmt = self._with_variants().where(ProductModel.is_active.is_(True))
        for field, value in filters.items():
            stmt = stmt.where(getattr(ProductModel, field) == value)
        return list(self.db.execute(stmt.order_by(ProductModel.name)).scalars().all())

    def list_newest_active(self, limit: int) -> list[ProductModel]:
        stmt = (
            self._with_variants()
            .where(ProductModel.is_active.is_(True))
            .order_by(ProductModel.created_at.desc(), ProductModel.id.desc())
            .limit(limit)
        )
        return list(self.db.execute(stmt).scalars().all())

    # warianty
    def get_variant(self, variant_id: int) -> ProductVariantModel | None:
        return self.db.get(ProductVariantModel, variant_id)

    def get_variant_by_sku(self, sku: str) -> ProductVariantModel | None:
        return self.db.execute(
            select(ProductVariantModel).where(ProductVariantModel.sku == sku)
        ).scalar_one_or_none()

    def get_variant_by_options(self, product_id: int, size, color) -> ProductVariantModel | None:
        return self.db.execute(
            select(ProductVariantModel).where(
                ProductVariantModel.product_id == product_id,
                ProductVariantModel.size == size,
                ProductVariantModel.color == color,
            )
        ).scalar_one_or_none()

    def list_variants(self, product_id: int) -> list[ProductVariantModel]:
        stmt = (
            select(ProductVariantModel)
            .where(ProductVariantModel.product_id == product_id)
            .order_by(ProductVariantModel.id)
        )
        return list(self.db.execute(stmt).scalars().all())

    def add_variant(self, variant: ProductVariantModel) -> ProductVariantModel:
        self.db.add(variant)
        self.db.flush()
        return variant

    def decrement_stock(self, variant_id: int, quantity: int) -> int:
        """
        Warunkowy update zamiast read-then-write:
        UPDATE ... SET stock = stock - q WHERE id = v AND stock >= q
        Zwraca rowcount, 0 oznacza brak towaru.
        """
        result = self.db.execute(
            update(ProductVariantModel)
            .where(
                ProductVariantModel.id == variant_id,
                ProductVariantModel.stock_quantity >= quantity,
            )
            .values(
                stock_quantity=ProductVariantModel.stock_quantity - quantity,
                updated_at=datetime.now(timezone.utc),
            )
            .execution_options(synchronize_session=False)
        )
        return result.rowcount
