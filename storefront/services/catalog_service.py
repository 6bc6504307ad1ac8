# storefront/services/catalog_service.py
from datetime import datetime, timezone

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from storefront.data.models.product import ProductModel
from storefront.data.models.product_variant import ProductVariantModel
from storefront.domain.errors import ConflictError, NotFoundError
from storefront.domain.schemas import (
    ProductCreate,
    ProductUpdate,
    ProductVariantCreate,
    ProductVariantUpdate,
)
from storefront.repos.product_repo import ProductRepo
from storefront.utils.logging import get_logger
from storefront.utils.settings import FEATURED_PRODUCTS_LIMIT

logger = get_logger(__name__)


class CatalogService:
    """
    Katalog: produkty i ich warianty (rozmiar/kolor).
    Zapytania zwracają tylko aktywne produkty, poza get_product.
    """

    def __init__(self, db: Session):
        self.repo = ProductRepo(db)

    # query
    def get_products(self) -> list[ProductModel]:
        return self.repo.list_active()

    def get_product(self, product_id: int) -> ProductModel:
        product = self.repo.get_product(product_id)
        if not product:
            raise NotFoundError(f"Product not found (id {product_id})")
        return product

    def search_products(self, query: str) -> list[ProductModel]:
        if not query.strip():
            return []
        return self.repo.search_active(query.strip())

    def get_products_by_category(self, category: str) -> list[ProductModel]:
        if not category.strip():
            return []
        return self.repo.list_active_by(category=category)

    def get_products_by_brand(self, brand: str) -> list[ProductModel]:
        if not brand.strip():
            return []
        return self.repo.list_active_by(brand=brand)

    def get_featured_products(self, limit: int = FEATURED_PRODUCTS_LIMIT) -> list[ProductModel]:
        # "featured" = najnowsze aktywne produkty
        return self.repo.list_newest_active(limit)

    def get_product_variants(self, product_id: int) -> list[ProductVariantModel]:
        return self.repo.list_variants(product_id)

    def check_variant_stock(self, variant_id: int, quantity: int) -> bool:
        variant = self.repo.get_variant(variant_id)
        if not variant:
            raise NotFoundError(f"Product variant not found (id {variant_id})")
        return variant.stock_quantity >= quantity

    # commands
    def create_product(self, payload: ProductCreate) -> ProductModel:
        product = ProductModel(
            name=payload.name,
            description=payload.description,
            brand=payload.brand,
            category=payload.category,
            base_price=payload.base_price,
            image_url=str(payload.image_url) if payload.image_url else None,
            is_active=True,
        )
        self.repo.add_product(product)
        self.repo.commit()

        logger.info(f"Product {product.id} created ({product.brand} {product.name})")
        return self.get_product(product.id)

    def update_product(self, product_id: int, payload: ProductUpdate) -> ProductModel:
        product = self.get_product(product_id)

        # None czyści tylko pola nullable
        changes = {
            field: value
            for field, value in payload.model_dump(exclude_unset=True).items()
            if value is not None or field in ("description", "image_url")
        }
        if changes.get("image_url") is not None:
            changes["image_url"] = str(changes["image_url"])

        for field, value in changes.items():
            setattr(product, field, value)
        product.updated_at = datetime.now(timezone.utc)

        self.repo.commit()

        logger.info(f"Product {product_id} updated: {sorted(changes)}")
        return self.get_product(product_id)

    def create_product_variant(self, payload: ProductVariantCreate) -> ProductVariantModel:
        if not self.repo.get_product(payload.product_id):
            raise NotFoundError(f"Product not found (id {payload.product_id})")

        if self.repo.get_variant_by_sku(payload.sku):
            raise ConflictError(f"Variant with SKU {payload.sku} already exists")

        if self.repo.get_variant_by_options(payload.product_id, payload.size, payload.color):
            raise ConflictError(
                f"Variant {payload.size.value}/{payload.color.value} already exists "
                f"for product {payload.product_id}"
            )

        variant = ProductVariantModel(
            product_id=payload.product_id,
            size=payload.size,
            color=payload.color,
            stock_quantity=payload.stock_quantity,
            price_adjustment=payload.price_adjustment,
            sku=payload.sku,
        )

        try:
            self.repo.add_variant(variant)
            self.repo.commit()
        except IntegrityError as e:
            # wyścig z innym requestem na tym samym SKU
            self.repo.rollback()
            raise ConflictError(f"Variant with SKU {payload.sku} already exists") from e

        logger.info(f"Variant {variant.id} ({variant.sku}) created for product {variant.product_id}")
        return variant

    def update_product_variant(self, variant_id: int, payload: ProductVariantUpdate) -> ProductVariantModel:
        variant = self.repo.get_variant(variant_id)
        if not variant:
            raise NotFoundError(f"Product variant not found (id {variant_id})")

        changes = payload.model_dump(exclude_unset=True, exclude_none=True)

        if "sku" in changes and changes["sku"] != variant.sku:
            if self.repo.get_variant_by_sku(changes["sku"]):
                raise ConflictError(f"Variant with SKU {changes['sku']} already exists")

        for field, value in changes.items():
            setattr(variant, field, value)
        variant.updated_at = datetime.now(timezone.utc)

        self.repo.commit()

        logger.info(f"Variant {variant_id} updated: {changes}")
        return variant
