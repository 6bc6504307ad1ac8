from decimal import Decimal

from storefront.domain.enums import ShoeColor, ShoeSize
from storefront.domain.errors import ConflictError, NotFoundError
from storefront.domain.schemas import ProductUpdate, ProductVariantCreate, ProductVariantUpdate
from storefront.services.catalog_service import CatalogService
from tests.base import DatabaseTestCase


class CatalogQueriesTestCase(DatabaseTestCase):
    def setUp(self):
        super().setUp()
        self.service = CatalogService(self.db)
        self.runner = self.make_product(
            name="Air Runner", brand="Stride", category="running", description="Light mesh trainer"
        )
        self.loafer = self.make_product(name="City Loafer", brand="Urbano", category="casual")
        self.boot = self.make_product(name="Peak Boot", brand="Stride", category="hiking")
        self.retired = self.make_product(name="Old Runner", brand="Stride", category="running")
        self.service.update_product(self.retired.id, ProductUpdate(is_active=False))

    def names(self, products):
        return [p.name for p in products]

    def test_only_active_products_listed(self):
        self.assertEqual(
            self.names(self.service.get_products()), ["Air Runner", "City Loafer", "Peak Boot"]
        )

    def test_get_product_includes_inactive(self):
        product = self.service.get_product(self.retired.id)
        self.assertFalse(product.is_active)

        with self.assertRaises(NotFoundError):
            self.service.get_product(9999)

    def test_search_is_case_insensitive(self):
        self.assertEqual(self.names(self.service.search_products("RUNNER")), ["Air Runner"])
        self.assertEqual(self.names(self.service.search_products("mesh")), ["Air Runner"])
        self.assertEqual(self.names(self.service.search_products("stride")), ["Air Runner", "Peak Boot"])

    def test_blank_search_returns_nothing(self):
        self.assertEqual(self.service.search_products("   "), [])

    def test_by_category_and_brand(self):
        self.assertEqual(self.names(self.service.get_products_by_category("running")), ["Air Runner"])
        self.assertEqual(
            self.names(self.service.get_products_by_brand("Stride")), ["Air Runner", "Peak Boot"]
        )
        self.assertEqual(self.service.get_products_by_brand(""), [])

    def test_featured_newest_first(self):
        featured = self.service.get_featured_products(limit=2)
        self.assertEqual(self.names(featured), ["Peak Boot", "City Loafer"])

    def test_variants_and_stock_check(self):
        variant = self.make_variant(self.runner.id, stock=3)
        self.make_variant(self.runner.id, stock=0, size=ShoeSize.S10)

        variants = self.service.get_product_variants(self.runner.id)
        self.assertEqual([v.size for v in variants], [ShoeSize.S9, ShoeSize.S10])

        product = self.service.get_product(self.runner.id)
        self.assertEqual(len(product.variants), 2)

        self.assertTrue(self.service.check_variant_stock(variant.id, 3))
        self.assertFalse(self.service.check_variant_stock(variant.id, 4))
        with self.assertRaises(NotFoundError):
            self.service.check_variant_stock(9999, 1)


class CatalogCommandsTestCase(DatabaseTestCase):
    def setUp(self):
        super().setUp()
        self.service = CatalogService(self.db)
        self.product = self.make_product(description="Original")

    def test_partial_product_update(self):
        product = self.service.update_product(
            self.product.id, ProductUpdate(base_price=Decimal("120.00"), description=None)
        )
        self.assertEqual(product.base_price, Decimal("120.00"))
        self.assertIsNone(product.description)
        self.assertEqual(product.name, "Air Runner")

    def test_none_does_not_clear_required_fields(self):
        product = self.service.update_product(self.product.id, ProductUpdate(name=None))
        self.assertEqual(product.name, "Air Runner")

    def test_duplicate_sku_rejected(self):
        self.make_variant(self.product.id, sku="AR-9-BLK")

        with self.assertRaises(ConflictError):
            self.make_variant(self.product.id, size=ShoeSize.S10, sku="AR-9-BLK")

    def test_duplicate_size_color_rejected(self):
        self.make_variant(self.product.id)

        with self.assertRaises(ConflictError):
            self.make_variant(self.product.id)

    def test_variant_for_unknown_product(self):
        with self.assertRaises(NotFoundError):
            self.service.create_product_variant(
                ProductVariantCreate(
                    product_id=9999, size=ShoeSize.S8, color=ShoeColor.WHITE, stock_quantity=1, sku="X-1"
                )
            )

    def test_restock_variant(self):
        variant = self.make_variant(self.product.id, stock=0)

        updated = self.service.update_product_variant(
            variant.id, ProductVariantUpdate(stock_quantity=12, price_adjustment=Decimal("4.50"))
        )
        self.assertEqual(updated.stock_quantity, 12)
        self.assertEqual(updated.price_adjustment, Decimal("4.50"))

    def test_variant_update_errors(self):
        first = self.make_variant(self.product.id, sku="AR-1")
        self.make_variant(self.product.id, size=ShoeSize.S11, sku="AR-2")

        with self.assertRaises(ConflictError):
            self.service.update_product_variant(first.id, ProductVariantUpdate(sku="AR-2"))
        with self.assertRaises(NotFoundError):
            self.service.update_product_variant(9999, ProductVariantUpdate(stock_quantity=1))
