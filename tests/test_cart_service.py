from decimal import Decimal

from sqlalchemy import select

from storefront.data.models import CartModel, ProductVariantModel
from storefront.domain.enums import ShoeColor
from storefront.domain.errors import ConflictError, NotFoundError
from storefront.services.cart_service import CartService
from tests.base import DatabaseTestCase


class CartServiceTestCase(DatabaseTestCase):
    def setUp(self):
        super().setUp()
        self.customer_id = self.make_customer().id
        product = self.make_product(name="Trail Blazer", base_price="60.00")
        self.variant_id = self.make_variant(product.id, stock=5, adjustment="5.00").id
        self.other_variant_id = self.make_variant(product.id, stock=2, color=ShoeColor.RED).id
        self.service = CartService(self.db)

    def test_new_customer_has_empty_cart(self):
        cart = self.service.get_customer_cart(self.customer_id)
        self.assertEqual(cart["customer_id"], self.customer_id)
        self.assertEqual(cart["items"], [])
        self.assertEqual(cart["subtotal"], Decimal("0.00"))
        self.assertEqual(cart["shipping"], Decimal("0.00"))
        self.assertEqual(cart["total"], Decimal("0.00"))

    def test_cart_created_lazily(self):
        self.db.delete(self.db.execute(select(CartModel)).scalar_one())
        self.db.commit()

        cart = self.service.get_customer_cart(self.customer_id)
        self.assertEqual(cart["items"], [])
        self.assertIsNotNone(self.db.execute(select(CartModel)).scalar_one())

    def test_unknown_customer(self):
        with self.assertRaises(NotFoundError):
            self.service.get_customer_cart(404)

    def test_add_returns_priced_cart(self):
        cart = self.service.add_to_cart(self.customer_id, self.variant_id, 2)

        self.assertEqual(len(cart["items"]), 1)
        line = cart["items"][0]
        self.assertEqual(line["unit_price"], Decimal("65.00"))
        self.assertEqual(line["line_total"], Decimal("130.00"))
        self.assertEqual(line["product_variant"]["product"]["name"], "Trail Blazer")
        self.assertEqual(cart["subtotal"], Decimal("130.00"))
        self.assertEqual(cart["tax"], Decimal("10.40"))
        self.assertEqual(cart["shipping"], Decimal("0.00"))
        self.assertEqual(cart["total"], Decimal("140.40"))

    def test_small_cart_pays_shipping(self):
        cart = self.service.add_to_cart(self.customer_id, self.other_variant_id, 1)
        self.assertEqual(cart["shipping"], Decimal("15.00"))
        self.assertEqual(cart["total"], Decimal("79.80"))

    def test_adding_same_variant_merges_line(self):
        self.service.add_to_cart(self.customer_id, self.variant_id, 2)
        cart = self.service.add_to_cart(self.customer_id, self.variant_id, 3)

        self.assertEqual(len(cart["items"]), 1)
        self.assertEqual(cart["items"][0]["quantity"], 5)

    def test_combined_quantity_checked_against_stock(self):
        self.service.add_to_cart(self.customer_id, self.variant_id, 4)

        with self.assertRaises(ConflictError):
            self.service.add_to_cart(self.customer_id, self.variant_id, 2)

        cart = self.service.get_customer_cart(self.customer_id)
        self.assertEqual(cart["items"][0]["quantity"], 4)

    def test_add_rejects_bad_input(self):
        with self.assertRaises(ConflictError):
            self.service.add_to_cart(self.customer_id, self.variant_id, 6)
        with self.assertRaises(NotFoundError):
            self.service.add_to_cart(self.customer_id, 999, 1)
        with self.assertRaises(ValueError):
            self.service.add_to_cart(self.customer_id, self.variant_id, 0)

    def test_not_found_messages(self):
        with self.assertRaises(NotFoundError) as ctx:
            self.service.remove_from_cart(self.customer_id, 12345)
        self.assertIn("cart item not found", str(ctx.exception).lower())

        with self.assertRaises(NotFoundError) as ctx:
            self.service.add_to_cart(self.customer_id, 999, 1)
        self.assertIn("product variant not found", str(ctx.exception).lower())

    def test_update_quantity(self):
        item_id = self.service.add_to_cart(self.customer_id, self.variant_id, 1)["items"][0]["id"]

        cart = self.service.update_cart_item_quantity(self.customer_id, item_id, 3)
        self.assertEqual(cart["items"][0]["quantity"], 3)

        with self.assertRaises(ConflictError):
            self.service.update_cart_item_quantity(self.customer_id, item_id, 6)

    def test_decrease_allowed_above_live_stock(self):
        item_id = self.service.add_to_cart(self.customer_id, self.variant_id, 5)["items"][0]["id"]
        self.catalog_restock(self.variant_id, 1)

        cart = self.service.update_cart_item_quantity(self.customer_id, item_id, 4)
        self.assertEqual(cart["items"][0]["quantity"], 4)

    def test_zero_quantity_removes_line(self):
        item_id = self.service.add_to_cart(self.customer_id, self.variant_id, 1)["items"][0]["id"]

        cart = self.service.update_cart_item_quantity(self.customer_id, item_id, 0)
        self.assertEqual(cart["items"], [])

    def test_remove_from_cart(self):
        self.service.add_to_cart(self.customer_id, self.variant_id, 1)
        cart = self.service.add_to_cart(self.customer_id, self.other_variant_id, 1)
        first_id = cart["items"][0]["id"]

        cart = self.service.remove_from_cart(self.customer_id, first_id)
        self.assertEqual([i["product_variant"]["id"] for i in cart["items"]], [self.other_variant_id])

        with self.assertRaises(NotFoundError):
            self.service.remove_from_cart(self.customer_id, first_id)

    def test_foreign_item_forbidden(self):
        item_id = self.service.add_to_cart(self.customer_id, self.variant_id, 1)["items"][0]["id"]
        intruder = self.make_customer(email="mallory@example.com").id

        with self.assertRaises(PermissionError):
            self.service.update_cart_item_quantity(intruder, item_id, 2)
        with self.assertRaises(PermissionError):
            self.service.remove_from_cart(intruder, item_id)

        cart = self.service.get_customer_cart(self.customer_id)
        self.assertEqual(cart["items"][0]["quantity"], 1)

    def catalog_restock(self, variant_id, stock):
        self.db.get(ProductVariantModel, variant_id).stock_quantity = stock
        self.db.commit()
