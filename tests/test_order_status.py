import unittest
from datetime import datetime

from storefront.data.models import OrderModel
from storefront.domain.enums import OrderStatus
from storefront.domain.errors import ConflictError, NotFoundError
from storefront.domain.order_status import VALID_STATUS_TRANSITIONS, can_transition
from storefront.services.order_service import OrderService
from tests.base import DatabaseTestCase


class TransitionTableTestCase(unittest.TestCase):
    def test_allowed_transitions(self):
        allowed = [
            (OrderStatus.PENDING, OrderStatus.PROCESSING),
            (OrderStatus.PENDING, OrderStatus.CANCELLED),
            (OrderStatus.PROCESSING, OrderStatus.SHIPPED),
            (OrderStatus.PROCESSING, OrderStatus.CANCELLED),
            (OrderStatus.SHIPPED, OrderStatus.DELIVERED),
            (OrderStatus.SHIPPED, OrderStatus.CANCELLED),
        ]
        for current in OrderStatus:
            for target in OrderStatus:
                with self.subTest(current=current, target=target):
                    self.assertEqual(can_transition(current, target), (current, target) in allowed)

    def test_terminal_states(self):
        self.assertEqual(VALID_STATUS_TRANSITIONS[OrderStatus.DELIVERED], frozenset())
        self.assertEqual(VALID_STATUS_TRANSITIONS[OrderStatus.CANCELLED], frozenset())

    def test_accepts_plain_values(self):
        self.assertTrue(can_transition("pending", "processing"))
        self.assertFalse(can_transition("pending", "delivered"))


class UpdateOrderStatusTestCase(DatabaseTestCase):
    def setUp(self):
        super().setUp()
        customer, billing, shipping, variant_a, _ = self.checkout_setup()
        self.add_to_cart(customer.id, variant_a.id, 1)
        self.order_id = self.place_order(customer.id, billing.id, shipping.id, [(variant_a.id, 1)])["id"]
        self.service = OrderService(self.db)

    def advance(self, *statuses):
        order = None
        for status in statuses:
            order = self.service.update_order_status(self.order_id, status)
        return order

    def test_full_lifecycle_sets_dates(self):
        order = self.advance(OrderStatus.PROCESSING)
        self.assertIsNone(order.shipped_date)

        order = self.advance(OrderStatus.SHIPPED)
        self.assertEqual(order.status, OrderStatus.SHIPPED)
        self.assertIsNotNone(order.shipped_date)
        self.assertIsNone(order.delivered_date)

        order = self.advance(OrderStatus.DELIVERED)
        self.assertEqual(order.status, OrderStatus.DELIVERED)
        self.assertIsNotNone(order.delivered_date)

    def test_shipped_date_not_overwritten(self):
        preset = datetime(2024, 1, 2, 3, 4, 5)
        order = self.db.get(OrderModel, self.order_id)
        order.status = OrderStatus.PROCESSING
        order.shipped_date = preset
        self.db.commit()

        order = self.advance(OrderStatus.SHIPPED)
        self.assertEqual(order.shipped_date, preset)

    def test_delivered_date_not_overwritten(self):
        preset = datetime(2024, 1, 1, 12, 0, 0)
        order = self.db.get(OrderModel, self.order_id)
        order.status = OrderStatus.SHIPPED
        order.delivered_date = preset
        self.db.commit()

        order = self.advance(OrderStatus.DELIVERED)
        self.assertEqual(order.status, OrderStatus.DELIVERED)
        self.assertEqual(order.delivered_date, preset)

    def test_pending_to_delivered_rejected(self):
        with self.assertRaises(ConflictError) as ctx:
            self.advance(OrderStatus.DELIVERED)

        self.assertEqual(str(ctx.exception), "Invalid status transition from 'pending' to 'delivered'")
        order = self.db.get(OrderModel, self.order_id)
        self.assertEqual(order.status, OrderStatus.PENDING)
        self.assertIsNone(order.delivered_date)

    def test_updated_at_refreshed(self):
        before = self.db.get(OrderModel, self.order_id).updated_at
        order = self.advance(OrderStatus.PROCESSING)
        self.assertGreaterEqual(order.updated_at, before)

    def test_cancel_from_shipped(self):
        order = self.advance(OrderStatus.PROCESSING, OrderStatus.SHIPPED, OrderStatus.CANCELLED)
        self.assertEqual(order.status, OrderStatus.CANCELLED)

    def test_skipping_a_step_rejected(self):
        with self.assertRaises(ConflictError) as ctx:
            self.advance(OrderStatus.SHIPPED)

        self.assertEqual(str(ctx.exception), "Invalid status transition from 'pending' to 'shipped'")
        self.assertEqual(self.db.get(OrderModel, self.order_id).status, OrderStatus.PENDING)

    def test_terminal_state_is_final(self):
        self.advance(OrderStatus.CANCELLED)
        for target in (OrderStatus.PENDING, OrderStatus.PROCESSING, OrderStatus.CANCELLED):
            with self.subTest(target=target):
                with self.assertRaises(ConflictError):
                    self.advance(target)

    def test_unknown_order(self):
        with self.assertRaises(NotFoundError):
            self.service.update_order_status(999, OrderStatus.PROCESSING)
