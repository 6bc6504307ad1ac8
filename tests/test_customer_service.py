from sqlalchemy import select

from storefront.data.models import CartModel, CustomerModel
from storefront.domain.errors import ConflictError, NotFoundError
from storefront.services.customer_service import CustomerService
from tests.base import DatabaseTestCase


class CustomerServiceTestCase(DatabaseTestCase):
    def test_customer_created_with_cart(self):
        customer = self.make_customer()

        cart = self.db.execute(select(CartModel)).scalar_one()
        self.assertEqual(cart.customer_id, customer.id)
        self.assertEqual(CustomerService(self.db).get_customer(customer.id).email, "jane@example.com")

    def test_duplicate_email_rejected(self):
        self.make_customer()

        with self.assertRaises(ConflictError):
            self.make_customer(first_name="Janet")

        customers = self.db.execute(select(CustomerModel)).scalars().all()
        self.assertEqual(len(customers), 1)

    def test_unknown_customer(self):
        with self.assertRaises(NotFoundError):
            CustomerService(self.db).get_customer(42)
