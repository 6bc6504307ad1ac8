# storefront/services/customer_service.py
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from storefront.data.models.cart import CartModel
from storefront.data.models.customer import CustomerModel
from storefront.domain.errors import ConflictError, NotFoundError
from storefront.domain.schemas import CustomerCreate
from storefront.repos.cart_repo import CartRepo
from storefront.repos.customer_repo import CustomerRepo
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class CustomerService:
    def __init__(self, db: Session):
        self.repo = CustomerRepo(db)
        self.cart_repo = CartRepo(db)

    def create_customer(self, payload: CustomerCreate) -> CustomerModel:
        """Klient i jego koszyk powstają w jednej transakcji."""
        if self.repo.get_by_email(payload.email):
            raise ConflictError(f"Customer with email {payload.email} already exists")

        customer = CustomerModel(
            email=payload.email,
            first_name=payload.first_name,
            last_name=payload.last_name,
            phone=payload.phone,
        )

        try:
            self.repo.add_customer(customer)
            self.cart_repo.create_cart(CartModel(customer_id=customer.id))
            self.repo.commit()
        except IntegrityError as e:
            self.repo.rollback()
            raise ConflictError(f"Customer with email {payload.email} already exists") from e

        logger.info(f"Customer {customer.id} created with cart")
        return customer

    def get_customer(self, customer_id: int) -> CustomerModel:
        customer = self.repo.get_customer(customer_id)
        if not customer:
            raise NotFoundError(f"Customer not found (id {customer_id})")
        return customer
