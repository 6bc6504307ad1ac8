# storefront/repos/customer_repo.py
from sqlalchemy import select

from storefront.data.models.customer import CustomerModel
from storefront.repos.base import BaseRepo


class CustomerRepo(BaseRepo):
    def get_customer(self, customer_id: int) -> CustomerModel | None:
        return self.db.get(CustomerModel, customer_id)

    def get_by_email(self, email: str) -> CustomerModel | None:
        return self.db.execute(
            select(CustomerModel).where(CustomerModel.email == email)
        ).scalar_one_or_none()

    def add_customer(self, customer: CustomerModel) -> CustomerModel:
        self.db.add(customer)
        self.db.flush()
        return customer
