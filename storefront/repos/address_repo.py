# storefront/repos/address_repo.py
from datetime import datetime, timezone

from sqlalchemy import select, update

from storefront.data.models.address import AddressModel
from storefront.domain.enums import AddressType
from storefront.repos.base import BaseRepo


class AddressRepo(BaseRepo):
    def get_customer_address(self, address_id: int, customer_id: int) -> AddressModel | None:
        return self.db.execute(
            select(AddressModel).where(
                AddressModel.id == address_id,
                AddressModel.customer_id == customer_id,
            )
        ).scalar_one_or_none()

    def list_for_customer(self, customer_id: int) -> list[AddressModel]:
        stmt = (
            select(AddressModel)
            .where(AddressModel.customer_id == customer_id)
            .order_by(
                AddressModel.is_default.desc(),
                AddressModel.created_at.desc(),
                AddressModel.id.desc(),
            )
        )
        return list(self.db.execute(stmt).scalars().all())

    def clear_defaults(self, customer_id: int, address_type: AddressType) -> int:
        result = self.db.execute(
            update(AddressModel)
            .where(
                AddressModel.customer_id == customer_id,
                AddressModel.type == address_type,
                AddressModel.is_default.is_(True),
            )
            .values(is_default=False, updated_at=datetime.now(timezone.utc))
            .execution_options(synchronize_session="fetch")
        )
        return result.rowcount

    def add_address(self, address: AddressModel) -> AddressModel:
        self.db.add(address)
        self.db.flush()
        return address
