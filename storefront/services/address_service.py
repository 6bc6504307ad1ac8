# storefront/services/address_service.py
from sqlalchemy.orm import Session

from storefront.data.models.address import AddressModel
from storefront.domain.errors import NotFoundError
from storefront.domain.schemas import AddressCreate
from storefront.repos.address_repo import AddressRepo
from storefront.repos.customer_repo import CustomerRepo
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class AddressService:
    def __init__(self, db: Session):
        self.repo = AddressRepo(db)
        self.customer_repo = CustomerRepo(db)

    def _require_customer(self, customer_id: int) -> None:
        if not self.customer_repo.get_customer(customer_id):
            raise NotFoundError(f"Customer not found (id {customer_id})")

    def create_address(self, customer_id: int, payload: AddressCreate) -> AddressModel:
        """
        Nowy adres klienta. Przy is_default=True najpierw zdejmujemy flagę
        z pozostałych adresów tego samego typu - w tej samej transakcji co insert,
        żeby nigdy nie było dwóch domyślnych ani żadnego.
        """
        self._require_customer(customer_id)

        try:
            if payload.is_default:
                cleared = self.repo.clear_defaults(customer_id, payload.type)
                if cleared:
                    logger.info(
                        f"Cleared {cleared} default {payload.type.value} address(es) "
                        f"for customer {customer_id}"
                    )

            address = self.repo.add_address(
                AddressModel(customer_id=customer_id, **payload.model_dump())
            )
            self.repo.commit()
        except Exception:
            self.repo.rollback()
            raise

        logger.info(f"Address {address.id} ({payload.type.value}) created for customer {customer_id}")
        return address

    def get_customer_addresses(self, customer_id: int) -> list[AddressModel]:
        self._require_customer(customer_id)
        return self.repo.list_for_customer(customer_id)
