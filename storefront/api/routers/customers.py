# storefront/api/routers/customers.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from storefront.api.deps import http_error
from storefront.data.database import get_db
from storefront.domain.schemas import CustomerCreate, CustomerOut
from storefront.services.customer_service import CustomerService

router = APIRouter(prefix="/customers", tags=["customers"])


@router.post("/", response_model=CustomerOut, status_code=201)
def create_customer(payload: CustomerCreate, db: Session = Depends(get_db)):
    service = CustomerService(db)
    try:
        return service.create_customer(payload)
    except ValueError as e:
        raise http_error(e)


@router.get("/{customer_id}", response_model=CustomerOut)
def get_customer(customer_id: int, db: Session = Depends(get_db)):
    service = CustomerService(db)
    try:
        return service.get_customer(customer_id)
    except ValueError as e:
        raise http_error(e)
