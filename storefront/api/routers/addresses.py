# storefront/api/routers/addresses.py
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from storefront.api.deps import CallerContext, get_caller, http_error
from storefront.data.database import get_db
from storefront.domain.schemas import AddressCreate, AddressOut
from storefront.services.address_service import AddressService

router = APIRouter(prefix="/addresses", tags=["addresses"])


@router.post("/", response_model=AddressOut, status_code=201)
def create_address(
    payload: AddressCreate,
    caller: CallerContext = Depends(get_caller),
    db: Session = Depends(get_db),
):
    try:
        return AddressService(db).create_address(caller.customer_id, payload)
    except ValueError as e:
        raise http_error(e)


@router.get("/", response_model=List[AddressOut])
def get_customer_addresses(
    caller: CallerContext = Depends(get_caller),
    db: Session = Depends(get_db),
):
    try:
        return AddressService(db).get_customer_addresses(caller.customer_id)
    except ValueError as e:
        raise http_error(e)
