# storefront/api/routers/orders.py
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from storefront.api.deps import CallerContext, get_caller, http_error
from storefront.data.database import get_db
from storefront.domain.schemas import OrderCreate, OrderOut, OrderStatusUpdate, OrderWithItemsOut
from storefront.services.order_service import OrderService

router = APIRouter(prefix="/orders", tags=["orders"])


def get_service(db: Session):
    return OrderService(db)


@router.post("/", response_model=OrderWithItemsOut, status_code=201)
def create_order(
    payload: OrderCreate,
    caller: CallerContext = Depends(get_caller),
    db: Session = Depends(get_db),
):
    """
    Tworzy zamówienie z koszyka klienta.
    Stany magazynowe i koszyk zmieniane w tej samej transakcji.
    """
    try:
        return get_service(db).create_order(caller.customer_id, payload)
    except ValueError as e:
        raise http_error(e)


@router.get("/", response_model=List[OrderWithItemsOut])
def get_customer_orders(
    caller: CallerContext = Depends(get_caller),
    db: Session = Depends(get_db),
):
    return get_service(db).get_customer_orders(caller.customer_id)


@router.get("/all", response_model=List[OrderWithItemsOut])
def get_all_orders(db: Session = Depends(get_db)):
    """Lista wszystkich zamówień (admin)."""
    return get_service(db).get_all_orders()


@router.get("/{order_id}", response_model=OrderWithItemsOut)
def get_order(
    order_id: int,
    caller: CallerContext = Depends(get_caller),
    db: Session = Depends(get_db),
):
    try:
        return get_service(db).get_order(order_id, caller.customer_id)
    except (PermissionError, ValueError) as e:
        raise http_error(e)


@router.patch("/{order_id}/status", response_model=OrderOut)
def update_order_status(
    order_id: int,
    payload: OrderStatusUpdate,
    db: Session = Depends(get_db),
):
    try:
        return get_service(db).update_order_status(order_id, payload.status)
    except ValueError as e:
        raise http_error(e)
