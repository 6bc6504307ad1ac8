# storefront/api/routers/carts.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from storefront.api.deps import CallerContext, get_caller, http_error
from storefront.data.database import get_db
from storefront.domain.schemas import CartItemIn, CartItemUpdate, CartOut
from storefront.services.cart_service import CartService

router = APIRouter(prefix="/cart", tags=["cart"])


def get_service(db: Session):
    return CartService(db)


@router.get("/", response_model=CartOut)
def get_customer_cart(
    caller: CallerContext = Depends(get_caller),
    db: Session = Depends(get_db),
):
    try:
        return get_service(db).get_customer_cart(caller.customer_id)
    except ValueError as e:
        raise http_error(e)


@router.post("/items", response_model=CartOut)
def add_to_cart(
    payload: CartItemIn,
    caller: CallerContext = Depends(get_caller),
    db: Session = Depends(get_db),
):
    try:
        return get_service(db).add_to_cart(
            customer_id=caller.customer_id,
            variant_id=payload.product_variant_id,
            quantity=payload.quantity,
        )
    except ValueError as e:
        raise http_error(e)


@router.patch("/items/{item_id}", response_model=CartOut)
def update_cart_item_quantity(
    item_id: int,
    payload: CartItemUpdate,
    caller: CallerContext = Depends(get_caller),
    db: Session = Depends(get_db),
):
    try:
        return get_service(db).update_cart_item_quantity(caller.customer_id, item_id, payload.quantity)
    except (PermissionError, ValueError) as e:
        raise http_error(e)


@router.delete("/items/{item_id}", response_model=CartOut)
def remove_from_cart(
    item_id: int,
    caller: CallerContext = Depends(get_caller),
    db: Session = Depends(get_db),
):
    try:
        return get_service(db).remove_from_cart(caller.customer_id, item_id)
    except (PermissionError, ValueError) as e:
        raise http_error(e)
