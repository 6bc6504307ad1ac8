# storefront/api/routers/variants.py
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from storefront.api.deps import http_error
from storefront.data.database import get_db
from storefront.domain.schemas import (
    ProductVariantCreate,
    ProductVariantOut,
    ProductVariantUpdate,
    StockCheckOut,
)
from storefront.services.catalog_service import CatalogService

router = APIRouter(prefix="/variants", tags=["variants"])


@router.post("/", response_model=ProductVariantOut, status_code=201)
def create_product_variant(payload: ProductVariantCreate, db: Session = Depends(get_db)):
    try:
        return CatalogService(db).create_product_variant(payload)
    except ValueError as e:
        raise http_error(e)


@router.patch("/{variant_id}", response_model=ProductVariantOut)
def update_product_variant(variant_id: int, payload: ProductVariantUpdate, db: Session = Depends(get_db)):
    """Restock albo zmiana ceny/SKU wariantu."""
    try:
        return CatalogService(db).update_product_variant(variant_id, payload)
    except ValueError as e:
        raise http_error(e)


@router.get("/{variant_id}/stock", response_model=StockCheckOut)
def check_variant_stock(
    variant_id: int,
    quantity: int = Query(..., gt=0),
    db: Session = Depends(get_db),
):
    try:
        available = CatalogService(db).check_variant_stock(variant_id, quantity)
    except ValueError as e:
        raise http_error(e)
    return {"variant_id": variant_id, "quantity": quantity, "available": available}
