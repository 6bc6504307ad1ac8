# storefront/api/routers/products.py
from typing import List

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from storefront.api.deps import http_error
from storefront.data.database import get_db
from storefront.domain.schemas import (
    ProductCreate,
    ProductUpdate,
    ProductVariantOut,
    ProductWithVariantsOut,
)
from storefront.services.catalog_service import CatalogService

router = APIRouter(prefix="/products", tags=["products"])


def get_service(db: Session):
    return CatalogService(db)


@router.post("/", response_model=ProductWithVariantsOut, status_code=201)
def create_product(payload: ProductCreate, db: Session = Depends(get_db)):
    return get_service(db).create_product(payload)


@router.get("/", response_model=List[ProductWithVariantsOut])
def get_products(db: Session = Depends(get_db)):
    """Aktywne produkty z wariantami."""
    return get_service(db).get_products()


# ścieżki stałe przed /{product_id}
@router.get("/search", response_model=List[ProductWithVariantsOut])
def search_products(query: str = Query(..., min_length=1), db: Session = Depends(get_db)):
    return get_service(db).search_products(query)


@router.get("/featured", response_model=List[ProductWithVariantsOut])
def get_featured_products(db: Session = Depends(get_db)):
    return get_service(db).get_featured_products()


@router.get("/category/{category}", response_model=List[ProductWithVariantsOut])
def get_products_by_category(category: str, db: Session = Depends(get_db)):
    return get_service(db).get_products_by_category(category)


@router.get("/brand/{brand}", response_model=List[ProductWithVariantsOut])
def get_products_by_brand(brand: str, db: Session = Depends(get_db)):
    return get_service(db).get_products_by_brand(brand)


@router.get("/{product_id}", response_model=ProductWithVariantsOut)
def get_product(product_id: int, db: Session = Depends(get_db)):
    try:
        return get_service(db).get_product(product_id)
    except ValueError as e:
        raise http_error(e)


@router.patch("/{product_id}", response_model=ProductWithVariantsOut)
def update_product(product_id: int, payload: ProductUpdate, db: Session = Depends(get_db)):
    try:
        return get_service(db).update_product(product_id, payload)
    except ValueError as e:
        raise http_error(e)


@router.get("/{product_id}/variants", response_model=List[ProductVariantOut])
def get_product_variants(product_id: int, db: Session = Depends(get_db)):
    return get_service(db).get_product_variants(product_id)
