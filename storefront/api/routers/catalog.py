# storefront/api/routers/catalog.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from storefront.data.database import get_db
from storefront.domain.errors import NotFoundError
from storefront.domain.schemas import CategoryOut, CategoryType, ProductOut
from storefront.services.catalog_service import CatalogService

router = APIRouter(tags=["catalog"])


@router.get("/categories", response_model=List[CategoryOut])
def list_categories(
    type: CategoryType | None = Query(None),
    db: Session = Depends(get_db),
):
    svc = CatalogService(db)
    return svc.list_categories(type.value if type else None)


@router.get("/products", response_model=List[ProductOut])
def list_products(
    category_id: str | None = Query(None),
    type: CategoryType | None = Query(None),
    search: str | None = Query(None, max_length=100),
    db: Session = Depends(get_db),
):
    svc = CatalogService(db)
    return svc.list_products(
        category_id=category_id,
        category_type=type.value if type else None,
        search=search,
    )


@router.get("/products/{product_id}", response_model=ProductOut)
def get_product(product_id: str, db: Session = Depends(get_db)):
    svc = CatalogService(db)
    try:
        return svc.get_product(product_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
