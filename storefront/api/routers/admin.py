# storefront/api/routers/admin.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from storefront.api.deps import get_session_context
from storefront.data.database import get_db
from storefront.domain.errors import NotAuthenticatedError, NotFoundError
from storefront.domain.promotions import Promotion
from storefront.domain.schemas import (
    CategoryIn,
    CategoryOut,
    OrderOut,
    OrderStatusUpdateIn,
    ProductIn,
    ProductOut,
    ProfileOut,
    PromotionOut,
)
from storefront.services.admin_service import AdminService
from storefront.services.session import SessionContext

router = APIRouter(prefix="/admin", tags=["admin"])


def get_service(
    db: Session = Depends(get_db),
    ctx: SessionContext = Depends(get_session_context),
) -> AdminService:
    return AdminService(db, ctx)


def _run(fn, *args):
    try:
        return fn(*args)
    except NotAuthenticatedError as e:
        raise HTTPException(status_code=401, detail=str(e))
    except PermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except IntegrityError as e:
        raise HTTPException(status_code=409, detail=str(e.orig))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


# products
@router.post("/products", response_model=ProductOut, status_code=201)
def create_product(payload: ProductIn, svc: AdminService = Depends(get_service)):
    return _run(svc.create_product, payload)


@router.put("/products/{product_id}", response_model=ProductOut)
def update_product(product_id: str, payload: ProductIn, svc: AdminService = Depends(get_service)):
    return _run(svc.update_product, product_id, payload)


@router.delete("/products/{product_id}", status_code=204)
def delete_product(product_id: str, svc: AdminService = Depends(get_service)):
    _run(svc.delete_product, product_id)
    return Response(status_code=204)


# categories
@router.post("/categories", response_model=CategoryOut, status_code=201)
def create_category(payload: CategoryIn, svc: AdminService = Depends(get_service)):
    return _run(svc.create_category, payload)


@router.put("/categories/{category_id}", response_model=CategoryOut)
def update_category(category_id: str, payload: CategoryIn, svc: AdminService = Depends(get_service)):
    return _run(svc.update_category, category_id, payload)


@router.delete("/categories/{category_id}", status_code=204)
def delete_category(category_id: str, svc: AdminService = Depends(get_service)):
    _run(svc.delete_category, category_id)
    return Response(status_code=204)


# promotions
@router.get("/promotions", response_model=List[PromotionOut])
def list_promotions(svc: AdminService = Depends(get_service)):
    return _run(svc.list_promotions)


@router.post("/promotions", response_model=PromotionOut, status_code=201)
def create_promotion(payload: Promotion, svc: AdminService = Depends(get_service)):
    return _run(svc.create_promotion, payload)


@router.put("/promotions/{promotion_id}", response_model=PromotionOut)
def update_promotion(promotion_id: str, payload: Promotion, svc: AdminService = Depends(get_service)):
    return _run(svc.update_promotion, promotion_id, payload)


@router.delete("/promotions/{promotion_id}", status_code=204)
def delete_promotion(promotion_id: str, svc: AdminService = Depends(get_service)):
    _run(svc.delete_promotion, promotion_id)
    return Response(status_code=204)


# orders
@router.get("/orders", response_model=List[OrderOut])
def list_orders(svc: AdminService = Depends(get_service)):
    return _run(svc.list_orders)


@router.patch("/orders/{order_id}/status", response_model=OrderOut)
def update_order_status(order_id: str, payload: OrderStatusUpdateIn, svc: AdminService = Depends(get_service)):
    return _run(svc.update_order_status, order_id, payload.status)


# users
@router.get("/users", response_model=List[ProfileOut])
def list_users(svc: AdminService = Depends(get_service)):
    return _run(svc.list_profiles)


@router.post("/users/{profile_id}/toggle-approval", response_model=ProfileOut)
def toggle_approval(profile_id: str, svc: AdminService = Depends(get_service)):
    return _run(svc.toggle_approval, profile_id)
