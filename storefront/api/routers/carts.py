# storefront/api/routers/carts.py
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from storefront.api.deps import get_cart_store
from storefront.data.database import get_db
from storefront.domain.errors import NotFoundError
from storefront.domain.schemas import CartAddIn, CartOut, CartQuantityIn
from storefront.services.cart_service import CartService
from storefront.services.cart_store import CartStore

router = APIRouter(prefix="/carts", tags=["carts"])


def get_service(db: Session, store: CartStore):
    return CartService(db=db, cart_store=store)


@router.get("/{session_id}", response_model=CartOut)
def get_cart(
    session_id: str,
    db: Session = Depends(get_db),
    store: CartStore = Depends(get_cart_store),
):
    return get_service(db, store).get_cart(session_id)


@router.post("/{session_id}/items", response_model=CartOut)
def add_item(
    session_id: str,
    payload: CartAddIn,
    db: Session = Depends(get_db),
    store: CartStore = Depends(get_cart_store),
):
    svc = get_service(db, store)
    try:
        return svc.add_product(
            session_id=session_id,
            product_id=payload.product_id,
            quantity=payload.quantity,
            ingredients=payload.ingredients,
            note=payload.note,
        )
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/{session_id}/promotions/{promotion_id}", response_model=CartOut)
def add_promotion(
    session_id: str,
    promotion_id: str,
    db: Session = Depends(get_db),
    store: CartStore = Depends(get_cart_store),
):
    svc = get_service(db, store)
    try:
        return svc.add_promotion(session_id, promotion_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.patch("/{session_id}/items/{line_id}", response_model=CartOut)
def update_quantity(
    session_id: str,
    line_id: str,
    payload: CartQuantityIn,
    db: Session = Depends(get_db),
    store: CartStore = Depends(get_cart_store),
):
    svc = get_service(db, store)
    try:
        return svc.update_quantity(session_id, line_id, payload.quantity)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.delete("/{session_id}/items/{line_id}", response_model=CartOut)
def remove_item(
    session_id: str,
    line_id: str,
    db: Session = Depends(get_db),
    store: CartStore = Depends(get_cart_store),
):
    return get_service(db, store).remove_line(session_id, line_id)


@router.delete("/{session_id}", response_model=CartOut)
def clear_cart(
    session_id: str,
    db: Session = Depends(get_db),
    store: CartStore = Depends(get_cart_store),
):
    return get_service(db, store).clear(session_id)
