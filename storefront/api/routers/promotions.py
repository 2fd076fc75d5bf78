# storefront/api/routers/promotions.py
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from storefront.api.deps import get_cart_store
from storefront.data.database import get_db
from storefront.domain.schemas import BannerOut, PromotionOut
from storefront.services.cart_store import CartStore
from storefront.services.promotion_service import PromotionService

router = APIRouter(prefix="/promotions", tags=["promotions"])


@router.get("/", response_model=List[PromotionOut])
def list_promotions(db: Session = Depends(get_db)):
    """Active promotions inside their validity window, newest first."""
    return PromotionService(db).list_current()


@router.get("/banner/{session_id}", response_model=BannerOut)
def banner_state(
    session_id: str,
    db: Session = Depends(get_db),
    store: CartStore = Depends(get_cart_store),
):
    return {"dismissed": PromotionService(db, store).banner_dismissed(session_id)}


@router.post("/banner/{session_id}/dismiss", response_model=BannerOut)
def dismiss_banner(
    session_id: str,
    db: Session = Depends(get_db),
    store: CartStore = Depends(get_cart_store),
):
    return {"dismissed": PromotionService(db, store).dismiss_banner(session_id)}
