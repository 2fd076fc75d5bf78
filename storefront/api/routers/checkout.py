# storefront/api/routers/checkout.py
from datetime import date, datetime
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from storefront.api.deps import get_cart_store, get_notifier, get_session_context
from storefront.data.database import get_db
from storefront.domain.checkout import CheckoutState
from storefront.domain.delivery import available_delivery_dates, time_slots_for
from storefront.domain.errors import CheckoutValidationError, OrderPersistenceError
from storefront.domain.schemas import CheckoutIn, CheckoutOut, TimeSlotsOut
from storefront.services.cart_store import CartStore
from storefront.services.checkout_service import CheckoutService
from storefront.services.notification_service import NotificationService
from storefront.services.session import SessionContext

router = APIRouter(prefix="/checkout", tags=["checkout"])


def _now() -> datetime:
    return datetime.now().astimezone()


@router.get("/delivery-dates", response_model=List[date])
def delivery_dates():
    return available_delivery_dates(_now())


@router.get("/time-slots", response_model=TimeSlotsOut)
def time_slots(day: date = Query(..., alias="date")):
    return time_slots_for(day, _now())


@router.post("/{session_id}", response_model=CheckoutOut, status_code=201)
def submit_order(
    session_id: str,
    payload: CheckoutIn,
    db: Session = Depends(get_db),
    store: CartStore = Depends(get_cart_store),
    notifier: NotificationService = Depends(get_notifier),
    ctx: SessionContext = Depends(get_session_context),
):
    """
    Validates the form, stores order + lines and fires the webhook.
    The cart is cleared only when the order was fully stored.
    """
    svc = CheckoutService(db, store, notifier)
    try:
        return svc.submit(session_id, payload, _now(), ctx)
    except PermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))
    except CheckoutValidationError as e:
        raise HTTPException(
            status_code=422,
            detail={"state": CheckoutState.COLLECTING.value, "missing": e.missing, "messages": e.messages},
        )
    except OrderPersistenceError as e:
        raise HTTPException(
            status_code=502,
            detail={
                "state": CheckoutState.FAILED.value,
                "message": str(e),
                "order_id": e.order_id,
                "partial": e.partial,
            },
        )
