# storefront/api/routers/orders.py
from typing import List

from fastapi import APIRouter, Depends, Header, HTTPException, Query
from sqlalchemy.orm import Session

from storefront.api.deps import get_session_context
from storefront.data.database import get_db
from storefront.domain.errors import NotAuthenticatedError
from storefront.domain.schemas import OrderOut, SessionOut
from storefront.services.order_status_service import OrderStatusService
from storefront.services.session import SessionContext, SessionManager

router = APIRouter(tags=["orders"])


def _session_dict(ctx: SessionContext):
    return {
        "authenticated": ctx.authenticated,
        "user_id": ctx.user_id,
        "email": ctx.email,
        "phone": ctx.phone,
        "full_name": ctx.full_name,
        "is_admin": ctx.is_admin,
        "approved": ctx.approved,
    }


@router.get("/session", response_model=SessionOut)
def current_session(ctx: SessionContext = Depends(get_session_context)):
    return _session_dict(ctx)


@router.post("/session/sign-out", response_model=SessionOut)
def sign_out(
    x_user_id: str | None = Header(None),
    db: Session = Depends(get_db),
):
    if not x_user_id:
        return _session_dict(SessionContext())
    return _session_dict(SessionManager(db).sign_out(x_user_id))


@router.get("/orders/mine", response_model=List[OrderOut])
def my_orders(
    db: Session = Depends(get_db),
    ctx: SessionContext = Depends(get_session_context),
):
    """
    Orders of the signed-in customer, matched by the profile phone
    (latest ORDER_HISTORY_LIMIT) or by account email.
    """
    try:
        return OrderStatusService(db).orders_for_session(ctx)
    except NotAuthenticatedError as e:
        raise HTTPException(status_code=401, detail=str(e))
    except PermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))


@router.get("/orders", response_model=List[OrderOut])
def lookup_orders(
    phone: str | None = Query(None, min_length=1),
    email: str | None = Query(None, min_length=1),
    db: Session = Depends(get_db),
    ctx: SessionContext = Depends(get_session_context),
):
    try:
        return OrderStatusService(db).lookup(ctx, phone=phone, email=email)
    except NotAuthenticatedError as e:
        raise HTTPException(status_code=401, detail=str(e))
    except PermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
