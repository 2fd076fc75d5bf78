# storefront/api/deps.py
from fastapi import Depends, Header
from sqlalchemy.orm import Session

from storefront.data.database import get_db
from storefront.services.cart_store import CartStore
from storefront.services.notification_service import NotificationService
from storefront.services.session import SessionContext, SessionManager

_cart_store: CartStore | None = None


def get_cart_store() -> CartStore:
    global _cart_store
    if _cart_store is None:
        _cart_store = CartStore()
    return _cart_store


def get_notifier() -> NotificationService:
    return NotificationService()


def get_session_context(
    x_user_id: str | None = Header(None),
    x_user_email: str | None = Header(None),
    db: Session = Depends(get_db),
) -> SessionContext:
    # identity headers are set by the auth gateway in front of the service
    if not x_user_id:
        return SessionContext()
    return SessionManager(db).sign_in(x_user_id, x_user_email)
