# storefront/services/order_status_service.py
from typing import Any, Dict, List

from sqlalchemy.orm import Session

from storefront.data.models.order import OrderModel
from storefront.domain.order_status import present_status
from storefront.repos.catalog_repo import CatalogRepo
from storefront.repos.order_repo import OrderRepo
from storefront.services.session import SessionContext
from storefront.utils.settings import ORDER_HISTORY_LIMIT


def order_to_dict(order: OrderModel, product_names: Dict[str, str] | None = None, with_items: bool = False) -> Dict[str, Any]:
    data = {
        "id": order.id,
        "customer_name": order.customer_name,
        "customer_email": order.customer_email,
        "customer_phone": order.customer_phone,
        "customer_address": order.customer_address,
        "order_type": order.order_type,
        "payment_method": order.payment_method,
        "scheduled_date": order.scheduled_date,
        "scheduled_time": order.scheduled_time,
        "status": order.status,
        "status_info": present_status(order.status),
        "total": order.total,
        "created_at": order.created_at,
        "items": [],
    }
    if with_items:
        names = product_names or {}
        data["items"] = [
            {
                "id": item.id,
                "product_id": item.product_id,
                "name": names.get(item.product_id),
                "quantity": item.quantity,
                "price": item.price,
            }
            for item in order.items
        ]
    return data


class OrderStatusService:
    """Read-only order history for a customer (by phone or account email)."""

    def __init__(self, db: Session):
        self.repo = OrderRepo(db)

    def orders_for_phone(self, phone: str, limit: int = ORDER_HISTORY_LIMIT) -> List[Dict[str, Any]]:
        return [order_to_dict(o) for o in self.repo.list_by_phone(phone, limit=limit)]

    def orders_for_email(self, email: str) -> List[Dict[str, Any]]:
        return [order_to_dict(o) for o in self.repo.list_by_email(email)]

    def orders_for_session(self, ctx: SessionContext) -> List[Dict[str, Any]]:
        ctx.require_approved()
        if ctx.phone:
            return self.orders_for_phone(ctx.phone)
        if ctx.email:
            return self.orders_for_email(ctx.email)
        return []

    def lookup(self, ctx: SessionContext, phone: str | None = None, email: str | None = None) -> List[Dict[str, Any]]:
        """Orders by phone or email; customers may only look up their own."""
        if not ctx.is_admin:
            ctx.require_approved()
            if (phone and phone != ctx.phone) or (email and email != ctx.email):
                raise PermissionError("Você só pode consultar os seus próprios pedidos.")

        if phone:
            return self.orders_for_phone(phone)
        if email:
            return self.orders_for_email(email)
        raise ValueError("Informe telefone ou e-mail")


def orders_with_items(db: Session, orders: List[OrderModel]) -> List[Dict[str, Any]]:
    product_ids = {item.product_id for o in orders for item in o.items}
    names = CatalogRepo(db).product_names(product_ids)
    return [order_to_dict(o, names, with_items=True) for o in orders]
