# storefront/repos/order_repo.py
from typing import List

from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from storefront.data.models.order import OrderModel
from storefront.data.models.order_item import OrderItemModel


class OrderRepo:
    def __init__(self, db: Session):
        self.db = db

    def create_order(self, order: OrderModel) -> OrderModel:
        self.db.add(order)
        self.db.commit()
        self.db.refresh(order)
        return order

    def add_items(self, items: List[OrderItemModel]) -> List[OrderItemModel]:
        # one insert for all lines, separate from the header commit
        try:
            self.db.add_all(items)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        return items

    def get_order(self, order_id: str) -> OrderModel | None:
        return self.db.get(OrderModel, order_id)

    def list_orders(self) -> List[OrderModel]:
        stmt = (
            select(OrderModel)
            .options(selectinload(OrderModel.items))
            .order_by(OrderModel.created_at.desc())
        )
        return list(self.db.execute(stmt).scalars().all())

    def list_by_phone(self, phone: str, limit: int | None = None) -> List[OrderModel]:
        stmt = (
            select(OrderModel)
            .where(OrderModel.customer_phone == phone)
            .order_by(OrderModel.created_at.desc())
        )
        if limit:
            stmt = stmt.limit(limit)
        return list(self.db.execute(stmt).scalars().all())

    def list_by_email(self, email: str) -> List[OrderModel]:
        stmt = (
            select(OrderModel)
            .where(OrderModel.customer_email == email)
            .order_by(OrderModel.created_at.desc())
        )
        return list(self.db.execute(stmt).scalars().all())

    def update_order_status(self, order_id: str, status: str) -> OrderModel | None:
        order = self.get_order(order_id)
        if order:
            order.status = status
            self.db.commit()
            self.db.refresh(order)
        return order
