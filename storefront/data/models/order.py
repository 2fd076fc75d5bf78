# storefront/data/models/order.py
from datetime import datetime, timezone

from sqlalchemy import Column, String, DateTime, Date, Numeric, Text
from sqlalchemy.orm import relationship

from storefront.data.database import Base
from storefront.data.models._ids import new_id


class OrderModel(Base):
    __tablename__ = "orders"

    id = Column(String(36), primary_key=True, default=new_id)

    customer_name = Column(String, nullable=True)
    customer_email = Column(String, nullable=True, index=True)
    customer_phone = Column(String, nullable=True, index=True)
    customer_address = Column(Text, nullable=True)
    customer_complement = Column(String, nullable=True)

    order_type = Column(String(20), nullable=False, default="delivery")
    payment_method = Column(String(20), nullable=False)
    scheduled_date = Column(Date, nullable=True)
    scheduled_time = Column(String(5), nullable=True)

    status = Column(String(30), nullable=False, default="pending")
    total = Column(Numeric(10, 2), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))

    items = relationship("OrderItemModel", back_populates="order", cascade="all, delete-orphan")
