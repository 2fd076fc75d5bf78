# storefront/data/models/promotion.py
from datetime import datetime, timezone

from sqlalchemy import Column, String, Integer, Numeric, Text, Boolean, DateTime, ForeignKey
from sqlalchemy.orm import relationship

from storefront.data.database import Base
from storefront.data.models._ids import new_id


class PromotionModel(Base):
    """
    Flat row as stored remotely. Bundle vs percentage is decided by product_id,
    see storefront.domain.promotions for the typed view.
    """

    __tablename__ = "promotions"

    id = Column(String(36), primary_key=True, default=new_id)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    image_url = Column(String, nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)
    start_date = Column(DateTime(timezone=True), nullable=True)
    end_date = Column(DateTime(timezone=True), nullable=True)

    product_id = Column(String(36), ForeignKey("products.id", ondelete="CASCADE"), nullable=True)
    special_price = Column(Numeric(10, 2), nullable=True)
    quantity = Column(Integer, nullable=True)
    discount_percentage = Column(Integer, nullable=True)

    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))

    product = relationship("ProductModel")
