# storefront/data/models/product.py
from sqlalchemy import Column, String, Integer, Numeric, Text, ForeignKey, JSON
from sqlalchemy.orm import relationship

from storefront.data.database import Base
from storefront.data.models._ids import new_id


class ProductModel(Base):
    __tablename__ = "products"

    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    price = Column(Numeric(10, 2), nullable=False)
    image_url = Column(String, nullable=True)
    unit = Column(String(20), nullable=False, default="un")
    stock = Column(Integer, nullable=False, default=0)
    category_id = Column(String(36), ForeignKey("categories.id", ondelete="SET NULL"), nullable=True)

    # default components of composable products (hot dog etc.)
    ingredients = Column(JSON, nullable=False, default=list)

    category = relationship("CategoryModel")
