# storefront/data/models/category.py
from sqlalchemy import Column, String

from storefront.data.database import Base
from storefront.data.models._ids import new_id


class CategoryModel(Base):
    __tablename__ = "categories"

    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(String, nullable=False)
    slug = Column(String, nullable=False, unique=True)
    type = Column(String(20), nullable=False, default="supermarket")  # supermarket, snacks
