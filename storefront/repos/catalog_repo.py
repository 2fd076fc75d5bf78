# storefront/repos/catalog_repo.py
from typing import Dict, Iterable, List

from sqlalchemy import or_, select
from sqlalchemy.orm import Session

from storefront.data.models.category import CategoryModel
from storefront.data.models.product import ProductModel


class CatalogRepo:
    def __init__(self, db: Session):
        self.db = db

    # categories
    def list_categories(self, category_type: str | None = None) -> List[CategoryModel]:
        stmt = select(CategoryModel).order_by(CategoryModel.name)
        if category_type:
            stmt = stmt.where(CategoryModel.type == category_type)
        return list(self.db.execute(stmt).scalars().all())

    def get_category(self, category_id: str) -> CategoryModel | None:
        return self.db.get(CategoryModel, category_id)

    # products
    def list_products(
        self,
        category_id: str | None = None,
        category_type: str | None = None,
        search: str | None = None,
    ) -> List[ProductModel]:
        stmt = select(ProductModel).order_by(ProductModel.name)

        if category_id:
            stmt = stmt.where(ProductModel.category_id == category_id)

        if category_type:
            stmt = stmt.outerjoin(CategoryModel, ProductModel.category_id == CategoryModel.id)
            if category_type == "supermarket":
                # uncategorized products show up in the market tab
                stmt = stmt.where(
                    or_(CategoryModel.type == category_type, ProductModel.category_id.is_(None))
                )
            else:
                stmt = stmt.where(CategoryModel.type == category_type)

        if search:
            stmt = stmt.where(ProductModel.name.ilike(f"%{search.strip()}%"))

        return list(self.db.execute(stmt).scalars().all())

    def get_product(self, product_id: str) -> ProductModel | None:
        return self.db.get(ProductModel, product_id)

    def product_names(self, product_ids: Iterable[str]) -> Dict[str, str]:
        ids = set(product_ids)
        if not ids:
            return {}
        rows = self.db.execute(
            select(ProductModel.id, ProductModel.name).where(ProductModel.id.in_(ids))
        ).all()
        return {row.id: row.name for row in rows}

    # writes (admin)
    def add(self, obj):
        self.db.add(obj)
        self.db.commit()
        self.db.refresh(obj)
        return obj

    def update(self, obj, data: dict):
        for field, value in data.items():
            setattr(obj, field, value)
        self.db.commit()
        self.db.refresh(obj)
        return obj

    def delete(self, obj):
        self.db.delete(obj)
        self.db.commit()
